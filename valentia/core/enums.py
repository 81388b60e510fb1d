from enum import Enum


class ApplicationStatus(str, Enum):
    pending = "pending"
    under_review = "under_review"
    accepted = "accepted"
    rejected = "rejected"
    waitlisted = "waitlisted"


class AdminRole(str, Enum):
    ADMIN = "admin"
    REVIEWER = "reviewer"


class Language(str, Enum):
    EN = "en"
    ZH = "zh"
    KO = "ko"
    JA = "ja"


class CourseKey(str, Enum):
    ADVANCED = "advanced"
    ENGLISH = "english"
    BASIC = "basic"
