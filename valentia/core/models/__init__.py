from valentia.core.models.application import APPLICATION_STATUSES, Application
from valentia.core.models.attachment import Attachment
from valentia.core.models.status_history import StatusHistory

__all__ = [
    "APPLICATION_STATUSES",
    "Application",
    "Attachment",
    "StatusHistory",
]
