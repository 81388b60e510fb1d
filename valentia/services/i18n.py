"""
Localized strings for outgoing email and the course catalog.

Languages: en, zh, ko, ja. Anything else falls back to English.
"""

from typing import Dict, Optional

from valentia.core.enums import CourseKey, Language

DEFAULT_LANGUAGE = Language.EN.value
SUPPORTED_LANGUAGES = tuple(lang.value for lang in Language)

ACADEMY_EMAIL = "valentiacabincrew.academy@gmail.com"
ACADEMY_PHONE = "+603-12345678"
ACADEMY_WEBSITE = "https://www.valentiacabincrew.academy"
SOCIAL_LINKS = (
    ("IG", "https://www.instagram.com/jiehao_08/", "#dc2743"),
    ("in", "https://www.linkedin.com/in/jie-hao-tee-4aa753290/", "#0077b5"),
    ("f", "https://www.facebook.com/jie.hao.14/", "#1877f2"),
)


COURSE_INFO: Dict[str, Dict[str, Dict[str, str]]] = {
    "en": {
        "advanced": {
            "title": "Advanced Cabin Crew Diploma",
            "duration": "1 Year",
            "description": "Comprehensive training for international airlines",
        },
        "english": {
            "title": "English Language Proficiency",
            "duration": "6 Months",
            "description": "Aviation English and communication skills",
        },
        "basic": {
            "title": "Basic Cabin Crew Training",
            "duration": "6 Months",
            "description": "Foundation course for aviation career",
        },
    },
    "zh": {
        "advanced": {"title": "高级空乘文凭", "duration": "1年", "description": "国际航空公司综合培训"},
        "english": {"title": "英语语言能力提升", "duration": "6个月", "description": "航空英语和沟通技巧"},
        "basic": {"title": "基础空乘培训", "duration": "6个月", "description": "航空职业基础课程"},
    },
    "ko": {
        "advanced": {"title": "고급 객실승무원 디플로마", "duration": "1년", "description": "국제 항공사 종합 교육"},
        "english": {"title": "영어 능력 향상 과정", "duration": "6개월", "description": "항공 영어 및 커뮤니케이션 기술"},
        "basic": {"title": "기본 객실승무원 교육", "duration": "6개월", "description": "항공 경력 기초 과정"},
    },
    "ja": {
        "advanced": {"title": "上級キャビンクルーディプロマ", "duration": "1年", "description": "国際航空会社向け総合訓練"},
        "english": {"title": "英語能力向上コース", "duration": "6ヶ月", "description": "航空英語とコミュニケーションスキル"},
        "basic": {"title": "基本キャビンクルー訓練", "duration": "6ヶ月", "description": "航空キャリア基礎コース"},
    },
}


# ----- Contact form auto-reply -----

CONTACT_REPLY: Dict[str, Dict[str, str]] = {
    "en": {
        "subject": "Thank you for your inquiry - Valentia Cabin Crew Academy",
        "academy": "Valentia Cabin Crew Academy",
        "subtitle": "Cabin Crew Academy",
        "tagline": "Excellence in Aviation Training",
        "greeting": "Dear {name},",
        "intro": "Thank you for your interest in <strong>Valentia Cabin Crew Academy</strong>. "
        "We are delighted to assist you in pursuing your aviation career aspirations.",
        "promise": "We have received your inquiry and our dedicated team of aviation professionals will review "
        "your request and provide you with comprehensive information within <strong>24 hours</strong>.",
        "inquiry_title": "Your Inquiry",
        "course_title": "Your Selected Course",
        "explore": "While you wait, please explore our website to learn more about our world-class training "
        "facilities, experienced instructors, and successful alumni network.",
        "send_email": "Send Email",
        "visit_website": "Visit Website",
        "follow": "Follow us for the latest updates and aviation industry insights",
        "footer": "Your journey to aviation excellence begins here",
    },
    "zh": {
        "subject": "感谢您的咨询 - Valentia空乘学院",
        "academy": "Valentia空乘学院",
        "subtitle": "空乘学院",
        "tagline": "航空培训卓越典范",
        "greeting": "亲爱的{name}，",
        "intro": "感谢您对<strong>Valentia空乘学院</strong>的关注。我们很荣幸能够协助您追求航空事业理想。",
        "promise": "我们已收到您的咨询，我们的专业航空团队将审核您的需求并在<strong>24小时内</strong>为您提供全面的信息。",
        "inquiry_title": "您的咨询",
        "course_title": "您选择的课程",
        "explore": "在等待我们回复期间，欢迎您浏览我们的网站，了解我们的世界级培训设施、经验丰富的讲师和成功的校友网络。",
        "send_email": "发送邮件",
        "visit_website": "访问网站",
        "follow": "关注我们获取最新资讯和航空业洞察",
        "footer": "您的航空卓越之旅从这里开始",
    },
    "ko": {
        "subject": "문의해 주셔서 감사합니다 - Valentia 객실승무원 아카데미",
        "academy": "Valentia 객실승무원 아카데미",
        "subtitle": "객실승무원 아카데미",
        "tagline": "항공 교육의 우수성",
        "greeting": "친애하는 {name}님,",
        "intro": "<strong>Valentia 객실승무원 아카데미</strong>에 관심을 가져주셔서 감사합니다. "
        "항공 경력 여정을 시작하는 데 도움을 드릴 수 있어 기쁩니다.",
        "promise": "귀하의 문의를 받았으며, 저희 전담 항공 전문가 팀이 귀하의 요청을 검토하고 "
        "<strong>24시간 이내</strong>에 맞춤형 정보를 제공해드릴 것입니다.",
        "inquiry_title": "귀하의 문의",
        "course_title": "선택하신 과정",
        "explore": "기다리는 동안 저희 웹사이트를 탐색하여 세계적 수준의 교육 시설, 경험 많은 강사진, "
        "성공한 동문 네트워크에 대해 더 알아보세요.",
        "send_email": "이메일 보내기",
        "visit_website": "웹사이트 방문",
        "follow": "최신 업데이트와 항공업계 뉴스를 위해 소셜미디어를 팔로우해주세요",
        "footer": "항공 우수성으로 가는 여정이 여기서 시작됩니다",
    },
    "ja": {
        "subject": "お問い合わせありがとうございます - Valentia キャビンクルーアカデミー",
        "academy": "Valentia キャビンクルーアカデミー",
        "subtitle": "キャビンクルーアカデミー",
        "tagline": "航空訓練の卓越性",
        "greeting": "{name}様",
        "intro": "<strong>Valentia キャビンクルーアカデミー</strong>にご興味をお持ちいただき、ありがとうございます。"
        "航空キャリアの旅を始めるお手伝いができることを嬉しく思います。",
        "promise": "お客様のお問い合わせを受信いたしました。当校の専任航空専門家チームがお客様のご要望を検討し、"
        "<strong>24時間以内</strong>にパーソナライズされた詳細情報をご提供いたします。",
        "inquiry_title": "お客様のお問い合わせ",
        "course_title": "お客様が選択されたコース",
        "explore": "お待ちいただいている間、当校のウェブサイトをご覧いただき、世界クラスの訓練施設、"
        "経験豊富な講師陣、成功した卒業生ネットワークについて詳しくご覧ください。",
        "send_email": "メール送信",
        "visit_website": "ウェブサイト訪問",
        "follow": "最新の更新情報と航空業界ニュースについては、ソーシャルメディアをフォローしてください",
        "footer": "航空卓越性への旅がここから始まります",
    },
}


# ----- Application confirmation -----

APPLICATION_REPLY: Dict[str, Dict[str, object]] = {
    "en": {
        "subject": "Application Received",
        "dear": "Dear",
        "intro_prefix": "Thank you for your interest in our",
        "intro_suffix": "program. We have received your application and are excited about your potential "
        "to join our aviation training program.",
        "summary": "Application Summary",
        "reference": "Application ID",
        "course": "Course",
        "duration": "Duration",
        "description": "Description",
        "documents_title": "Your Submitted Documents",
        "documents_text": "We have received the following documents with your application:",
        "documents_note_label": "Note",
        "documents_note": "These documents are included below this email for your reference.",
        "next_title": "What Happens Next?",
        "next": [
            "Our admissions team will review your application within 24 hours",
            "We will contact you via email or phone to discuss next steps",
            "You may be invited for an interview or additional assessment",
            "Upon acceptance, you'll receive detailed enrollment information",
        ],
        "important": "Important Note",
        "important_text": "Please ensure your contact information is correct. If you need to update any "
        "details, please reply to this email or contact us directly.",
        "contact": "Contact",
        "phone": "Phone",
        "website": "Website",
    },
    "zh": {
        "subject": "申请已收到",
        "dear": "尊敬的",
        "intro_prefix": "感谢您对我们",
        "intro_suffix": "项目的关注。我们已收到您的申请，期待您加入我们的航空培训项目。",
        "summary": "申请摘要",
        "reference": "申请编号",
        "course": "课程",
        "duration": "时长",
        "description": "简介",
        "documents_title": "您提交的文件",
        "documents_text": "我们已收到以下随申请提交的文件：",
        "documents_note_label": "备注",
        "documents_note": "以下文件附在本邮件底部以供参考。",
        "next_title": "下一步",
        "next": [
            "招生团队将在24小时内审核您的申请",
            "我们将通过邮箱或电话与您联系，告知下一步",
            "您可能会被邀请参加面试或额外评估",
            "录取后您将收到详细的入学指南",
        ],
        "important": "重要提示",
        "important_text": "请确保您的联系方式正确。如需更新信息，请直接回复此邮件或与我们联系。",
        "contact": "联系邮箱",
        "phone": "电话",
        "website": "网站",
    },
    "ko": {
        "subject": "신청 접수",
        "dear": "안녕하세요",
        "intro_prefix": "다음 프로그램에 관심을 가져 주셔서 감사합니다:",
        "intro_suffix": "프로그램에 지원해 주셔서 감사합니다. 귀하의 지원서를 접수했습니다.",
        "summary": "신청 요약",
        "reference": "신청 번호",
        "course": "코스",
        "duration": "기간",
        "description": "설명",
        "documents_title": "제출하신 문서",
        "documents_text": "아래 문서를 접수했습니다:",
        "documents_note_label": "참고",
        "documents_note": "해당 문서는 이메일 하단에 첨부되어 있습니다.",
        "next_title": "다음 단계",
        "next": [
            "입학팀이 24시간 이내에 지원서를 검토합니다",
            "이메일 또는 전화로 다음 절차를 안내드립니다",
            "면접 또는 추가 평가가 있을 수 있습니다",
            "합격 시 상세 등록 안내를 받게 됩니다",
        ],
        "important": "중요 안내",
        "important_text": "연락처 정보가 정확한지 확인해 주세요. 변경이 필요하면 이 메일에 회신하거나 직접 문의해 주세요.",
        "contact": "이메일",
        "phone": "전화",
        "website": "웹사이트",
    },
    "ja": {
        "subject": "申込受付",
        "dear": "Dear",
        "intro_prefix": "当校の",
        "intro_suffix": "プログラムにご関心をお寄せいただきありがとうございます。お申し込みを受け付けました。",
        "summary": "申込概要",
        "reference": "申込番号",
        "course": "コース",
        "duration": "期間",
        "description": "説明",
        "documents_title": "提出された書類",
        "documents_text": "以下の書類を受領しました。",
        "documents_note_label": "備考",
        "documents_note": "これらの書類は本メールの下部に添付されています。",
        "next_title": "次のステップ",
        "next": [
            "当校のアドミッションチームが24時間以内に申込内容を確認します",
            "メールまたはお電話で次の手順をご案内いたします",
            "面接または追加の評価にご案内する場合があります",
            "合格後、詳細な入学案内をお送りします",
        ],
        "important": "重要なお知らせ",
        "important_text": "ご連絡先が正しいかご確認ください。修正が必要な場合は本メールへご返信いただくか、直接ご連絡ください。",
        "contact": "連絡先",
        "phone": "電話",
        "website": "ウェブサイト",
    },
}


def normalize_language(value: Optional[str]) -> str:
    """Lower-case a language code; unsupported or empty values become the default."""
    code = (value or "").strip().lower()
    return code if code in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE


def resolve_language(accept_language: Optional[str], form_language: Optional[str]) -> str:
    """
    Pick the display language for a submission.
    Priority: 1 Accept-Language header (first two chars), 2 form field, 3 English.
    """
    header_code = (accept_language or "").strip().lower()[:2]
    if header_code in SUPPORTED_LANGUAGES:
        return header_code
    return normalize_language(form_language)


def get_course_info(language: Optional[str], course: Optional[str]) -> Dict[str, str]:
    """Localized title/duration/description. Unknown language -> English; unknown course -> basic."""
    key = (course or "").strip().lower()
    lang = normalize_language(language)
    localized = COURSE_INFO[lang].get(key)
    if localized:
        return localized
    return COURSE_INFO[DEFAULT_LANGUAGE].get(key) or COURSE_INFO[DEFAULT_LANGUAGE][CourseKey.BASIC.value]


def contact_reply_labels(language: Optional[str]) -> Dict[str, str]:
    return CONTACT_REPLY[normalize_language(language)]


def application_reply_labels(language: Optional[str]) -> Dict[str, object]:
    return APPLICATION_REPLY[normalize_language(language)]