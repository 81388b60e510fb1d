from valentia.services.email_templates import (
    nl2br,
    render_application_confirmation,
    render_application_notification,
    render_contact_auto_reply,
    render_contact_notification,
)


def test_nl2br_escapes_before_joining() -> None:
    assert str(nl2br("a < b\nc")) == "a &lt; b<br>c"
    assert str(nl2br(None)) == ""


def test_contact_notification_defaults_for_optional_fields() -> None:
    subject, html = render_contact_notification(
        name="Jamal", email="jamal@example.com", message="Hello"
    )
    assert subject == "New Contact Form Submission from Jamal"
    assert "Not provided" in html
    assert "Not specified" in html


def test_contact_auto_reply_localized() -> None:
    subject, html = render_contact_auto_reply("zh", "王芳", "你好", "english")
    assert subject == "感谢您的咨询 - Valentia空乘学院"
    assert "亲爱的王芳，" in html
    assert "英语语言能力提升" in html


def test_contact_auto_reply_escapes_name() -> None:
    _, html = render_contact_auto_reply("en", "<b>Eve</b>", "hi", None)
    assert "&lt;b&gt;Eve&lt;/b&gt;" in html
    # trusted label markup is kept
    assert "<strong>" in html


def test_application_notification_lists_attachments_in_kb() -> None:
    subject, html = render_application_notification(
        application_id="APP-20250101-123",
        name="Ana",
        email="ana@example.com",
        phone="123",
        course="english",
        language="en",
        message=None,
        attachments=[("cv.pdf", 2048), ("photo.jpg", 1536)],
    )
    assert subject == "New Course Application: English Language Proficiency"
    assert "APP-20250101-123" in html
    assert "cv.pdf (2.0 KB)" in html
    assert "photo.jpg (1.5 KB)" in html
    assert "Self Introduction" not in html


def test_application_confirmation_without_attachments() -> None:
    subject, html = render_application_confirmation("ja", "Yuki", "basic")
    assert subject == "申込受付 - 基本キャビンクルー訓練"
    assert "<ol" in html
    assert "cv.pdf" not in html


def test_application_confirmation_with_attachments() -> None:
    _, html = render_application_confirmation(
        "en", "Sam", "advanced", [("cv.pdf", 1024)], reference="APP-20250101-001"
    )
    assert "cv.pdf (1.0 KB)" in html
    assert "APP-20250101-001" in html
    assert "Advanced Cabin Crew Diploma" in html
