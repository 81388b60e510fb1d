"""
HTML email bodies for contact and application submissions.

Each render_* function returns (subject, html). User supplied text is
autoescaped; multi-line text keeps its line breaks via the nl2br filter.
"""

from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple

from jinja2 import Environment
from markupsafe import Markup, escape

from valentia.services.i18n import (
    ACADEMY_EMAIL,
    ACADEMY_PHONE,
    ACADEMY_WEBSITE,
    SOCIAL_LINKS,
    application_reply_labels,
    contact_reply_labels,
    get_course_info,
    normalize_language,
)


def nl2br(value: Optional[str]) -> Markup:
    if not value:
        return Markup("")
    return Markup("<br>").join(escape(line) for line in str(value).splitlines())


def format_kb(size: int) -> str:
    return f"{(size or 0) / 1024:.1f} KB"


_env = Environment(autoescape=True, trim_blocks=True, lstrip_blocks=True)
_env.filters["nl2br"] = nl2br
_env.filters["kb"] = format_kb


CONTACT_NOTIFICATION = _env.from_string(
    """
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <div style="background: linear-gradient(135deg, #dc2626, #ef4444); color: white; padding: 20px; text-align: center;">
    <h2 style="margin: 0;">New Contact Form Submission</h2>
    <p style="margin: 10px 0 0 0; opacity: 0.9;">Valentia Cabin Crew Academy Website</p>
  </div>
  <div style="padding: 30px; background: #ffffff; border: 1px solid #e5e7eb;">
    <table style="width: 100%; border-collapse: collapse;">
      {% for label, value in rows %}
      <tr>
        <td style="padding: 12px; background: #f9fafb; border: 1px solid #e5e7eb; font-weight: bold; width: 30%;">{{ label }}:</td>
        <td style="padding: 12px; border: 1px solid #e5e7eb;">{{ value }}</td>
      </tr>
      {% endfor %}
    </table>
    <div style="margin-top: 20px;">
      <h3 style="color: #374151; margin-bottom: 10px;">Message:</h3>
      <div style="background: #f3f4f6; padding: 15px; border-radius: 8px; border-left: 4px solid #3b82f6;">
        {{ message|nl2br }}
      </div>
    </div>
    <hr style="border: none; height: 1px; background: #e5e7eb; margin: 30px 0;">
    <p style="text-align: center; color: #6b7280; font-size: 14px; margin: 0;">
      <strong>Submitted:</strong> {{ submitted_at }}<br>
      <strong>Source:</strong> valentiacabincrew.academy website
    </p>
  </div>
</div>
"""
)


CONTACT_AUTO_REPLY = _env.from_string(
    """
<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{{ t.academy }}</title>
</head>
<body style="margin: 0; padding: 0; font-family: Arial, sans-serif; background-color: #f4f4f4;">
  <table width="100%" cellpadding="0" cellspacing="0" style="background-color: #f4f4f4;">
    <tr>
      <td align="center" style="padding: 20px 0;">
        <table width="600" cellpadding="0" cellspacing="0" style="background-color: #ffffff; border-radius: 8px;">
          <tr>
            <td style="background-color: #2c3e50; padding: 40px 30px; text-align: center; border-radius: 8px 8px 0 0;">
              <div style="width: 80px; height: 80px; background-color: #ffffff; border-radius: 50%; margin: 0 auto 20px auto; display: inline-block; line-height: 80px; border: 3px solid #bdc3c7;">
                <span style="font-size: 32px; font-weight: bold; color: #2c3e50;">V</span>
              </div>
              <h1 style="margin: 0; font-size: 28px; font-weight: 300; color: #ffffff; letter-spacing: 2px; text-transform: uppercase;">Valentia</h1>
              <p style="margin: 8px 0 0 0; font-size: 14px; color: #bdc3c7; font-style: italic;">{{ t.subtitle }}</p>
              <p style="margin: 15px 0 0 0; font-size: 12px; color: #95a5a6; text-transform: uppercase;">{{ t.tagline }}</p>
            </td>
          </tr>
          <tr>
            <td style="padding: 40px 30px;">
              <h2 style="color: #2c3e50; margin-bottom: 25px; font-size: 22px; font-weight: 400;">{{ greeting }}</h2>
              <p style="line-height: 1.6; color: #34495e; font-size: 15px; margin-bottom: 20px;">{{ t.intro|safe }}</p>
              <p style="line-height: 1.6; color: #34495e; font-size: 15px; margin-bottom: 30px;">{{ t.promise|safe }}</p>
              <table width="100%" cellpadding="0" cellspacing="0" style="background-color: #f8f9fa; border-left: 4px solid #95a5a6; margin: 30px 0;">
                <tr>
                  <td style="padding: 25px;">
                    <h3 style="color: #2c3e50; margin-top: 0; font-size: 18px; font-weight: 400;">{{ t.inquiry_title }}</h3>
                    <div style="color: #34495e; line-height: 1.6; font-size: 14px; padding: 15px; background-color: #ffffff; border-radius: 6px; border: 1px solid #e5e7eb;">
                      {{ message|nl2br }}
                    </div>
                  </td>
                </tr>
              </table>
              <table width="100%" cellpadding="0" cellspacing="0" style="background-color: #f8f9fa; border-left: 4px solid #95a5a6; margin: 30px 0;">
                <tr>
                  <td style="padding: 25px;">
                    <h3 style="color: #2c3e50; margin-top: 0; font-size: 18px; font-weight: 400;">{{ t.course_title }}</h3>
                    <div style="color: #34495e; line-height: 1.6; font-size: 14px; padding: 15px; background-color: #ffffff; border-radius: 6px; border: 1px solid #e5e7eb;">
                      <strong>{{ course.title }}</strong> ({{ course.duration }}) - {{ course.description }}
                    </div>
                  </td>
                </tr>
              </table>
              <p style="line-height: 1.6; color: #34495e; font-size: 15px; margin-bottom: 35px;">{{ t.explore }}</p>
              <p style="text-align: center;">
                <a href="mailto:{{ academy_email }}" style="text-decoration: none; color: #2c3e50; display: inline-block; padding: 15px 25px; margin: 0 10px; border: 1px solid #bdc3c7; border-radius: 8px; background-color: #f8f9fa;">{{ t.send_email }}</a>
                <a href="{{ academy_website }}" style="text-decoration: none; color: #2c3e50; display: inline-block; padding: 15px 25px; margin: 0 10px; border: 1px solid #bdc3c7; border-radius: 8px; background-color: #f8f9fa;">{{ t.visit_website }}</a>
              </p>
              <p style="color: #7f8c8d; font-size: 13px; text-align: center; font-style: italic;">{{ t.follow }}</p>
              <p style="text-align: center;">
                {% for label, url, color in social_links %}
                <a href="{{ url }}" style="text-decoration: none; display: inline-block; width: 50px; height: 50px; margin: 0 8px; background-color: {{ color }}; border-radius: 12px; line-height: 50px; color: white; font-weight: bold;">{{ label }}</a>
                {% endfor %}
              </p>
            </td>
          </tr>
          <tr>
            <td style="text-align: center; color: #7f8c8d; padding: 30px; border-top: 1px solid #ecf0f1; border-radius: 0 0 8px 8px;">
              <p style="margin: 5px 0; color: #2c3e50;">{{ t.academy }}</p>
              <p style="margin: 5px 0; font-size: 12px; font-style: italic;">{{ t.footer }}</p>
            </td>
          </tr>
        </table>
      </td>
    </tr>
  </table>
</body>
</html>
"""
)


APPLICATION_NOTIFICATION = _env.from_string(
    """
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <div style="background: linear-gradient(135deg, #1e40af 0%, #1e3a8a 100%); color: white; padding: 30px; text-align: center; border-radius: 10px 10px 0 0;">
    <h1 style="margin: 0; font-size: 28px;">New Course Application</h1>
    <p style="margin: 10px 0 0 0; opacity: 0.9;">Valentia Cabin Crew Academy</p>
  </div>
  <div style="padding: 30px; background: #ffffff; border: 1px solid #e5e7eb;">
    <h2 style="color: #1e40af; margin-bottom: 20px;">Application Details</h2>
    <table style="width: 100%; border-collapse: collapse; margin-bottom: 20px;">
      {% for label, value in rows %}
      <tr>
        <td style="padding: 12px; background: #f9fafb; border: 1px solid #e5e7eb; font-weight: bold; width: 30%;">{{ label }}:</td>
        <td style="padding: 12px; border: 1px solid #e5e7eb;">{{ value }}</td>
      </tr>
      {% endfor %}
    </table>
    {% if message %}
    <div style="margin-bottom: 20px;">
      <h3 style="color: #374151; margin-bottom: 10px;">Self Introduction:</h3>
      <div style="background: #f3f4f6; padding: 15px; border-radius: 8px; border-left: 4px solid #3b82f6;">
        {{ message|nl2br }}
      </div>
    </div>
    {% endif %}
    {% if attachments %}
    <div style="margin-bottom: 20px;">
      <h3 style="color: #374151; margin-bottom: 10px;">Attachments ({{ attachments|length }}):</h3>
      <div style="background: #f3f4f6; padding: 15px; border-radius: 8px;">
        {% for name, size in attachments %}
        <div style="margin-bottom: 5px;">{{ name }} ({{ size|kb }})</div>
        {% endfor %}
        <p style="margin-top: 10px; color: #6b7280; font-size: 12px;">
          <strong>Note:</strong> Attachments are included below this email and can be downloaded.
        </p>
      </div>
    </div>
    {% endif %}
    <hr style="border: none; height: 1px; background: #e5e7eb; margin: 30px 0;">
    <p style="text-align: center; color: #6b7280; font-size: 14px; margin: 0;">
      <strong>Submitted:</strong> {{ submitted_at }}<br>
      <strong>Source:</strong> Course Application Form
    </p>
  </div>
</div>
"""
)


APPLICATION_CONFIRMATION = _env.from_string(
    """
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <div style="background: linear-gradient(135deg, #1e40af 0%, #1e3a8a 100%); color: white; padding: 30px; text-align: center; border-radius: 10px 10px 0 0;">
    <h1 style="margin: 0; font-size: 28px;">{{ t.subject }}</h1>
    <p style="margin: 10px 0 0 0; opacity: 0.9;">Valentia Cabin Crew Academy</p>
  </div>
  <div style="padding: 30px; background: #ffffff; border: 1px solid #e5e7eb;">
    <h2 style="color: #1e40af; margin-bottom: 20px;">{{ t.dear }} {{ name }},</h2>
    <p style="color: #374151; line-height: 1.6; margin-bottom: 20px;">
      {{ t.intro_prefix }} <strong>{{ course.title }}</strong> {{ t.intro_suffix }}
    </p>
    <div style="background: #f0f9ff; border: 1px solid #0ea5e9; border-radius: 8px; padding: 20px; margin: 20px 0;">
      <h3 style="color: #0c4a6e; margin: 0 0 15px 0;">{{ t.summary }}</h3>
      {% if reference %}
      <p style="margin: 0; color: #0c4a6e;"><strong>{{ t.reference }}:</strong> {{ reference }}</p>
      {% endif %}
      <p style="margin: 0; color: #0c4a6e;"><strong>{{ t.course }}:</strong> {{ course.title }}</p>
      <p style="margin: 0; color: #0c4a6e;"><strong>{{ t.duration }}:</strong> {{ course.duration }}</p>
      <p style="margin: 0; color: #0c4a6e;"><strong>{{ t.description }}:</strong> {{ course.description }}</p>
    </div>
    {% if attachments %}
    <div style="background: #f3f4f6; border: 1px solid #d1d5db; border-radius: 8px; padding: 20px; margin: 20px 0;">
      <h3 style="color: #374151; margin: 0 0 15px 0;">{{ t.documents_title }}</h3>
      <p style="margin: 0; color: #6b7280; font-size: 14px;">{{ t.documents_text }}</p>
      <div style="margin-top: 10px;">
        {% for name, size in attachments %}
        <div style="margin-bottom: 5px;">{{ name }} ({{ size|kb }})</div>
        {% endfor %}
      </div>
      <p style="margin-top: 10px; color: #6b7280; font-size: 12px;"><strong>{{ t.documents_note_label }}:</strong> {{ t.documents_note }}</p>
    </div>
    {% endif %}
    <h3 style="color: #374151; margin-bottom: 15px;">{{ t.next_title }}</h3>
    <ol style="color: #374151; line-height: 1.6; padding-left: 20px;">
      {% for item in t.next %}
      <li>{{ item }}</li>
      {% endfor %}
    </ol>
    <div style="background: #fef3c7; border: 1px solid #f59e0b; border-radius: 8px; padding: 20px; margin: 20px 0;">
      <h3 style="color: #92400e; margin: 0 0 10px 0;">{{ t.important }}</h3>
      <p style="margin: 0; color: #92400e; font-size: 14px;">{{ t.important_text }}</p>
    </div>
    <hr style="border: none; height: 1px; background: #e5e7eb; margin: 30px 0;">
    <p style="text-align: center; color: #6b7280; font-size: 14px; margin: 0;">
      <strong>{{ t.contact }}:</strong> {{ academy_email }}<br>
      <strong>{{ t.phone }}:</strong> {{ academy_phone }}<br>
      <strong>{{ t.website }}:</strong> {{ academy_website }}
    </p>
  </div>
</div>
"""
)


def _timestamp(submitted_at: Optional[datetime]) -> str:
    return (submitted_at or datetime.now(timezone.utc)).strftime("%Y-%m-%d %H:%M:%S %Z").strip()


def render_contact_notification(
    name: str,
    email: str,
    message: str,
    phone: Optional[str] = None,
    course: Optional[str] = None,
    language: Optional[str] = None,
    submitted_at: Optional[datetime] = None,
) -> Tuple[str, str]:
    rows = [
        ("Name", name),
        ("Email", email),
        ("Phone", phone or "Not provided"),
        ("Course", course or "Not specified"),
        ("Language", language or "en"),
    ]
    html = CONTACT_NOTIFICATION.render(
        rows=rows,
        message=message,
        submitted_at=_timestamp(submitted_at),
    )
    return f"New Contact Form Submission from {name}", html


def render_contact_auto_reply(
    language: Optional[str],
    name: str,
    message: str,
    course: Optional[str] = None,
) -> Tuple[str, str]:
    t = contact_reply_labels(language)
    html = CONTACT_AUTO_REPLY.render(
        t=t,
        greeting=t["greeting"].format(name=name),
        message=message,
        course=get_course_info(language, course),
        academy_email=ACADEMY_EMAIL,
        academy_website=ACADEMY_WEBSITE,
        social_links=SOCIAL_LINKS,
    )
    return t["subject"], html


def render_application_notification(
    *,
    application_id: str,
    name: str,
    email: str,
    phone: str,
    course: str,
    language: str,
    message: Optional[str] = None,
    attachments: Sequence[Tuple[str, int]] = (),
    submitted_at: Optional[datetime] = None,
) -> Tuple[str, str]:
    """Company-side notification. Always rendered in English; course shown in the applicant's language."""
    info = get_course_info(language, course)
    rows: List[Tuple[str, str]] = [
        ("Application ID", application_id),
        ("Name", name),
        ("Email", email),
        ("Phone", phone),
        ("Course", f"{info['title']} ({info['duration']})"),
        ("Language", normalize_language(language)),
    ]
    html = APPLICATION_NOTIFICATION.render(
        rows=rows,
        message=message,
        attachments=list(attachments),
        submitted_at=_timestamp(submitted_at),
    )
    return f"New Course Application: {info['title']}", html


def render_application_confirmation(
    language: Optional[str],
    name: str,
    course: str,
    attachments: Sequence[Tuple[str, int]] = (),
    reference: Optional[str] = None,
) -> Tuple[str, str]:
    t = application_reply_labels(language)
    info = get_course_info(language, course)
    html = APPLICATION_CONFIRMATION.render(
        t=t,
        name=name,
        course=info,
        reference=reference,
        attachments=list(attachments),
        academy_email=ACADEMY_EMAIL,
        academy_phone=ACADEMY_PHONE,
        academy_website=ACADEMY_WEBSITE.replace("https://www.", ""),
    )
    return f"{t['subject']} - {info['title']}", html
