import html
import re
import urllib.parse

from records import UNKNOWN_CANDIDATE, attachment, format_date


def _esc(value) -> str:
    return html.escape(str(value), quote=True)


def whatsapp_link(phone_number: str, name: str) -> str:
    message = f"Happy Birthday, {name}! Wishing you all the best on your special day! 🎉🎂"
    digits = re.sub(r"[^0-9]", "", phone_number or "")
    return f"https://wa.me/{digits}?text={urllib.parse.quote(message)}"


def share_link(public_url: str) -> str:
    return f"{public_url.rstrip('/')}/?view=upload"


def download_filename(record) -> str:
    return f"{attachment(record).name or 'resume'}_resume.pdf"


def generate_resume_card_html(record):
    data = attachment(record)
    role = (data.role or "").strip()
    role_chip = f'<span class="role-chip">{_esc(role)}</span>' if role else ""

    fields = ""
    for icon, value in (
        ("✉️", data.email),
        ("📞", data.contact_number),
        ("🎂", data.date_of_birth),
        ("💼", data.experience),
    ):
        if value:
            fields += f'<div class="field">{icon} {_esc(value)}</div>'

    received = format_date(record.received_at or record.created_at)
    return (
        '<div class="resume-card">'
        f'<div class="name">{_esc(data.name or UNKNOWN_CANDIDATE)}</div>{role_chip}'
        f"{fields}"
        f'<div class="field">🕒 {_esc(received)}</div>'
        "</div>"
    )


def generate_stat_card_html(value, label, css_class=""):
    value_class = f"value {css_class}".strip()
    return (
        '<div class="stat-card">'
        f'<div class="{value_class}">{_esc(value)}</div>'
        f'<div class="label">{_esc(label)}</div>'
        "</div>"
    )


def mailbox_callback_message(params):
    """Map the mailbox-connect redirect query params to (kind, message)."""
    status = params.get("outlook_auth")
    if status == "success" and params.get("email"):
        return "success", f"Outlook account {params.get('email')} connected successfully!"
    if status == "error" and params.get("message"):
        return "error", f"Outlook authentication failed: {params.get('message')}"
    return None
