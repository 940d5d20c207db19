"""
Email rendering and delivery using Resend for transactional emails.
"""

import logging
from dataclasses import dataclass
from html import escape
from typing import Optional

import resend

from app.core.config import settings

logger = logging.getLogger(__name__)

CARD_OPEN = """
<div style="font-family:system-ui;background:#fbf6ee;padding:24px;">
  <div style="max-width:640px;margin:0 auto;background:#fffaf2;border:1px solid #e7dccb;border-radius:18px;padding:18px;">
"""
CARD_CLOSE = """
  </div>
</div>
"""


@dataclass
class EmailMessage:
    subject: str
    html: str
    text: str


def render_invite_email(title: str, theme_name: str, theme_blurb: str, invite_url: str) -> EmailMessage:
    html_content = f"""{CARD_OPEN}
    <h2 style="margin:0 0 10px;">🌼 You’ve got a cozy invite</h2>
    <p style="margin:0 0 12px;color:#6b645b;line-height:1.6">
      <strong>{escape(title)}</strong><br/>
      Theme: <strong>{escape(theme_name)}</strong><br/>
      <em>{escape(theme_blurb or "")}</em>
    </p>
    <p style="margin:0 0 14px;line-height:1.6">Tap below to choose a few sweet options.</p>
    <a href="{escape(invite_url)}" style="display:inline-block;background:#7a8f62;color:#fff;text-decoration:none;padding:12px 16px;border-radius:14px;font-weight:700;">
      Choose my cozy picks 🌿
    </a>
    <p style="margin:12px 0 0;color:#6b645b;font-size:12px;">Link: {escape(invite_url)}</p>
{CARD_CLOSE}"""
    return EmailMessage(
        subject=f"A cozy invite: {title} 🌿",
        html=html_content,
        text=f"Cozy invite: {title}\nTheme: {theme_name}\nPick here: {invite_url}",
    )


def render_planner_email(
    title: str,
    theme_name: str,
    invite_url: str,
    dinner: str,
    activity: str,
    mood: str,
    notes: Optional[str] = None,
) -> EmailMessage:
    notes = (notes or "").strip()
    notes_html = f'<p style="margin:12px 0 0;"><strong>Note:</strong> {escape(notes)}</p>' if notes else ""
    notes_text = f"\nNote: {notes}" if notes else ""

    html_content = f"""{CARD_OPEN}
    <h2 style="margin:0 0 10px;">👀 Picks are in</h2>
    <p style="margin:0 0 12px;color:#6b645b;line-height:1.6">
      <strong>{escape(title)}</strong> • Theme: <strong>{escape(theme_name)}</strong>
    </p>
    <ul style="margin:0;padding-left:18px;line-height:1.7">
      <li><strong>Dinner:</strong> {escape(dinner)}</li>
      <li><strong>Activity:</strong> {escape(activity)}</li>
      <li><strong>Mood:</strong> {escape(mood)}</li>
    </ul>
    {notes_html}
    <p style="margin:12px 0 0;color:#6b645b;font-size:12px;">Invite link: {escape(invite_url)}</p>
{CARD_CLOSE}"""
    return EmailMessage(
        subject=f'Selections for "{title}" 👀',
        html=html_content,
        text=(
            f'Selections for "{title}" (Theme: {theme_name})\n'
            f"- Dinner: {dinner}\n- Activity: {activity}\n- Mood: {mood}\n"
            f"{notes_text}\nInvite: {invite_url}"
        ),
    )


def render_confirmation_email(title: str, theme_name: str) -> EmailMessage:
    html_content = f"""{CARD_OPEN}
    <h2 style="margin:0 0 10px;">🕯️ All set, love</h2>
    <p style="margin:0;color:#6b645b;line-height:1.7">
      Your choices are in for <strong>{escape(title)}</strong>.<br/>
      Theme: <strong>{escape(theme_name)}</strong>.
    </p>
    <p style="margin:12px 0 0;line-height:1.7">
      You don’t need to plan a thing. Just show up and be cozy.<br/>
      <strong>You’ll be taken care of.</strong> 💛
    </p>
{CARD_CLOSE}"""
    return EmailMessage(
        subject=f'You’re all set for "{title}" 🕯️',
        html=html_content,
        text=f'You\'re all set for "{title}" (Theme: {theme_name}). You’ll be taken care of 💛',
    )


def send_email(to: str, message: EmailMessage) -> Optional[str]:
    """
    Send an email through Resend.

    Without RESEND_API_KEY the message is only logged. Provider errors are
    raised to the caller unchanged.

    Returns:
        Resend message id, or None when stubbed
    """
    if not settings.RESEND_API_KEY:
        logger.info(f"[email:stub] from={settings.EMAIL_FROM} to={to} subject={message.subject!r}\n{message.text}")
        return None

    resend.api_key = settings.RESEND_API_KEY
    params = {
        "from": settings.EMAIL_FROM,
        "to": [to],
        "subject": message.subject,
        "html": message.html,
        "text": message.text,
    }
    response = resend.Emails.send(params)
    logger.info(f"Email '{message.subject}' sent to {to}")
    return response.get("id") if isinstance(response, dict) else getattr(response, "id", None)
