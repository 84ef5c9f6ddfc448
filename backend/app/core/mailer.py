"""
Outbound notifications: transactional email through Resend and feedback
posts to a Slack incoming webhook.
"""

import logging
from datetime import datetime, timezone

import httpx

from app.core.config import settings
from app.core.email_templates import (
    render_deck_error,
    render_deck_link,
    render_deck_ready,
    render_feedback,
)
from app.schemas.project_data import ProjectData

logger = logging.getLogger(__name__)


class EmailDeliveryError(Exception):
    """Resend rejected the message or could not be reached."""


class EmailNotConfiguredError(EmailDeliveryError):
    pass


def email_configured() -> bool:
    return bool(settings.RESEND_API_KEY)


async def send_email(
    to: str,
    subject: str,
    html: str,
    http_client: httpx.AsyncClient | None = None,
) -> str | None:
    """Send one message and return the Resend message id."""
    if not email_configured():
        raise EmailNotConfiguredError("Email service not configured")

    client = http_client or httpx.AsyncClient(timeout=15.0)
    try:
        response = await client.post(
            settings.RESEND_API_URL,
            headers={
                "Authorization": f"Bearer {settings.RESEND_API_KEY}",
                "Content-Type": "application/json",
            },
            json={"from": settings.EMAIL_FROM, "to": [to], "subject": subject, "html": html},
        )
    except httpx.HTTPError as e:
        raise EmailDeliveryError(f"Email request failed: {e}") from e
    finally:
        if http_client is None:
            await client.aclose()

    if response.is_error:
        logger.error("Resend error (%s): %s", response.status_code, response.text)
        raise EmailDeliveryError(f"Resend returned {response.status_code}")

    try:
        body = response.json()
    except ValueError as e:
        raise EmailDeliveryError("Resend returned an unreadable response") from e
    message_id = body.get("id") if isinstance(body, dict) else None
    logger.info("Email %r sent to %s (id=%s)", subject, to, message_id)
    return message_id


# ---------------------------------------------------------------------------
# Deck notifications
# ---------------------------------------------------------------------------

async def send_deck_link(
    to: str,
    project_name: str,
    export_url: str,
    data: ProjectData,
    http_client: httpx.AsyncClient | None = None,
) -> str | None:
    subject, html = render_deck_link(project_name, export_url, data)
    return await send_email(to, subject, html, http_client=http_client)


async def notify_deck_ready(
    to: str,
    data: ProjectData,
    gamma_url: str | None,
    export_url: str | None,
    http_client: httpx.AsyncClient | None = None,
) -> bool:
    """Best-effort ready notification. Returns False when it was not sent."""
    if not email_configured():
        logger.warning("RESEND_API_KEY not set, skipping deck-ready email to %s", to)
        return False
    subject, html = render_deck_ready(data, gamma_url, export_url)
    await send_email(to, subject, html, http_client=http_client)
    return True


async def notify_deck_failed(
    to: str,
    project_name: str,
    reason: str,
    http_client: httpx.AsyncClient | None = None,
) -> bool:
    if not email_configured():
        logger.warning("RESEND_API_KEY not set, skipping deck-error email to %s", to)
        return False
    subject, html = render_deck_error(project_name, reason)
    await send_email(to, subject, html, http_client=http_client)
    return True


# ---------------------------------------------------------------------------
# Feedback
# ---------------------------------------------------------------------------

def _slack_blocks(category: str, feedback: str, project_name: str | None, submitted_at: str) -> dict:
    return {
        "text": f"New feedback: {category}",
        "blocks": [
            {
                "type": "header",
                "text": {"type": "plain_text", "text": f"New Feedback: {category}"},
            },
            {
                "type": "section",
                "fields": [
                    {"type": "mrkdwn", "text": f"*Project:*\n{project_name or 'Unknown Project'}"},
                    {"type": "mrkdwn", "text": f"*Submitted:*\n{submitted_at}"},
                ],
            },
            {"type": "section", "text": {"type": "mrkdwn", "text": feedback}},
        ],
    }


async def deliver_feedback(
    category: str,
    feedback: str,
    project_name: str | None = None,
    submitted_at: str | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> list[str]:
    """
    Fan feedback out to every configured channel.

    Returns the channels that accepted it (``"slack"``, ``"email"``).  A
    channel that fails is logged and skipped; with nothing configured the
    feedback is only logged.
    """
    submitted_at = submitted_at or datetime.now(timezone.utc).isoformat()
    delivered: list[str] = []

    if settings.SLACK_FEEDBACK_WEBHOOK:
        client = http_client or httpx.AsyncClient(timeout=10.0)
        try:
            response = await client.post(
                settings.SLACK_FEEDBACK_WEBHOOK,
                json=_slack_blocks(category, feedback, project_name, submitted_at),
            )
            if response.is_error:
                logger.error("Slack webhook returned %s: %s", response.status_code, response.text)
            else:
                delivered.append("slack")
        except httpx.HTTPError:
            logger.exception("Slack webhook request failed")
        finally:
            if http_client is None:
                await client.aclose()

    if settings.FEEDBACK_EMAIL and email_configured():
        subject, html = render_feedback(category, feedback, project_name, submitted_at)
        try:
            await send_email(settings.FEEDBACK_EMAIL, subject, html, http_client=http_client)
            delivered.append("email")
        except EmailDeliveryError:
            logger.exception("Feedback email failed")

    if not delivered:
        logger.info("Feedback received (%s) for %s: %s", category, project_name or "unknown project", feedback)
    return delivered
