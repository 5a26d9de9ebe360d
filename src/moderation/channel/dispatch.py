"""Fire-and-forget dispatch of notifications and emails.

Every message leaving the Moderation domain passes through ``notify_user``
or ``email_user``. Neither ever raises: a failing template, directory
lookup or sink is logged and reported as ``False``, and the state change
that triggered the message stands.
"""

import structlog
from protean.utils.globals import current_domain

from moderation.channel import DIRECTORY, EMAIL, NOTIFIER, get_channel
from moderation.templates import get_template

logger = structlog.get_logger(__name__)

DEFAULT_FRONTEND_URL = "http://localhost:3001"


def frontend_url() -> str:
    custom = current_domain.config.get("custom") or {}
    return str(custom.get("frontend_url") or DEFAULT_FRONTEND_URL).rstrip("/")


def display_name(user_id, fallback: str = "User") -> str:
    """The user's name from the directory, or ``fallback``."""
    try:
        contact = get_channel(DIRECTORY).get_contact(str(user_id))
    except Exception as exc:
        logger.warning("user_directory_lookup_failed", user_id=str(user_id), error=str(exc))
        return fallback
    return (contact or {}).get("name") or fallback


def notify_user(
    user_id,
    notification_type: str,
    context: dict | None = None,
    meta: dict | None = None,
    action_url: str | None = None,
) -> bool:
    """Render and deliver an in-app notification. Returns True when delivered."""
    try:
        rendered = get_template(notification_type).render(context or {})
        result = get_channel(NOTIFIER).notify(
            user_id=str(user_id),
            notification_type=notification_type,
            title=rendered["title"],
            message=rendered["message"],
            meta=meta or {},
            action_url=action_url,
        )
    except Exception as exc:
        logger.error(
            "notification_dispatch_failed",
            user_id=str(user_id),
            notification_type=notification_type,
            error=str(exc),
            exc_info=True,
        )
        return False

    if result.get("status") != "sent":
        logger.warning(
            "notification_not_delivered",
            user_id=str(user_id),
            notification_type=notification_type,
            error=result.get("error"),
        )
        return False

    logger.info("notification_sent", user_id=str(user_id), notification_type=notification_type)
    return True


def email_user(user_id, notification_type: str, data: dict | None = None) -> bool:
    """Send the templated email for ``notification_type`` to a user.

    Users without an email address in the directory are skipped.
    Returns True when the email was accepted by the sink.
    """
    try:
        template_cls = get_template(notification_type)
        contact = get_channel(DIRECTORY).get_contact(str(user_id))
        if not contact or not contact.get("email"):
            logger.info("email_skipped_no_address", user_id=str(user_id), notification_type=notification_type)
            return False

        payload = {"user_name": contact.get("name") or "User", **(data or {})}
        result = get_channel(EMAIL).send_templated_email(
            to=contact["email"],
            subject=template_cls.email_subject,
            template=template_cls.email_template,
            data=payload,
        )
    except Exception as exc:
        logger.error(
            "email_dispatch_failed",
            user_id=str(user_id),
            notification_type=notification_type,
            error=str(exc),
            exc_info=True,
        )
        return False

    if result.get("status") != "sent":
        logger.warning(
            "email_not_delivered",
            user_id=str(user_id),
            notification_type=notification_type,
            error=result.get("error"),
        )
        return False

    logger.info("email_sent", user_id=str(user_id), notification_type=notification_type)
    return True
