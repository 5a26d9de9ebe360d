"""Dispute status update template — notification and email for both parties."""

from moderation.templates.types import NotificationType, RecipientRole


class DisputeStatusUpdateTemplate:
    notification_type = NotificationType.DISPUTE_STATUS_UPDATE.value
    email_template = "dispute-status-update"
    email_subject = "Dispute Status Update"

    @staticmethod
    def render(context: dict) -> dict:
        old_status = context.get("old_status", "Unknown")
        new_status = context.get("new_status", "Unknown")
        if context.get("recipient_role") == RecipientRole.REVIEWER.value:
            return {
                "title": "Dispute Status Update on Your Review",
                "message": (
                    f"A dispute involving your review moved from {old_status} to {new_status}. "
                    "Click here for details."
                ),
            }
        return {
            "title": "Review Dispute Status Update",
            "message": (
                f"Your review dispute moved from {old_status} to {new_status}. "
                "Click here for details."
            ),
        }
