"""Review rejected template — sent when moderation asks for a revision."""

from moderation.templates.types import NotificationType


class ReviewRejectedTemplate:
    notification_type = NotificationType.REVIEW_REJECTED.value

    @staticmethod
    def render(context: dict) -> dict:
        note = context.get("moderation_note") or "It did not meet our review guidelines"
        return {
            "title": "Your Review Needs Changes",
            "message": (
                "We were unable to publish your review at this time.\n\n"
                f"Reason: {note}\n\n"
                "You can edit and resubmit your review."
            ),
        }
