"""Review flagged template — the review is held for a closer look."""

from moderation.templates.types import NotificationType


class ReviewFlaggedTemplate:
    notification_type = NotificationType.REVIEW_FLAGGED.value

    @staticmethod
    def render(context: dict) -> dict:
        message = "Your review has been flagged and is under review by our moderators."
        if context.get("moderation_note"):
            message += f"\n\nNote: {context['moderation_note']}"
        return {"title": "Your Review is Under Review", "message": message}
