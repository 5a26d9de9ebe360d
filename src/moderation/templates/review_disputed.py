"""Review dispute template — a vendor opened a dispute.

The vendor gets a confirmation; the review author learns their review is
contested.
"""

from moderation.templates.types import NotificationType, RecipientRole


class ReviewDisputedTemplate:
    notification_type = NotificationType.REVIEW_DISPUTE.value

    @staticmethod
    def render(context: dict) -> dict:
        if context.get("recipient_role") == RecipientRole.REVIEWER.value:
            return {
                "title": "Your Review is Under Dispute",
                "message": "A vendor has disputed your review. You may be contacted for more information.",
            }
        return {
            "title": "Review Dispute Status Update",
            "message": (
                "Your review dispute has been created. "
                "Click here to see the outcome and any necessary actions."
            ),
        }
