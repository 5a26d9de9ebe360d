"""New review template — tells the vendor someone reviewed their product."""

from moderation.templates.types import NotificationType


class NewReviewTemplate:
    notification_type = NotificationType.PRODUCT_REVIEW.value

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "title": "You've Got a New Review!",
            "message": (
                "A user has left a review on your product. "
                "Check it out and respond to engage with your customers."
            ),
        }
