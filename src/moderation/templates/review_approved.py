"""Review approved template — the reviewer's review is live."""

from moderation.templates.types import NotificationType


class ReviewApprovedTemplate:
    notification_type = NotificationType.REVIEW_APPROVED.value

    @staticmethod
    def render(context: dict) -> dict:
        product_name = context.get("product_name") or "the product"
        return {
            "title": "Your Review is Live",
            "message": f"Your review of {product_name} has been approved and is now published.",
        }
