"""Review notifications — tells vendors and reviewers what happened to a review.

The vendor hears once, when a review of their product is submitted. The
reviewer hears about every moderation decision except a reset to
PENDING. Delivery goes through the non-raising dispatch functions.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from moderation.channel.dispatch import notify_user
from moderation.domain import moderation
from moderation.product.product import Product
from moderation.review.events import ReviewModerated, ReviewSubmitted
from moderation.review.review import Review, ReviewStatus
from moderation.templates.types import NotificationType

logger = structlog.get_logger(__name__)

_DECISION_NOTIFICATIONS = {
    ReviewStatus.APPROVED.value: NotificationType.REVIEW_APPROVED.value,
    ReviewStatus.REJECTED.value: NotificationType.REVIEW_REJECTED.value,
    ReviewStatus.FLAGGED.value: NotificationType.REVIEW_FLAGGED.value,
}


def _product(product_id):
    try:
        return current_domain.repository_for(Product).get(str(product_id))
    except ObjectNotFoundError:
        logger.warning("reviewed_product_missing", product_id=str(product_id))
        return None


@moderation.event_handler(part_of=Review)
class ReviewNotificationsHandler:
    @handle(ReviewSubmitted)
    def on_review_submitted(self, event: ReviewSubmitted) -> None:
        product = _product(event.product_id)
        if product is None:
            return

        notify_user(
            user_id=product.owner_id,
            notification_type=NotificationType.PRODUCT_REVIEW.value,
            context={"product_name": product.name},
            meta={"review_id": str(event.review_id), "product_id": str(product.id)},
            action_url=f"/product-detail/{product.slug}",
        )

    @handle(ReviewModerated)
    def on_review_moderated(self, event: ReviewModerated) -> None:
        notification_type = _DECISION_NOTIFICATIONS.get(event.status)
        if notification_type is None:
            return

        product = _product(event.product_id)
        notify_user(
            user_id=event.reviewer_id,
            notification_type=notification_type,
            context={
                "product_name": product.name if product else None,
                "moderation_note": event.moderation_note,
            },
            meta={
                "review_id": str(event.review_id),
                "status": event.status,
                "moderation_note": event.moderation_note,
            },
            action_url=f"/product-detail/{product.slug}" if product else None,
        )
