"""Dispute notifications — keeps the vendor and the review author informed.

* Opened: both parties get a notification.
* Status changed: both parties get a notification and an email.
* Explanation added or edited: the other party gets a notification and an
  email carrying the explanation text.

Delivery goes through the non-raising dispatch functions, so a broken
sink never undoes a dispute change.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from moderation.channel.dispatch import display_name, email_user, frontend_url, notify_user
from moderation.dispute.dispute import Dispute
from moderation.dispute.events import (
    DisputeOpened,
    DisputeStatusChanged,
    ExplanationAdded,
    ExplanationUpdated,
)
from moderation.domain import moderation
from moderation.product.product import Product
from moderation.review.review import Review
from moderation.templates.types import NotificationType, RecipientRole

logger = structlog.get_logger(__name__)

REVIEW_EXCERPT_LENGTH = 100


class _DisputeContext:
    """Review and product details shared by every dispute message."""

    def __init__(self, review_id, product_id):
        self.review = self._load(Review, review_id)
        self.product = self._load(Product, product_id)

    @staticmethod
    def _load(cls, identifier):
        try:
            return current_domain.repository_for(cls).get(str(identifier))
        except ObjectNotFoundError:
            logger.warning("dispute_context_missing", entity=cls.__name__, id=str(identifier))
            return None

    @property
    def reviewer_id(self):
        return str(self.review.reviewer_id) if self.review else None

    @property
    def product_name(self) -> str:
        return self.product.name if self.product else "Product"

    @property
    def review_title(self) -> str:
        if self.review is None:
            return "Review"
        if self.review.title:
            return self.review.title
        return self.review.content[:REVIEW_EXCERPT_LENGTH] + "..."

    @property
    def disputes_path(self):
        return f"/product-detail/{self.product.slug}/disputes" if self.product else None

    def dispute_url(self) -> str:
        return frontend_url() + (self.disputes_path or "/profile/dispute-management")


def _load_dispute(dispute_id):
    try:
        dispute = current_domain.repository_for(Dispute).get(str(dispute_id))
    except ObjectNotFoundError:
        return None
    return dispute


@moderation.event_handler(part_of=Dispute)
class DisputeNotificationsHandler:
    @handle(DisputeOpened)
    def on_dispute_opened(self, event: DisputeOpened) -> None:
        ctx = _DisputeContext(event.review_id, event.product_id)
        meta = {"dispute_id": str(event.dispute_id), "review_id": str(event.review_id)}

        notify_user(
            user_id=event.vendor_id,
            notification_type=NotificationType.REVIEW_DISPUTE.value,
            context={"recipient_role": RecipientRole.VENDOR.value},
            meta=meta,
            action_url=ctx.disputes_path,
        )
        if ctx.reviewer_id:
            notify_user(
                user_id=ctx.reviewer_id,
                notification_type=NotificationType.REVIEW_DISPUTE.value,
                context={"recipient_role": RecipientRole.REVIEWER.value},
                meta=meta,
                action_url=ctx.disputes_path,
            )

    @handle(DisputeStatusChanged)
    def on_dispute_status_changed(self, event: DisputeStatusChanged) -> None:
        ctx = _DisputeContext(event.review_id, event.product_id)
        dispute = _load_dispute(event.dispute_id)

        email_data = {
            "dispute_id": str(event.dispute_id),
            "product_name": ctx.product_name,
            "review_title": ctx.review_title,
            "old_status": event.previous_status,
            "new_status": event.status,
            "updated_by": display_name(event.changed_by, fallback="System") if event.changed_by else "System",
            "created_date": dispute.created_at.strftime("%B %d, %Y") if dispute and dispute.created_at else "Unknown",
            "dispute_url": ctx.dispute_url(),
        }

        recipients = [(event.vendor_id, RecipientRole.VENDOR.value)]
        if ctx.reviewer_id:
            recipients.append((ctx.reviewer_id, RecipientRole.REVIEWER.value))

        for user_id, role in recipients:
            notify_user(
                user_id=user_id,
                notification_type=NotificationType.DISPUTE_STATUS_UPDATE.value,
                context={
                    "recipient_role": role,
                    "old_status": event.previous_status,
                    "new_status": event.status,
                },
                meta={"dispute_id": str(event.dispute_id), "status": event.status},
                action_url=ctx.disputes_path,
            )
            email_user(user_id, NotificationType.DISPUTE_STATUS_UPDATE.value, email_data)

    def _notify_other_party(self, event, notification_type):
        ctx = _DisputeContext(event.review_id, event.product_id)

        if str(event.author_id) == str(event.vendor_id):
            other_party = ctx.reviewer_id
        else:
            other_party = str(event.vendor_id)
        if not other_party:
            return

        notify_user(
            user_id=other_party,
            notification_type=notification_type,
            meta={"dispute_id": str(event.dispute_id), "explanation_id": str(event.explanation_id)},
            action_url=ctx.disputes_path,
        )
        email_user(
            other_party,
            notification_type,
            {
                "author_name": display_name(event.author_id, fallback="Someone"),
                "explanation_content": event.content,
                "review_title": ctx.review_title,
                "product_name": ctx.product_name,
                "dispute_id": str(event.dispute_id),
                "dispute_url": ctx.dispute_url(),
            },
        )

    @handle(ExplanationAdded)
    def on_explanation_added(self, event: ExplanationAdded) -> None:
        self._notify_other_party(event, NotificationType.DISPUTE_EXPLANATION.value)

    @handle(ExplanationUpdated)
    def on_explanation_updated(self, event: ExplanationUpdated) -> None:
        self._notify_other_party(event, NotificationType.DISPUTE_EXPLANATION_UPDATE.value)
