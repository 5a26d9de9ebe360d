"""Keeps the disputed review's status in step with its dispute.

Opening a dispute moves the review into DISPUTE. Resolving or withdrawing
the dispute hands the review back its earlier status, unless a moderator
or the author has moved it on in the meantime.
"""

import structlog
from protean.utils.mixins import handle

from moderation.dispute.dispute import Dispute, DisputeStatus
from moderation.dispute.events import DisputeOpened, DisputeStatusChanged, DisputeWithdrawn
from moderation.domain import moderation
from moderation.exceptions import ReviewNotFound
from moderation.review.queries import load_review, save_review

logger = structlog.get_logger(__name__)


def _release(review_id, dispute_id) -> None:
    try:
        review = load_review(review_id, include_deleted=True)
    except ReviewNotFound:
        logger.warning("disputed_review_missing", review_id=str(review_id), dispute_id=str(dispute_id))
        return

    if review.release_from_dispute(dispute_id):
        save_review(review)
    else:
        logger.info(
            "review_left_unchanged_after_dispute",
            review_id=str(review_id),
            dispute_id=str(dispute_id),
            status=review.status,
        )


@moderation.event_handler(part_of=Dispute)
class DisputeReviewSyncHandler:
    @handle(DisputeOpened)
    def on_dispute_opened(self, event: DisputeOpened) -> None:
        review = load_review(event.review_id)
        review.place_under_dispute(event.dispute_id)
        save_review(review)

    @handle(DisputeStatusChanged)
    def on_dispute_status_changed(self, event: DisputeStatusChanged) -> None:
        if event.status == DisputeStatus.RESOLVED.value:
            _release(event.review_id, event.dispute_id)

    @handle(DisputeWithdrawn)
    def on_dispute_withdrawn(self, event: DisputeWithdrawn) -> None:
        _release(event.review_id, event.dispute_id)
