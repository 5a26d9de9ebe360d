"""ModerationQueue — pending and flagged reviews awaiting moderator action.

Each relevant event re-derives the queue entry from the review itself,
so the queue holds exactly the live reviews in PENDING or FLAGGED.
"""

from protean.core.projector import on
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from moderation.domain import moderation
from moderation.review.events import (
    ReviewDeleted,
    ReviewEdited,
    ReviewModerated,
    ReviewPlacedUnderDispute,
    ReviewReleasedFromDispute,
    ReviewRestored,
    ReviewSubmitted,
)
from moderation.review.review import Review, ReviewStatus

QUEUED_STATUSES = (ReviewStatus.PENDING.value, ReviewStatus.FLAGGED.value)


@moderation.projection
class ModerationQueue:
    review_id = Identifier(identifier=True, required=True)
    product_id = Identifier(required=True)
    reviewer_id = Identifier(required=True)
    rating = Integer(required=True)
    title = String(required=True, max_length=200)
    content = Text(required=True)
    status = String(required=True, max_length=20)
    moderation_note = Text()
    submitted_at = DateTime()
    queued_at = DateTime()


def _find(repo, review_id):
    try:
        return repo.get(str(review_id))
    except ObjectNotFoundError:
        return None


def sync_queue_entry(review_id, at=None) -> None:
    repo = current_domain.repository_for(ModerationQueue)
    entry = _find(repo, review_id)

    try:
        review = current_domain.repository_for(Review).get(str(review_id))
    except ObjectNotFoundError:
        review = None

    if review is None or review.is_deleted or review.status not in QUEUED_STATUSES:
        if entry is not None:
            repo._dao.delete(entry)
        return

    if entry is None:
        entry = ModerationQueue(
            review_id=str(review.id),
            product_id=str(review.product_id),
            reviewer_id=str(review.reviewer_id),
            rating=review.rating.score,
            title=review.title,
            content=review.content,
            status=review.status,
            submitted_at=review.created_at,
        )

    entry.rating = review.rating.score
    entry.title = review.title
    entry.content = review.content
    entry.status = review.status
    entry.moderation_note = review.moderation_note
    entry.queued_at = at or review.updated_at
    repo.add(entry)


@moderation.projector(projector_for=ModerationQueue, aggregates=[Review])
class ModerationQueueProjector:
    @on(ReviewSubmitted)
    def on_review_submitted(self, event):
        sync_queue_entry(event.review_id, event.submitted_at)

    @on(ReviewEdited)
    def on_review_edited(self, event):
        sync_queue_entry(event.review_id, event.edited_at)

    @on(ReviewModerated)
    def on_review_moderated(self, event):
        sync_queue_entry(event.review_id, event.moderated_at)

    @on(ReviewDeleted)
    def on_review_deleted(self, event):
        sync_queue_entry(event.review_id)

    @on(ReviewRestored)
    def on_review_restored(self, event):
        sync_queue_entry(event.review_id, event.restored_at)

    @on(ReviewPlacedUnderDispute)
    def on_review_placed_under_dispute(self, event):
        sync_queue_entry(event.review_id)

    @on(ReviewReleasedFromDispute)
    def on_review_released_from_dispute(self, event):
        sync_queue_entry(event.review_id, event.released_at)


def moderation_queue(status=None) -> list[dict]:
    """Queued reviews, oldest first."""
    query = current_domain.repository_for(ModerationQueue)._dao.query
    if status is not None:
        query = query.filter(status=status)
    return [entry.to_dict() for entry in query.order_by("queued_at").all().items]
