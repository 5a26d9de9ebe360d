"""Review aggregate (CQRS) — the core of the Moderation domain.

The Review aggregate manages the full lifecycle of a product review:
submission, author edits, moderation, helpful votes, soft deletion and
restore, and the Dispute status entered while a vendor contests it.

State Machine (5 states, moderator-driven):
    any → PENDING | APPROVED | REJECTED | FLAGGED   (moderation)
    any → PENDING                                   (author edit)
    any → DISPUTE                                   (vendor dispute opened)
    DISPUTE → status before the dispute             (dispute resolved/withdrawn)

A review counts toward its product's rating only while it is approved,
published, and not deleted (see ``is_countable``). Every method that can
flip that predicate raises ``ReviewCountabilityChanged`` so the rating
aggregator recomputes exactly when it has to.
"""

from contextlib import contextmanager
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)

from moderation.domain import moderation
from moderation.exceptions import AlreadyVoted, VoteNotFound
from moderation.review.events import (
    HelpfulVoteAdded,
    HelpfulVoteRemoved,
    ReviewCountabilityChanged,
    ReviewDeleted,
    ReviewEdited,
    ReviewModerated,
    ReviewPlacedUnderDispute,
    ReviewReleasedFromDispute,
    ReviewRestored,
    ReviewSubmitted,
)

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()

MAX_CONTENT_LENGTH = 5000
SUB_RATING_MAX = 7
SUB_RATING_ASPECTS = (
    "ease_of_use",
    "customer_support",
    "features",
    "pricing",
    "technical_support",
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class ReviewStatus(Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    FLAGGED = "Flagged"
    DISPUTE = "Dispute"


# Statuses a moderator may set directly; DISPUTE belongs to the dispute workflow
MODERATION_STATUSES = {
    ReviewStatus.PENDING,
    ReviewStatus.APPROVED,
    ReviewStatus.REJECTED,
    ReviewStatus.FLAGGED,
}


def is_countable(review) -> bool:
    """Whether a review counts toward its product's rating aggregates."""
    return (
        review.status == ReviewStatus.APPROVED.value
        and review.published_at is not None
        and not review.is_deleted
    )


def active_review_key(reviewer_id, product_id) -> str:
    """Storage-level uniqueness key for the one active review per reviewer and product."""
    return f"{reviewer_id}:{product_id}"


def _ballot_key(review_id, voter_id) -> str:
    return f"{review_id}:{voter_id}"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@moderation.value_object(part_of="Review")
class Rating:
    """The overall star rating, from 1 to 5."""

    score = Integer(required=True)

    @invariant.post
    def score_must_be_in_range(self):
        if self.score is not None and (self.score < 1 or self.score > 5):
            raise ValidationError({"score": ["Rating must be between 1 and 5"]})


@moderation.value_object(part_of="Review")
class SubRatings:
    """Aspect scores from 1 to 7; 0 means the reviewer left it blank."""

    ease_of_use = Integer(default=0)
    customer_support = Integer(default=0)
    features = Integer(default=0)
    pricing = Integer(default=0)
    technical_support = Integer(default=0)

    @invariant.post
    def scores_must_be_in_range(self):
        errors = {}
        for aspect in SUB_RATING_ASPECTS:
            value = getattr(self, aspect)
            if value is not None and (value < 0 or value > SUB_RATING_MAX):
                errors[aspect] = [f"Sub-rating must be between 0 and {SUB_RATING_MAX}"]
        if errors:
            raise ValidationError(errors)

    def answered(self) -> dict:
        """Aspects the reviewer actually scored."""
        return {aspect: getattr(self, aspect) for aspect in SUB_RATING_ASPECTS if getattr(self, aspect)}


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@moderation.entity(part_of="Review")
class HelpfulVote:
    """A user's "this review was helpful" vote.

    ``ballot_key`` is unique per review and voter, so a second concurrent
    vote by the same user is rejected by the store even if both writers
    passed the in-memory check.
    """

    voter_id = Identifier(required=True)
    ballot_key = String(required=True, max_length=255, unique=True)
    voted_at = DateTime(required=True)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@moderation.aggregate
class Review:
    """A reviewer's rating and write-up of a vendor's product."""

    # Core identifiers
    product_id = Identifier(required=True)
    reviewer_id = Identifier(required=True)

    # Set while the review is active, cleared on soft delete
    review_key = String(max_length=255, unique=True)

    # Content
    rating = ValueObject(Rating, required=True)
    sub_ratings = ValueObject(SubRatings)
    title = String(required=True, max_length=200)
    content = Text(required=True)

    # Moderation
    status = String(choices=ReviewStatus, default=ReviewStatus.PENDING.value)
    published_at = DateTime()
    moderation_note = Text()
    moderated_by = Identifier()

    # Dispute bookkeeping
    dispute_id = Identifier()
    status_before_dispute = String(choices=ReviewStatus)

    # Voting
    votes = HasMany(HelpfulVote)
    helpful_count = Integer(default=0)

    # Soft delete
    is_deleted = Boolean(default=False)
    deleted_at = DateTime()
    deleted_by = Identifier()

    # Timestamps
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Invariants
    # -------------------------------------------------------------------
    @invariant.post
    def title_must_not_be_empty(self):
        if self.title is not None and len(self.title.strip()) == 0:
            raise ValidationError({"title": ["Review title cannot be empty"]})

    @invariant.post
    def content_length_within_bounds(self):
        if self.content is None:
            return
        if len(self.content.strip()) == 0:
            raise ValidationError({"content": ["Review content cannot be empty"]})
        if len(self.content) > MAX_CONTENT_LENGTH:
            raise ValidationError({"content": [f"Review content cannot exceed {MAX_CONTENT_LENGTH} characters"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def submit(cls, product_id, reviewer_id, rating, title, content, sub_ratings=None):
        """Submit a new review. It waits in PENDING until a moderator acts."""
        now = datetime.now(UTC)

        review = cls(
            product_id=product_id,
            reviewer_id=reviewer_id,
            review_key=active_review_key(reviewer_id, product_id),
            rating=Rating(score=rating),
            sub_ratings=SubRatings(**sub_ratings) if sub_ratings else None,
            title=title,
            content=content,
            status=ReviewStatus.PENDING.value,
            helpful_count=0,
            is_deleted=False,
            created_at=now,
            updated_at=now,
        )

        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                product_id=str(product_id),
                reviewer_id=str(reviewer_id),
                rating=rating,
                title=title,
                content=content,
                submitted_at=now,
            )
        )

        return review

    # -------------------------------------------------------------------
    # Countability tracking
    # -------------------------------------------------------------------
    @contextmanager
    def _tracking_countability(self, at):
        was_countable = is_countable(self)
        yield
        now_countable = is_countable(self)
        if now_countable != was_countable:
            self.raise_(
                ReviewCountabilityChanged(
                    review_id=str(self.id),
                    product_id=str(self.product_id),
                    countable=now_countable,
                    changed_at=at,
                )
            )

    # -------------------------------------------------------------------
    # Edit
    # -------------------------------------------------------------------
    def edit(self, title=_UNSET, content=_UNSET, rating=_UNSET, sub_ratings=_UNSET):
        """Replace review content. Any edit sends the review back to moderation.

        ``published_at`` is left alone, so a re-approved review keeps its
        original publication date.
        """
        previous_status = self.status
        now = datetime.now(UTC)

        with self._tracking_countability(now):
            with atomic_change(self):
                if title is not _UNSET:
                    self.title = title
                if content is not _UNSET:
                    self.content = content
                if rating is not _UNSET:
                    self.rating = Rating(score=rating)
                if sub_ratings is not _UNSET:
                    self.sub_ratings = SubRatings(**sub_ratings) if sub_ratings else None

                self.status = ReviewStatus.PENDING.value
                self.dispute_id = None
                self.status_before_dispute = None
                self.updated_at = now

        self.raise_(
            ReviewEdited(
                review_id=str(self.id),
                product_id=str(self.product_id),
                reviewer_id=str(self.reviewer_id),
                previous_status=previous_status,
                title=self.title,
                content=self.content,
                rating=self.rating.score,
                edited_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Moderation
    # -------------------------------------------------------------------
    def moderate(self, status, moderator_id=None, note=None):
        """Set the review's status on behalf of a moderator.

        The first approval stamps ``published_at``; later approvals keep it.
        A note, when given, replaces the previous one.
        """
        try:
            target = ReviewStatus(status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown review status: {status}"]})

        if target not in MODERATION_STATUSES:
            raise ValidationError({"status": ["Reviews enter the Dispute status only through a vendor dispute"]})

        previous_status = self.status
        now = datetime.now(UTC)

        with self._tracking_countability(now):
            self.status = target.value
            if target == ReviewStatus.APPROVED and self.published_at is None:
                self.published_at = now
            if note:
                self.moderation_note = note
            if moderator_id:
                self.moderated_by = moderator_id
            self.dispute_id = None
            self.status_before_dispute = None
            self.updated_at = now

        self.raise_(
            ReviewModerated(
                review_id=str(self.id),
                product_id=str(self.product_id),
                reviewer_id=str(self.reviewer_id),
                previous_status=previous_status,
                status=self.status,
                moderator_id=str(moderator_id) if moderator_id else None,
                moderation_note=self.moderation_note,
                published_at=self.published_at,
                moderated_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Soft delete / restore
    # -------------------------------------------------------------------
    def soft_delete(self, deleted_by):
        """Mark the review deleted and free its reviewer/product slot."""
        now = datetime.now(UTC)

        with self._tracking_countability(now):
            self.is_deleted = True
            self.deleted_at = now
            self.deleted_by = deleted_by
            self.review_key = None
            self.updated_at = now

        self.raise_(
            ReviewDeleted(
                review_id=str(self.id),
                product_id=str(self.product_id),
                reviewer_id=str(self.reviewer_id),
                deleted_by=str(deleted_by),
                deleted_at=now,
            )
        )

    def restore(self):
        """Bring a soft-deleted review back with the status it had."""
        if not self.is_deleted:
            raise ValidationError({"review": ["Only deleted reviews can be restored"]})

        now = datetime.now(UTC)

        with self._tracking_countability(now):
            self.is_deleted = False
            self.deleted_at = None
            self.deleted_by = None
            self.review_key = active_review_key(self.reviewer_id, self.product_id)
            self.updated_at = now

        self.raise_(
            ReviewRestored(
                review_id=str(self.id),
                product_id=str(self.product_id),
                reviewer_id=str(self.reviewer_id),
                status=self.status,
                restored_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Helpful votes
    # -------------------------------------------------------------------
    def _vote_by(self, voter_id):
        return next((v for v in self.votes if str(v.voter_id) == str(voter_id)), None)

    def vote_helpful(self, voter_id):
        """Record a helpful vote. A user can hold at most one vote per review."""
        if self._vote_by(voter_id) is not None:
            raise AlreadyVoted("You have already voted this review as helpful")

        now = datetime.now(UTC)

        with atomic_change(self):
            self.add_votes(
                HelpfulVote(
                    voter_id=voter_id,
                    ballot_key=_ballot_key(self.id, voter_id),
                    voted_at=now,
                )
            )
            self.helpful_count = len(self.votes)
            self.updated_at = now

        self.raise_(
            HelpfulVoteAdded(
                review_id=str(self.id),
                voter_id=str(voter_id),
                helpful_count=self.helpful_count,
                voted_at=now,
            )
        )
        return self.helpful_count

    def remove_helpful_vote(self, voter_id):
        """Withdraw a helpful vote previously cast by ``voter_id``."""
        vote = self._vote_by(voter_id)
        if vote is None:
            raise VoteNotFound("You have not voted this review as helpful")

        now = datetime.now(UTC)

        with atomic_change(self):
            self.remove_votes(vote)
            self.helpful_count = len(self.votes)
            self.updated_at = now

        self.raise_(
            HelpfulVoteRemoved(
                review_id=str(self.id),
                voter_id=str(voter_id),
                helpful_count=self.helpful_count,
                removed_at=now,
            )
        )
        return self.helpful_count

    # -------------------------------------------------------------------
    # Dispute synchronisation
    # -------------------------------------------------------------------
    def place_under_dispute(self, dispute_id):
        """Move the review into DISPUTE, remembering the status to return to.

        A review still held by an earlier dispute is handed over to the new
        one and keeps the status it had before the first dispute.
        """
        now = datetime.now(UTC)

        if self.status == ReviewStatus.DISPUTE.value:
            if str(self.dispute_id) == str(dispute_id):
                return
            previous_status = self.status_before_dispute or ReviewStatus.PENDING.value
            self.dispute_id = dispute_id
            self.updated_at = now
        else:
            previous_status = self.status
            with self._tracking_countability(now):
                self.status_before_dispute = previous_status
                self.dispute_id = dispute_id
                self.status = ReviewStatus.DISPUTE.value
                self.updated_at = now

        self.raise_(
            ReviewPlacedUnderDispute(
                review_id=str(self.id),
                product_id=str(self.product_id),
                dispute_id=str(dispute_id),
                previous_status=previous_status,
                disputed_at=now,
            )
        )

    def release_from_dispute(self, dispute_id) -> bool:
        """Restore the pre-dispute status if this dispute still holds the review.

        Returns False when a moderator or the author has moved the review on
        since the dispute opened; their decision stands.
        """
        if (
            self.is_deleted
            or self.status != ReviewStatus.DISPUTE.value
            or str(self.dispute_id) != str(dispute_id)
        ):
            return False

        now = datetime.now(UTC)

        with self._tracking_countability(now):
            self.status = self.status_before_dispute or ReviewStatus.PENDING.value
            self.status_before_dispute = None
            self.dispute_id = None
            self.updated_at = now

        self.raise_(
            ReviewReleasedFromDispute(
                review_id=str(self.id),
                product_id=str(self.product_id),
                dispute_id=str(dispute_id),
                status=self.status,
                released_at=now,
            )
        )
        return True
