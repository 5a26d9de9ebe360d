"""Dispute aggregate — a vendor contesting a review of their product.

State Machine (vendor moves forward only, administrators may set any status):
    PENDING → ACTIVE → RESOLVED

At most one dispute exists per review and vendor; ``dispute_key`` carries
that pair and is unique in storage. Participants (the vendor and the
review's author) discuss the dispute through an ordered thread of
explanations, each editable only by whoever wrote it.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, String, Text

from moderation.dispute.events import (
    DisputeDetailsUpdated,
    DisputeOpened,
    DisputeStatusChanged,
    DisputeWithdrawn,
    ExplanationAdded,
    ExplanationUpdated,
)
from moderation.domain import moderation
from moderation.exceptions import ExplanationNotFound, NotExplanationAuthor

_UNSET = object()

DESCRIPTION_MIN_LENGTH = 10
DESCRIPTION_MAX_LENGTH = 2000
EXPLANATION_MAX_LENGTH = 2000


class DisputeStatus(Enum):
    PENDING = "Pending"
    ACTIVE = "Active"
    RESOLVED = "Resolved"


_STATUS_ORDER = {
    DisputeStatus.PENDING.value: 0,
    DisputeStatus.ACTIVE.value: 1,
    DisputeStatus.RESOLVED.value: 2,
}


class DisputeReason(Enum):
    FALSE_OR_MISLEADING = "false-or-misleading-information"
    SPAM_OR_FAKE = "spam-or-fake-review"
    INAPPROPRIATE_CONTENT = "inappropriate-content"
    CONFLICT_OF_INTEREST = "conflict-of-interest"
    OTHER = "other"


def dispute_key(review_id, vendor_id) -> str:
    return f"{review_id}:{vendor_id}"


def _clean_explanation(content) -> str:
    content = (content or "").strip()
    if not content:
        raise ValidationError({"content": ["Explanation content cannot be empty"]})
    if len(content) > EXPLANATION_MAX_LENGTH:
        raise ValidationError({"content": [f"Explanation cannot exceed {EXPLANATION_MAX_LENGTH} characters"]})
    return content


@moderation.entity(part_of="Dispute")
class Explanation:
    author_id = Identifier(required=True)
    content = Text(required=True)
    created_at = DateTime(required=True)
    updated_at = DateTime(required=True)


@moderation.aggregate
class Dispute:
    review_id = Identifier(required=True)
    vendor_id = Identifier(required=True)
    product_id = Identifier(required=True)  # Denormalised from the review
    dispute_key = String(required=True, max_length=255, unique=True)
    reason = String(required=True, choices=DisputeReason)
    description = Text(required=True)
    status = String(choices=DisputeStatus, default=DisputeStatus.PENDING.value)
    explanations = HasMany(Explanation)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def description_length_within_bounds(self):
        if self.description is None:
            return
        length = len(self.description.strip())
        if length < DESCRIPTION_MIN_LENGTH or length > DESCRIPTION_MAX_LENGTH:
            raise ValidationError(
                {
                    "description": [
                        f"Description must be between {DESCRIPTION_MIN_LENGTH} and "
                        f"{DESCRIPTION_MAX_LENGTH} characters"
                    ]
                }
            )

    @classmethod
    def open(cls, review_id, vendor_id, product_id, reason, description):
        now = datetime.now(UTC)
        dispute = cls(
            review_id=review_id,
            vendor_id=vendor_id,
            product_id=product_id,
            dispute_key=dispute_key(review_id, vendor_id),
            reason=reason,
            description=description.strip() if description else description,
            status=DisputeStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        dispute.raise_(
            DisputeOpened(
                dispute_id=str(dispute.id),
                review_id=str(review_id),
                vendor_id=str(vendor_id),
                product_id=str(product_id),
                reason=dispute.reason,
                description=dispute.description,
                status=dispute.status,
                opened_at=now,
            )
        )
        return dispute

    def update_details(self, reason=_UNSET, description=_UNSET):
        """Revise the reason and/or description. Returns True if anything changed."""
        changed = False
        with atomic_change(self):
            if reason is not _UNSET and reason != self.reason:
                self.reason = reason
                changed = True
            if description is not _UNSET and description.strip() != self.description:
                self.description = description.strip()
                changed = True

        if not changed:
            return False

        self.updated_at = datetime.now(UTC)
        self.raise_(
            DisputeDetailsUpdated(
                dispute_id=str(self.id),
                review_id=str(self.review_id),
                vendor_id=str(self.vendor_id),
                reason=self.reason,
                description=self.description,
                updated_at=self.updated_at,
            )
        )
        return True

    def change_status(self, status, changed_by=None, forward_only=True):
        """Move the dispute to ``status``. Returns True if the status changed."""
        try:
            target = DisputeStatus(status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown dispute status: {status}"]})

        previous_status = self.status
        if target.value == previous_status:
            return False

        if forward_only and _STATUS_ORDER[target.value] < _STATUS_ORDER[previous_status]:
            raise ValidationError({"status": [f"Cannot move a dispute from {previous_status} back to {target.value}"]})

        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now

        self.raise_(
            DisputeStatusChanged(
                dispute_id=str(self.id),
                review_id=str(self.review_id),
                vendor_id=str(self.vendor_id),
                product_id=str(self.product_id),
                previous_status=previous_status,
                status=self.status,
                changed_by=str(changed_by) if changed_by else None,
                changed_at=now,
            )
        )
        return True

    def add_explanation(self, author_id, content) -> Explanation:
        content = _clean_explanation(content)
        now = datetime.now(UTC)

        explanation = Explanation(
            author_id=author_id,
            content=content,
            created_at=now,
            updated_at=now,
        )
        self.add_explanations(explanation)
        self.updated_at = now

        self.raise_(
            ExplanationAdded(
                dispute_id=str(self.id),
                review_id=str(self.review_id),
                vendor_id=str(self.vendor_id),
                product_id=str(self.product_id),
                explanation_id=str(explanation.id),
                author_id=str(author_id),
                content=content,
                added_at=now,
            )
        )
        return explanation

    def update_explanation(self, explanation_id, author_id, content) -> Explanation:
        explanation = next((e for e in self.explanations if str(e.id) == str(explanation_id)), None)
        if explanation is None:
            raise ExplanationNotFound(f"Explanation {explanation_id} not found")
        if str(explanation.author_id) != str(author_id):
            raise NotExplanationAuthor("You can only edit your own explanations")

        content = _clean_explanation(content)
        now = datetime.now(UTC)

        explanation.content = content
        explanation.updated_at = now
        self.updated_at = now

        self.raise_(
            ExplanationUpdated(
                dispute_id=str(self.id),
                review_id=str(self.review_id),
                vendor_id=str(self.vendor_id),
                product_id=str(self.product_id),
                explanation_id=str(explanation.id),
                author_id=str(author_id),
                content=content,
                updated_at=now,
            )
        )
        return explanation

    def withdraw(self):
        """Drop the explanations and announce the withdrawal ahead of deletion."""
        for explanation in list(self.explanations):
            self.remove_explanations(explanation)

        self.raise_(
            DisputeWithdrawn(
                dispute_id=str(self.id),
                review_id=str(self.review_id),
                vendor_id=str(self.vendor_id),
                product_id=str(self.product_id),
                withdrawn_at=datetime.now(UTC),
            )
        )
