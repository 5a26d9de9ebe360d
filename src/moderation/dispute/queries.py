"""Repository access shared by the Dispute command handlers and readers."""

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from moderation.dispute.dispute import Dispute
from moderation.exceptions import DisputeNotFound, DuplicateDispute


def load_dispute(dispute_id, vendor_id=None) -> Dispute:
    """Load a dispute; when ``vendor_id`` is given, other vendors' disputes are invisible."""
    try:
        dispute = current_domain.repository_for(Dispute).get(str(dispute_id))
    except ObjectNotFoundError:
        raise DisputeNotFound(f"Dispute {dispute_id} not found") from None

    if vendor_id is not None and str(dispute.vendor_id) != str(vendor_id):
        raise DisputeNotFound(f"Dispute {dispute_id} not found")
    return dispute


def save_dispute(dispute: Dispute) -> None:
    """Persist a dispute, translating the one-per-review-and-vendor violation."""
    try:
        current_domain.repository_for(Dispute).add(dispute)
    except ValidationError as exc:
        if "dispute_key" in exc.messages:
            raise DuplicateDispute("You have already disputed this review") from exc
        raise


def existing_dispute(review_id, vendor_id):
    results = (
        current_domain.repository_for(Dispute)
        ._dao.query.filter(review_id=str(review_id), vendor_id=str(vendor_id))
        .all()
    )
    return results.items[0] if results.items else None
