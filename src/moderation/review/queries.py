"""Repository access shared by the Review command handlers and readers."""

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from moderation.exceptions import AlreadyVoted, DuplicateReview, ReviewNotFound
from moderation.review.review import Review
from moderation.utils.pagination import normalize_page, pagination


def load_review(review_id, include_deleted=False) -> Review:
    """Load a review, treating soft-deleted reviews as absent unless asked."""
    try:
        review = current_domain.repository_for(Review).get(str(review_id))
    except ObjectNotFoundError:
        raise ReviewNotFound(f"Review {review_id} not found") from None

    if review.is_deleted and not include_deleted:
        raise ReviewNotFound(f"Review {review_id} not found")
    return review


def save_review(review: Review) -> None:
    """Persist a review, translating storage uniqueness violations."""
    try:
        current_domain.repository_for(Review).add(review)
    except ValidationError as exc:
        if "review_key" in exc.messages:
            raise DuplicateReview("You have already reviewed this product") from exc
        if "ballot_key" in exc.messages:
            raise AlreadyVoted("You have already voted this review as helpful") from exc
        raise


def active_review_for(reviewer_id, product_id):
    """The reviewer's active review of the product, if any."""
    results = (
        current_domain.repository_for(Review)
        ._dao.query.filter(
            reviewer_id=str(reviewer_id),
            product_id=str(product_id),
            is_deleted=False,
        )
        .all()
    )
    return results.items[0] if results.items else None


def list_deleted_reviews(page=1, limit=10) -> dict:
    """Soft-deleted reviews, most recently deleted first."""
    page, limit = normalize_page(page, limit)

    results = (
        current_domain.repository_for(Review)
        ._dao.query.filter(is_deleted=True)
        .order_by("-deleted_at")
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return {
        "reviews": [review.to_dict() for review in results.items],
        "pagination": pagination(page, limit, results.total),
    }
