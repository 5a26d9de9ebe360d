"""Rating aggregator — recomputes a product's rating aggregates from its reviews.

Recomputation is a full, idempotent pass over the product's countable
reviews; it never adjusts counters incrementally. It runs whenever a
review starts or stops counting (``ReviewCountabilityChanged``), which
with synchronous event processing happens before the originating command
returns.
"""

from decimal import ROUND_HALF_UP, Decimal

import structlog
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from moderation.domain import moderation
from moderation.exceptions import ProductNotFound
from moderation.product.product import Product, empty_distribution
from moderation.review.events import ReviewCountabilityChanged
from moderation.review.review import SUB_RATING_ASPECTS, Review, ReviewStatus, is_countable

logger = structlog.get_logger(__name__)

PAGE_SIZE = 100
MAX_RECOMPUTE_ATTEMPTS = 3


def _round_one_decimal(value) -> float:
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def summarize_ratings(ratings) -> dict:
    """Summarise overall ratings (integers 1-5) into the product aggregates."""
    distribution = {star: 0 for star in range(1, 6)}
    for rating in ratings:
        distribution[rating] += 1

    total = sum(distribution.values())
    if total == 0:
        return {"avg_rating": 0.0, "total_reviews": 0, "rating_distribution": distribution}

    weighted = sum(star * count for star, count in distribution.items())
    return {
        "avg_rating": _round_one_decimal(Decimal(weighted) / Decimal(total)),
        "total_reviews": total,
        "rating_distribution": distribution,
    }


def _product_reviews(product_id):
    repo = current_domain.repository_for(Review)
    offset = 0
    while True:
        page = (
            repo._dao.query.filter(
                product_id=str(product_id),
                status=ReviewStatus.APPROVED.value,
                is_deleted=False,
            )
            .order_by("created_at")
            .offset(offset)
            .limit(PAGE_SIZE)
            .all()
        )
        yield from page.items
        if len(page.items) < PAGE_SIZE:
            return
        offset += PAGE_SIZE


def countable_reviews(product_id) -> list:
    return [review for review in _product_reviews(product_id) if is_countable(review)]


def _load_product(product_id) -> Product:
    try:
        return current_domain.repository_for(Product).get(str(product_id))
    except ObjectNotFoundError:
        raise ProductNotFound(f"Product {product_id} not found") from None


def recompute_product_rating(product_id) -> dict:
    """Recompute and store a product's rating aggregates. Returns the summary.

    Overlapping recomputes settle as last writer wins: a save that lost the
    version race reloads the product and recomputes from fresh reviews.
    """
    attempt = 1
    while True:
        product = _load_product(product_id)
        summary = summarize_ratings(review.rating.score for review in countable_reviews(product_id))

        product.apply_rating_summary(
            avg_rating=summary["avg_rating"],
            total_reviews=summary["total_reviews"],
            distribution=summary["rating_distribution"],
        )
        try:
            current_domain.repository_for(Product).add(product)
            break
        except ExpectedVersionError:
            if attempt >= MAX_RECOMPUTE_ATTEMPTS:
                raise
            logger.warning("product_rating_recompute_conflict", product_id=str(product_id), attempt=attempt)
            attempt += 1

    logger.info(
        "product_rating_recomputed",
        product_id=str(product_id),
        avg_rating=summary["avg_rating"],
        total_reviews=summary["total_reviews"],
    )
    return summary


def get_review_stats(product_id) -> dict:
    """Stored rating aggregates plus average sub-ratings over countable reviews."""
    product = _load_product(product_id)

    sub_rating_totals = {aspect: [] for aspect in SUB_RATING_ASPECTS}
    for review in countable_reviews(product_id):
        if review.sub_ratings is None:
            continue
        for aspect, score in review.sub_ratings.answered().items():
            sub_rating_totals[aspect].append(score)

    sub_ratings = {
        aspect: _round_one_decimal(sum(scores) / len(scores)) if scores else 0.0
        for aspect, scores in sub_rating_totals.items()
    }

    distribution = empty_distribution()
    distribution.update({str(star): count for star, count in product.distribution.items()})

    return {
        "product_id": str(product.id),
        "avg_rating": product.avg_rating or 0.0,
        "total_reviews": product.total_reviews or 0,
        "rating_distribution": {int(star): count for star, count in distribution.items()},
        "sub_ratings": sub_ratings,
    }


@moderation.event_handler(part_of=Review)
class ProductRatingAggregator:
    """Keeps product rating aggregates in step with review countability."""

    @handle(ReviewCountabilityChanged)
    def on_countability_changed(self, event: ReviewCountabilityChanged) -> None:
        recompute_product_rating(event.product_id)
