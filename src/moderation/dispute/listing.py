"""Dispute readers — vendor-scoped lookups and paginated listings."""

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from moderation.dispute.dispute import Dispute, DisputeStatus
from moderation.dispute.queries import load_dispute
from moderation.exceptions import ProductNotFound
from moderation.product.product import Product
from moderation.product.registration import find_product_by_slug
from moderation.review.review import Review
from moderation.utils.pagination import normalize_page, pagination

SORTABLE_FIELDS = ("created_at", "updated_at", "status")


def _review_summary(review_id):
    try:
        review = current_domain.repository_for(Review).get(str(review_id))
    except ObjectNotFoundError:
        return None
    return {
        "id": str(review.id),
        "title": review.title,
        "content": review.content,
        "rating": review.rating.score,
        "reviewer_id": str(review.reviewer_id),
        "status": review.status,
    }


def _product_summary(product_id):
    try:
        product = current_domain.repository_for(Product).get(str(product_id))
    except ObjectNotFoundError:
        return None
    return {"id": str(product.id), "name": product.name, "slug": product.slug}


def dispute_detail(dispute: Dispute) -> dict:
    data = dispute.to_dict()
    data["explanations"] = sorted(data.get("explanations", []), key=lambda e: str(e["created_at"]))
    data["review"] = _review_summary(dispute.review_id)
    data["product"] = _product_summary(dispute.product_id)
    return data


def get_dispute(dispute_id, vendor_id) -> dict:
    """A vendor's own dispute with its review and product summaries."""
    return dispute_detail(load_dispute(dispute_id, vendor_id=vendor_id))


def list_disputes(
    status=None,
    product_slug=None,
    vendor_id=None,
    page=1,
    limit=10,
    sort_by="created_at",
    sort_order="desc",
) -> dict:
    """Filter, sort and paginate disputes.

    ``vendor_id`` scopes the listing to one vendor; callers serving a
    vendor always pass it. An unknown ``product_slug`` is an error rather
    than an empty page.
    """
    page, limit = normalize_page(page, limit)

    if sort_by not in SORTABLE_FIELDS:
        raise ValidationError({"sort_by": [f"Cannot sort disputes by '{sort_by}'"]})
    if sort_order not in ("asc", "desc"):
        raise ValidationError({"sort_order": ["Sort order must be 'asc' or 'desc'"]})

    filters = {}
    if status is not None:
        try:
            filters["status"] = DisputeStatus(status).value
        except ValueError:
            raise ValidationError({"status": [f"Unknown dispute status: {status}"]}) from None
    if vendor_id is not None:
        filters["vendor_id"] = str(vendor_id)
    if product_slug is not None:
        product = find_product_by_slug(product_slug)
        if product is None:
            raise ProductNotFound(f"Product '{product_slug}' not found")
        filters["product_id"] = str(product.id)

    ordering = sort_by if sort_order == "asc" else f"-{sort_by}"
    query = current_domain.repository_for(Dispute)._dao.query
    if filters:
        query = query.filter(**filters)

    results = query.order_by(ordering).offset((page - 1) * limit).limit(limit).all()

    return {
        "disputes": [dispute_detail(dispute) for dispute in results.items],
        "pagination": pagination(page, limit, results.total),
    }
