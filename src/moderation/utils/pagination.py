"""Page/limit arithmetic shared by list readers."""

import math

from protean.exceptions import ValidationError

MAX_PAGE_SIZE = 100


def normalize_page(page, limit) -> tuple[int, int]:
    try:
        page, limit = int(page), int(limit)
    except (TypeError, ValueError):
        raise ValidationError({"pagination": ["Page and limit must be integers"]}) from None

    if page < 1:
        raise ValidationError({"page": ["Page must be 1 or greater"]})
    if limit < 1 or limit > MAX_PAGE_SIZE:
        raise ValidationError({"limit": [f"Limit must be between 1 and {MAX_PAGE_SIZE}"]})
    return page, limit


def pagination(page: int, limit: int, total: int) -> dict:
    total_pages = math.ceil(total / limit) if total else 0
    return {
        "current_page": page,
        "total_pages": total_pages,
        "total_items": total,
        "items_per_page": limit,
        "has_next_page": page < total_pages,
        "has_prev_page": page > 1,
    }
