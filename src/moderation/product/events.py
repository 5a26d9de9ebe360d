"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from moderation.domain import moderation


@moderation.event(part_of="Product")
class ProductRegistered:
    """A vendor's product became known to the moderation domain."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    slug = String(required=True)
    owner_id = Identifier(required=True)
    registered_at = DateTime(required=True)


@moderation.event(part_of="Product")
class ProductRatingRecalculated:
    """The product's rating aggregates were recomputed from its countable reviews."""

    __version__ = 1

    product_id = Identifier(required=True)
    avg_rating = Float(required=True)
    total_reviews = Integer(required=True)
    rating_distribution = Text(required=True)  # JSON: {"1": n, ..., "5": n}
    recalculated_at = DateTime(required=True)
