"""Product aggregate — the vendor-owned subject of reviews.

Products are owned by the wider marketplace; this domain only keeps what
moderation needs: the owning vendor (for dispute authorization), the slug
(for dispute listings), and the rating aggregates. The aggregates are
written exclusively through ``apply_rating_summary``.
"""

import json
from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from moderation.domain import moderation
from moderation.product.events import ProductRatingRecalculated, ProductRegistered

RATING_KEYS = ("1", "2", "3", "4", "5")


def empty_distribution() -> dict:
    return {key: 0 for key in RATING_KEYS}


@moderation.aggregate
class Product:
    name = String(required=True, max_length=255)
    slug = String(required=True, max_length=255, unique=True)
    owner_id = Identifier(required=True)

    # Rating aggregates
    avg_rating = Float(default=0.0)
    total_reviews = Integer(default=0)
    rating_distribution = Text()  # JSON: {"1": 0, "2": 0, "3": 0, "4": 0, "5": 0}
    rating_updated_at = DateTime()

    created_at = DateTime()

    @invariant.post
    def distribution_must_match_total(self):
        if not self.rating_distribution:
            return
        distribution = json.loads(self.rating_distribution)
        if sum(distribution.values()) != (self.total_reviews or 0):
            raise ValidationError({"rating_distribution": ["Rating distribution must add up to the total review count"]})

    @classmethod
    def register(cls, name, slug, owner_id):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            slug=slug,
            owner_id=owner_id,
            avg_rating=0.0,
            total_reviews=0,
            rating_distribution=json.dumps(empty_distribution()),
            created_at=now,
        )
        product.raise_(
            ProductRegistered(
                product_id=str(product.id),
                name=name,
                slug=slug,
                owner_id=str(owner_id),
                registered_at=now,
            )
        )
        return product

    @property
    def distribution(self) -> dict:
        if not self.rating_distribution:
            return empty_distribution()
        return {int(key): count for key, count in json.loads(self.rating_distribution).items()}

    def apply_rating_summary(self, avg_rating, total_reviews, distribution):
        """Overwrite the rating aggregates with a fresh summary."""
        now = datetime.now(UTC)
        encoded = json.dumps({str(key): distribution[key] for key in sorted(distribution)})

        with atomic_change(self):
            self.total_reviews = total_reviews
            self.rating_distribution = encoded
            self.avg_rating = avg_rating
            self.rating_updated_at = now

        self.raise_(
            ProductRatingRecalculated(
                product_id=str(self.id),
                avg_rating=avg_rating,
                total_reviews=total_reviews,
                rating_distribution=encoded,
                recalculated_at=now,
            )
        )
