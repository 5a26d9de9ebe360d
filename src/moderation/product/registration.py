"""RegisterProduct — make a vendor's product known to the moderation domain."""

from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from moderation.domain import moderation
from moderation.product.product import Product


@moderation.command(part_of="Product")
class RegisterProduct:
    name = String(required=True, max_length=255)
    slug = String(required=True, max_length=255)
    owner_id = Identifier(required=True)


@moderation.command_handler(part_of=Product)
class RegisterProductHandler:
    @handle(RegisterProduct)
    def register_product(self, command):
        repo = current_domain.repository_for(Product)

        if repo._dao.query.filter(slug=command.slug).all().items:
            raise ValidationError({"slug": [f"Product slug '{command.slug}' is already taken"]})

        product = Product.register(
            name=command.name,
            slug=command.slug,
            owner_id=command.owner_id,
        )
        repo.add(product)
        return str(product.id)


def find_product_by_slug(slug):
    """Return the product with ``slug``, or None."""
    results = current_domain.repository_for(Product)._dao.query.filter(slug=slug).all()
    return results.items[0] if results.items else None
