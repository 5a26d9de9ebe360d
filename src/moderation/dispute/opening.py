"""CreateDispute — the product's vendor contests a review.

Only the vendor who owns the reviewed product may dispute, and only once
per review.
"""

from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from moderation.dispute.dispute import Dispute, DisputeReason
from moderation.dispute.queries import existing_dispute, save_dispute
from moderation.domain import moderation
from moderation.exceptions import DuplicateDispute, NotProductOwner, ProductNotFound
from moderation.product.product import Product
from moderation.review.queries import load_review


@moderation.command(part_of="Dispute")
class CreateDispute:
    review_id = Identifier(required=True)
    vendor_id = Identifier(required=True)
    reason = String(required=True, choices=DisputeReason)
    description = Text(required=True)


@moderation.command_handler(part_of=Dispute)
class CreateDisputeHandler:
    @handle(CreateDispute)
    def create_dispute(self, command):
        review = load_review(command.review_id)

        try:
            product = current_domain.repository_for(Product).get(str(review.product_id))
        except ObjectNotFoundError:
            raise ProductNotFound(f"Product {review.product_id} not found") from None

        if str(product.owner_id) != str(command.vendor_id):
            raise NotProductOwner("You can only dispute reviews of your own products")

        if existing_dispute(review.id, command.vendor_id) is not None:
            raise DuplicateDispute("You have already disputed this review")

        dispute = Dispute.open(
            review_id=review.id,
            vendor_id=command.vendor_id,
            product_id=review.product_id,
            reason=command.reason,
            description=command.description,
        )
        save_dispute(dispute)
        return str(dispute.id)
