"""SubmitReview — a user reviews a vendor's product.

One active review per reviewer and product. The handler rejects an
obvious duplicate up front; the unique ``review_key`` catches the race
where two submissions pass that check together.
"""

from protean.exceptions import ObjectNotFoundError
from protean.fields import Dict, Identifier, Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from moderation.domain import moderation
from moderation.exceptions import DuplicateReview, ProductNotFound
from moderation.product.product import Product
from moderation.review.queries import active_review_for, save_review
from moderation.review.review import Review


@moderation.command(part_of="Review")
class SubmitReview:
    product_id = Identifier(required=True)
    reviewer_id = Identifier(required=True)
    rating = Integer(required=True)
    title = String(required=True, max_length=200)
    content = Text(required=True)
    sub_ratings = Dict()  # {"ease_of_use": 0-7, ...}


@moderation.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        try:
            current_domain.repository_for(Product).get(str(command.product_id))
        except ObjectNotFoundError:
            raise ProductNotFound(f"Product {command.product_id} not found") from None

        if active_review_for(command.reviewer_id, command.product_id) is not None:
            raise DuplicateReview("You have already reviewed this product")

        review = Review.submit(
            product_id=command.product_id,
            reviewer_id=command.reviewer_id,
            rating=command.rating,
            title=command.title,
            content=command.content,
            sub_ratings=command.sub_ratings,
        )
        save_review(review)
        return str(review.id)
