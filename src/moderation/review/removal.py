"""DeleteReview and RestoreReview — soft deletion and its admin-only undo.

The author or an administrator may delete; only an administrator restores.
Deleted reviews stay in storage, stop counting toward the product rating,
and free the reviewer to write a new review of the same product.
"""

from protean.fields import Identifier, String
from protean.utils.mixins import handle

from moderation.domain import moderation
from moderation.exceptions import DuplicateReview, Forbidden, NotReviewAuthor
from moderation.review.queries import active_review_for, load_review, save_review
from moderation.review.review import Review

ADMIN_ROLE = "admin"


@moderation.command(part_of="Review")
class DeleteReview:
    review_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    actor_role = String(max_length=50, default="user")


@moderation.command(part_of="Review")
class RestoreReview:
    review_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    actor_role = String(max_length=50, default="user")


@moderation.command_handler(part_of=Review)
class ReviewRemovalHandler:
    @handle(DeleteReview)
    def delete_review(self, command):
        review = load_review(command.review_id)

        is_author = str(review.reviewer_id) == str(command.actor_id)
        if not is_author and command.actor_role != ADMIN_ROLE:
            raise NotReviewAuthor("You can only delete your own reviews")

        review.soft_delete(deleted_by=command.actor_id)
        save_review(review)

    @handle(RestoreReview)
    def restore_review(self, command):
        if command.actor_role != ADMIN_ROLE:
            raise Forbidden("Only administrators can restore reviews")

        review = load_review(command.review_id, include_deleted=True)

        if review.is_deleted and active_review_for(review.reviewer_id, review.product_id) is not None:
            raise DuplicateReview("The reviewer already has an active review of this product")

        review.restore()
        save_review(review)
