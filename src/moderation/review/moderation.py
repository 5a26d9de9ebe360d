"""ModerateReview — a moderator sets a review's status.

Approving publishes the review (first approval only stamps the date);
rejecting or flagging takes it out of the product rating. The rating
aggregator and the reviewer notification both run off the resulting
events before the command returns.
"""

from protean.fields import Identifier, String, Text
from protean.utils.mixins import handle

from moderation.domain import moderation
from moderation.review.queries import load_review, save_review
from moderation.review.review import Review


@moderation.command(part_of="Review")
class ModerateReview:
    review_id = Identifier(required=True)
    status = String(required=True, max_length=20)  # "Pending", "Approved", "Rejected", "Flagged"
    moderator_id = Identifier()
    moderation_note = Text()


@moderation.command_handler(part_of=Review)
class ModerateReviewHandler:
    @handle(ModerateReview)
    def moderate_review(self, command):
        review = load_review(command.review_id)

        review.moderate(
            status=command.status,
            moderator_id=command.moderator_id,
            note=command.moderation_note,
        )

        save_review(review)
