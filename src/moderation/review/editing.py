"""EditReview — the author rewrites their review.

Any edit sends the review back to PENDING for another moderation pass,
whatever status it had. Product and reviewer never change.
"""

from protean.exceptions import ValidationError
from protean.fields import Dict, Identifier, Integer, String, Text
from protean.utils.mixins import handle

from moderation.domain import moderation
from moderation.exceptions import NotReviewAuthor
from moderation.review.queries import load_review, save_review
from moderation.review.review import Review


@moderation.command(part_of="Review")
class EditReview:
    review_id = Identifier(required=True)
    editor_id = Identifier(required=True)  # Must match original author
    title = String(max_length=200)
    content = Text()
    rating = Integer()
    sub_ratings = Dict()


@moderation.command_handler(part_of=Review)
class EditReviewHandler:
    @handle(EditReview)
    def edit_review(self, command):
        review = load_review(command.review_id)

        if str(review.reviewer_id) != str(command.editor_id):
            raise NotReviewAuthor("You can only edit your own reviews")

        kwargs = {}
        if command.title is not None:
            kwargs["title"] = command.title
        if command.content is not None:
            kwargs["content"] = command.content
        if command.rating is not None:
            kwargs["rating"] = command.rating
        if command.sub_ratings is not None:
            kwargs["sub_ratings"] = command.sub_ratings

        if not kwargs:
            raise ValidationError({"review": ["Nothing to update"]})

        review.edit(**kwargs)
        save_review(review)
