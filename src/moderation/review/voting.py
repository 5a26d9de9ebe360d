"""VoteHelpful and RemoveHelpfulVote — "was this review helpful?".

Votes form a set: one per user per review. Both handlers return the
review's helpful count after the change. A save that loses the version
race to a concurrent vote reloads the review and applies the change
again, so a repeat vote by the same user surfaces as ``AlreadyVoted``.
"""

import structlog
from protean.exceptions import ExpectedVersionError
from protean.fields import Identifier
from protean.utils.mixins import handle

from moderation.domain import moderation
from moderation.review.queries import load_review, save_review
from moderation.review.review import Review

logger = structlog.get_logger(__name__)

MAX_VOTE_ATTEMPTS = 3


@moderation.command(part_of="Review")
class VoteHelpful:
    review_id = Identifier(required=True)
    voter_id = Identifier(required=True)


@moderation.command(part_of="Review")
class RemoveHelpfulVote:
    review_id = Identifier(required=True)
    voter_id = Identifier(required=True)


def _apply_vote_change(review_id, voter_id, change):
    attempt = 1
    while True:
        review = load_review(review_id)
        count = change(review, voter_id)
        try:
            save_review(review)
            return count
        except ExpectedVersionError:
            if attempt >= MAX_VOTE_ATTEMPTS:
                raise
            logger.warning("helpful_vote_conflict", review_id=str(review_id), voter_id=str(voter_id), attempt=attempt)
            attempt += 1


@moderation.command_handler(part_of=Review)
class HelpfulVoteHandler:
    @handle(VoteHelpful)
    def vote_helpful(self, command):
        return _apply_vote_change(command.review_id, command.voter_id, Review.vote_helpful)

    @handle(RemoveHelpfulVote)
    def remove_helpful_vote(self, command):
        return _apply_vote_change(command.review_id, command.voter_id, Review.remove_helpful_vote)
