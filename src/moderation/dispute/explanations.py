"""AddExplanation and UpdateExplanation — the dispute's discussion thread.

The vendor and the disputed review's author may both post; each may
only edit what they wrote.
"""

from protean.fields import Identifier, Text
from protean.utils.mixins import handle

from moderation.dispute.dispute import Dispute
from moderation.dispute.queries import load_dispute, save_dispute
from moderation.domain import moderation
from moderation.exceptions import NotDisputeParticipant
from moderation.review.queries import load_review


@moderation.command(part_of="Dispute")
class AddExplanation:
    dispute_id = Identifier(required=True)
    author_id = Identifier(required=True)
    content = Text(required=True)


@moderation.command(part_of="Dispute")
class UpdateExplanation:
    dispute_id = Identifier(required=True)
    explanation_id = Identifier(required=True)
    author_id = Identifier(required=True)
    content = Text(required=True)


@moderation.command_handler(part_of=Dispute)
class ExplanationHandler:
    @handle(AddExplanation)
    def add_explanation(self, command):
        dispute = load_dispute(command.dispute_id)
        review = load_review(dispute.review_id)

        author = str(command.author_id)
        if author not in (str(dispute.vendor_id), str(review.reviewer_id)):
            raise NotDisputeParticipant("Only the vendor and the review author can add explanations")

        explanation = dispute.add_explanation(command.author_id, command.content)
        save_dispute(dispute)
        return str(explanation.id)

    @handle(UpdateExplanation)
    def update_explanation(self, command):
        dispute = load_dispute(command.dispute_id)
        load_review(dispute.review_id)

        dispute.update_explanation(command.explanation_id, command.author_id, command.content)
        save_dispute(dispute)
