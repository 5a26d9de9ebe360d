"""DeleteDispute — the vendor withdraws their dispute.

The dispute and its explanations are removed from storage.
``DisputeWithdrawn`` is raised first so the review can leave the Dispute
status.
"""

from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from moderation.dispute.dispute import Dispute
from moderation.dispute.queries import load_dispute
from moderation.domain import moderation


@moderation.command(part_of="Dispute")
class DeleteDispute:
    dispute_id = Identifier(required=True)
    vendor_id = Identifier(required=True)


@moderation.command_handler(part_of=Dispute)
class DeleteDisputeHandler:
    @handle(DeleteDispute)
    def delete_dispute(self, command):
        repo = current_domain.repository_for(Dispute)
        dispute = load_dispute(command.dispute_id, vendor_id=command.vendor_id)

        dispute.withdraw()
        repo.add(dispute)
        repo._dao.delete(dispute)
