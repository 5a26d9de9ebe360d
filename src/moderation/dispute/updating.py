"""UpdateDispute and AdminUpdateDispute — revise a dispute or move its status.

Vendors edit their own disputes and may only move the status forward
(Pending → Active → Resolved). Administrators may set any status.
"""

from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.mixins import handle

from moderation.dispute.dispute import Dispute, DisputeReason, DisputeStatus
from moderation.dispute.queries import load_dispute, save_dispute
from moderation.domain import moderation


@moderation.command(part_of="Dispute")
class UpdateDispute:
    dispute_id = Identifier(required=True)
    vendor_id = Identifier(required=True)
    reason = String(choices=DisputeReason)
    description = Text()
    status = String(choices=DisputeStatus)


@moderation.command(part_of="Dispute")
class AdminUpdateDispute:
    dispute_id = Identifier(required=True)
    admin_id = Identifier(required=True)
    status = String(required=True, choices=DisputeStatus)


@moderation.command_handler(part_of=Dispute)
class UpdateDisputeHandler:
    @handle(UpdateDispute)
    def update_dispute(self, command):
        dispute = load_dispute(command.dispute_id, vendor_id=command.vendor_id)

        kwargs = {}
        if command.reason is not None:
            kwargs["reason"] = command.reason
        if command.description is not None:
            kwargs["description"] = command.description

        if not kwargs and command.status is None:
            raise ValidationError({"dispute": ["Nothing to update"]})

        if kwargs:
            dispute.update_details(**kwargs)
        if command.status is not None:
            dispute.change_status(command.status, changed_by=command.vendor_id)

        save_dispute(dispute)

    @handle(AdminUpdateDispute)
    def admin_update_dispute(self, command):
        dispute = load_dispute(command.dispute_id)
        dispute.change_status(command.status, changed_by=command.admin_id, forward_only=False)
        save_dispute(dispute)
