"""Domain events for the Dispute aggregate."""

from protean.fields import DateTime, Identifier, String, Text

from moderation.domain import moderation


@moderation.event(part_of="Dispute")
class DisputeOpened:
    """A vendor contested a review of one of their products."""

    __version__ = 1

    dispute_id = Identifier(required=True)
    review_id = Identifier(required=True)
    vendor_id = Identifier(required=True)
    product_id = Identifier(required=True)
    reason = String(required=True)
    description = Text(required=True)
    status = String(required=True)
    opened_at = DateTime(required=True)


@moderation.event(part_of="Dispute")
class DisputeDetailsUpdated:
    """The vendor revised the dispute's reason or description."""

    __version__ = 1

    dispute_id = Identifier(required=True)
    review_id = Identifier(required=True)
    vendor_id = Identifier(required=True)
    reason = String(required=True)
    description = Text(required=True)
    updated_at = DateTime(required=True)


@moderation.event(part_of="Dispute")
class DisputeStatusChanged:
    """The dispute moved between Pending, Active and Resolved."""

    __version__ = 1

    dispute_id = Identifier(required=True)
    review_id = Identifier(required=True)
    vendor_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_status = String(required=True)
    status = String(required=True)
    changed_by = Identifier()
    changed_at = DateTime(required=True)


@moderation.event(part_of="Dispute")
class DisputeWithdrawn:
    """The vendor deleted the dispute."""

    __version__ = 1

    dispute_id = Identifier(required=True)
    review_id = Identifier(required=True)
    vendor_id = Identifier(required=True)
    product_id = Identifier(required=True)
    withdrawn_at = DateTime(required=True)


@moderation.event(part_of="Dispute")
class ExplanationAdded:
    """A dispute participant added to the explanation thread."""

    __version__ = 1

    dispute_id = Identifier(required=True)
    review_id = Identifier(required=True)
    vendor_id = Identifier(required=True)
    product_id = Identifier(required=True)
    explanation_id = Identifier(required=True)
    author_id = Identifier(required=True)
    content = Text(required=True)
    added_at = DateTime(required=True)


@moderation.event(part_of="Dispute")
class ExplanationUpdated:
    """An explanation's author rewrote it."""

    __version__ = 1

    dispute_id = Identifier(required=True)
    review_id = Identifier(required=True)
    vendor_id = Identifier(required=True)
    product_id = Identifier(required=True)
    explanation_id = Identifier(required=True)
    author_id = Identifier(required=True)
    content = Text(required=True)
    updated_at = DateTime(required=True)
