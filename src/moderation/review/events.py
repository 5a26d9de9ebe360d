"""Domain events for the Review aggregate.

All events are versioned, immutable facts representing state changes.
Events are used for:
- Recomputing product rating aggregates (ReviewCountabilityChanged)
- Notifying reviewers and vendors
- Maintaining the moderation queue projection
"""

from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from moderation.domain import moderation


@moderation.event(part_of="Review")
class ReviewSubmitted:
    """A reviewer submitted a new product review."""

    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    reviewer_id = Identifier(required=True)
    rating = Integer(required=True)
    title = String(required=True)
    content = Text(required=True)
    submitted_at = DateTime(required=True)


@moderation.event(part_of="Review")
class ReviewEdited:
    """The reviewer edited their review; it goes back to moderation."""

    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    reviewer_id = Identifier(required=True)
    previous_status = String(required=True)
    title = String()
    content = Text()
    rating = Integer()
    edited_at = DateTime(required=True)


@moderation.event(part_of="Review")
class ReviewModerated:
    """A moderator set the review's status."""

    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    reviewer_id = Identifier(required=True)
    previous_status = String(required=True)
    status = String(required=True)
    moderator_id = Identifier()
    moderation_note = Text()
    published_at = DateTime()
    moderated_at = DateTime(required=True)


@moderation.event(part_of="Review")
class ReviewCountabilityChanged:
    """The review started or stopped counting toward its product's rating."""

    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    countable = Boolean(default=False)
    changed_at = DateTime(required=True)


@moderation.event(part_of="Review")
class ReviewDeleted:
    """The review was soft-deleted by its author or an administrator."""

    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    reviewer_id = Identifier(required=True)
    deleted_by = Identifier(required=True)
    deleted_at = DateTime(required=True)


@moderation.event(part_of="Review")
class ReviewRestored:
    """An administrator restored a soft-deleted review."""

    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    reviewer_id = Identifier(required=True)
    status = String(required=True)
    restored_at = DateTime(required=True)


@moderation.event(part_of="Review")
class HelpfulVoteAdded:
    """A user marked the review as helpful."""

    __version__ = 1

    review_id = Identifier(required=True)
    voter_id = Identifier(required=True)
    helpful_count = Integer(required=True)
    voted_at = DateTime(required=True)


@moderation.event(part_of="Review")
class HelpfulVoteRemoved:
    """A user withdrew their helpful vote."""

    __version__ = 1

    review_id = Identifier(required=True)
    voter_id = Identifier(required=True)
    helpful_count = Integer(required=True)
    removed_at = DateTime(required=True)


@moderation.event(part_of="Review")
class ReviewPlacedUnderDispute:
    """A vendor dispute moved the review into the Dispute status."""

    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    dispute_id = Identifier(required=True)
    previous_status = String(required=True)
    disputed_at = DateTime(required=True)


@moderation.event(part_of="Review")
class ReviewReleasedFromDispute:
    """The dispute closed and the review got its prior status back."""

    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    dispute_id = Identifier(required=True)
    status = String(required=True)
    released_at = DateTime(required=True)
