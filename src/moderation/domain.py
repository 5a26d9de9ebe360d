"""Review Moderation bounded context — review lifecycle, rating aggregation, and disputes.

Owns the review state machine, recomputes product rating aggregates whenever
a review starts or stops counting toward them, and drives the vendor/reviewer
dispute workflow. Notifications and e-mails leave the context through
channel ports and never fail the transition that triggered them.
"""

from protean.domain import Domain

from moderation.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

moderation = Domain(name="moderation")
