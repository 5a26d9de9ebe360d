"""Template registry — maps NotificationType to template classes.

Each template renders the notification title and message from event
context. Templates that also go out by email carry ``email_template``
and ``email_subject``.
"""

from moderation.templates.dispute_explanation import (
    DisputeExplanationTemplate,
    DisputeExplanationUpdatedTemplate,
)
from moderation.templates.dispute_status_update import DisputeStatusUpdateTemplate
from moderation.templates.new_review import NewReviewTemplate
from moderation.templates.review_approved import ReviewApprovedTemplate
from moderation.templates.review_disputed import ReviewDisputedTemplate
from moderation.templates.review_flagged import ReviewFlaggedTemplate
from moderation.templates.review_rejected import ReviewRejectedTemplate
from moderation.templates.types import NotificationType

TEMPLATE_REGISTRY: dict[str, type] = {
    NotificationType.PRODUCT_REVIEW.value: NewReviewTemplate,
    NotificationType.REVIEW_APPROVED.value: ReviewApprovedTemplate,
    NotificationType.REVIEW_REJECTED.value: ReviewRejectedTemplate,
    NotificationType.REVIEW_FLAGGED.value: ReviewFlaggedTemplate,
    NotificationType.REVIEW_DISPUTE.value: ReviewDisputedTemplate,
    NotificationType.DISPUTE_STATUS_UPDATE.value: DisputeStatusUpdateTemplate,
    NotificationType.DISPUTE_EXPLANATION.value: DisputeExplanationTemplate,
    NotificationType.DISPUTE_EXPLANATION_UPDATE.value: DisputeExplanationUpdatedTemplate,
}


def get_template(notification_type: str):
    """Look up a template class by notification type string."""
    template_cls = TEMPLATE_REGISTRY.get(notification_type)
    if template_cls is None:
        raise ValueError(f"No template registered for notification type: {notification_type}")
    return template_cls
