"""Notification types emitted by the Moderation domain."""

from enum import Enum


class NotificationType(Enum):
    PRODUCT_REVIEW = "PRODUCT_REVIEW"
    REVIEW_APPROVED = "REVIEW_APPROVED"
    REVIEW_REJECTED = "REVIEW_REJECTED"
    REVIEW_FLAGGED = "REVIEW_FLAGGED"
    REVIEW_DISPUTE = "REVIEW_DISPUTE"
    DISPUTE_STATUS_UPDATE = "DISPUTE_STATUS_UPDATE"
    DISPUTE_EXPLANATION = "DISPUTE_EXPLANATION"
    DISPUTE_EXPLANATION_UPDATE = "DISPUTE_EXPLANATION_UPDATE"


class RecipientRole(Enum):
    VENDOR = "vendor"
    REVIEWER = "reviewer"
