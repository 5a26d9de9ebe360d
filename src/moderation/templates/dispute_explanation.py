"""Dispute explanation templates — the other party hears about new or edited explanations."""

from moderation.templates.types import NotificationType


class DisputeExplanationTemplate:
    notification_type = NotificationType.DISPUTE_EXPLANATION.value
    email_template = "dispute-explanation"
    email_subject = "New Explanation Added to Dispute"

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "title": "New Explanation Added to Dispute",
            "message": "A new explanation has been added to a dispute you are involved in.",
        }


class DisputeExplanationUpdatedTemplate:
    notification_type = NotificationType.DISPUTE_EXPLANATION_UPDATE.value
    email_template = "dispute-explanation-update"
    email_subject = "Explanation Updated in Dispute"

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "title": "Explanation Updated in Dispute",
            "message": "An explanation has been updated in a dispute you are involved in.",
        }
