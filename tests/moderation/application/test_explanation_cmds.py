"""Application tests for dispute explanations."""

import pytest
from moderation.dispute.dispute import Dispute
from moderation.dispute.explanations import AddExplanation, UpdateExplanation
from moderation.dispute.opening import CreateDispute
from moderation.exceptions import (
    DisputeNotFound,
    ExplanationNotFound,
    NotDisputeParticipant,
    NotExplanationAuthor,
)
from moderation.product.registration import RegisterProduct
from moderation.review.submission import SubmitReview
from protean import current_domain
from protean.exceptions import ValidationError

VENDOR = "vendor-001"
REVIEWER = "user-001"


@pytest.fixture()
def dispute_id(directory):
    directory.add_contact(VENDOR, name="Acme Inc", email="vendor@acme.test")
    directory.add_contact(REVIEWER, name="Jane Doe", email="jane@example.test")

    product_id = current_domain.process(
        RegisterProduct(name="Acme CRM", slug="acme-crm", owner_id=VENDOR),
        asynchronous=False,
    )
    review_id = current_domain.process(
        SubmitReview(
            product_id=product_id,
            reviewer_id=REVIEWER,
            rating=1,
            title="Broken exports",
            content="CSV exports have been failing for weeks.",
        ),
        asynchronous=False,
    )
    return current_domain.process(
        CreateDispute(
            review_id=review_id,
            vendor_id=VENDOR,
            reason="false-or-misleading-information",
            description="Exports were fixed in the March release.",
        ),
        asynchronous=False,
    )


def _add(dispute_id, author_id, content):
    return current_domain.process(
        AddExplanation(dispute_id=dispute_id, author_id=author_id, content=content),
        asynchronous=False,
    )


def _update(dispute_id, explanation_id, author_id, content):
    current_domain.process(
        UpdateExplanation(
            dispute_id=dispute_id,
            explanation_id=explanation_id,
            author_id=author_id,
            content=content,
        ),
        asynchronous=False,
    )


class TestAddExplanation:
    def test_vendor_and_reviewer_can_post(self, dispute_id):
        _add(dispute_id, VENDOR, "Here is the changelog entry.")
        _add(dispute_id, REVIEWER, "Still failing for me today.")

        dispute = current_domain.repository_for(Dispute).get(dispute_id)
        assert len(dispute.explanations) == 2
        assert {str(e.author_id) for e in dispute.explanations} == {VENDOR, REVIEWER}

    def test_third_party_rejected(self, dispute_id):
        with pytest.raises(NotDisputeParticipant):
            _add(dispute_id, "user-777", "I have an opinion too.")

    def test_blank_content_rejected(self, dispute_id):
        with pytest.raises(ValidationError):
            _add(dispute_id, VENDOR, "   ")

    def test_unknown_dispute(self):
        with pytest.raises(DisputeNotFound):
            _add("missing", VENDOR, "Hello")

    def test_reviewer_hears_about_vendor_explanation(self, dispute_id, notifier, emailer):
        _add(dispute_id, VENDOR, "Here is the changelog entry.")

        assert [n["type"] for n in notifier.for_user(REVIEWER)][-1] == "DISPUTE_EXPLANATION"
        emails = emailer.to("jane@example.test")
        assert len(emails) == 1
        assert emails[0]["template"] == "dispute-explanation"
        assert emails[0]["data"]["explanation_content"] == "Here is the changelog entry."
        assert emails[0]["data"]["author_name"] == "Acme Inc"

    def test_vendor_hears_about_reviewer_explanation(self, dispute_id, emailer):
        _add(dispute_id, REVIEWER, "Still failing for me today.")

        emails = emailer.to("vendor@acme.test")
        assert len(emails) == 1
        assert emails[0]["data"]["author_name"] == "Jane Doe"
        assert emailer.to("jane@example.test") == []


class TestUpdateExplanation:
    def test_author_edits_own_explanation(self, dispute_id):
        explanation_id = _add(dispute_id, VENDOR, "First draft")

        _update(dispute_id, explanation_id, VENDOR, "Final wording")

        dispute = current_domain.repository_for(Dispute).get(dispute_id)
        assert dispute.explanations[0].content == "Final wording"

    def test_other_participant_cannot_edit(self, dispute_id):
        explanation_id = _add(dispute_id, VENDOR, "First draft")

        with pytest.raises(NotExplanationAuthor):
            _update(dispute_id, explanation_id, REVIEWER, "Rewritten by someone else")

    def test_unknown_explanation(self, dispute_id):
        with pytest.raises(ExplanationNotFound):
            _update(dispute_id, "missing", VENDOR, "Anything")

    def test_edit_notifies_other_party(self, dispute_id, emailer):
        explanation_id = _add(dispute_id, REVIEWER, "First draft")
        emailer.reset()

        _update(dispute_id, explanation_id, REVIEWER, "Clarified wording")

        emails = emailer.to("vendor@acme.test")
        assert len(emails) == 1
        assert emails[0]["template"] == "dispute-explanation-update"
        assert emails[0]["data"]["explanation_content"] == "Clarified wording"
