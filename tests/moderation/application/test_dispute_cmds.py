"""Application tests for the dispute command handlers and the review they hold."""

import pytest
from moderation.dispute.dispute import Dispute, DisputeStatus, Explanation
from moderation.dispute.explanations import AddExplanation
from moderation.dispute.opening import CreateDispute
from moderation.dispute.updating import AdminUpdateDispute, UpdateDispute
from moderation.dispute.withdrawal import DeleteDispute
from moderation.exceptions import (
    DisputeNotFound,
    DuplicateDispute,
    NotProductOwner,
    ReviewNotFound,
)
from moderation.product.product import Product
from moderation.product.registration import RegisterProduct
from moderation.review.moderation import ModerateReview
from moderation.review.removal import DeleteReview, RestoreReview
from moderation.review.review import Review, ReviewStatus
from moderation.review.submission import SubmitReview
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError

VENDOR = "vendor-001"
REVIEWER = "user-001"


def _approved_review(rating=2):
    product_id = current_domain.process(
        RegisterProduct(name="Acme CRM", slug="acme-crm", owner_id=VENDOR),
        asynchronous=False,
    )
    review_id = current_domain.process(
        SubmitReview(
            product_id=product_id,
            reviewer_id=REVIEWER,
            rating=rating,
            title="Disappointing",
            content="Support never answered a single ticket.",
        ),
        asynchronous=False,
    )
    current_domain.process(ModerateReview(review_id=review_id, status="Approved"), asynchronous=False)
    return product_id, review_id


def _open_dispute(review_id, vendor_id=VENDOR):
    return current_domain.process(
        CreateDispute(
            review_id=review_id,
            vendor_id=vendor_id,
            reason="false-or-misleading-information",
            description="We answered every ticket within a day.",
        ),
        asynchronous=False,
    )


def _review(review_id):
    return current_domain.repository_for(Review).get(review_id)


def _dispute(dispute_id):
    return current_domain.repository_for(Dispute).get(dispute_id)


class TestCreateDispute:
    def test_returns_identifier_and_persists(self):
        _, review_id = _approved_review()
        dispute_id = _open_dispute(review_id)

        dispute = _dispute(dispute_id)
        assert dispute.status == DisputeStatus.PENDING.value
        assert str(dispute.vendor_id) == VENDOR
        assert str(dispute.review_id) == review_id

    def test_review_moves_into_dispute(self):
        _, review_id = _approved_review()
        dispute_id = _open_dispute(review_id)

        review = _review(review_id)
        assert review.status == ReviewStatus.DISPUTE.value
        assert str(review.dispute_id) == dispute_id
        assert review.status_before_dispute == ReviewStatus.APPROVED.value

    def test_disputed_review_stops_counting(self):
        product_id, review_id = _approved_review()
        _open_dispute(review_id)

        assert current_domain.repository_for(Product).get(product_id).total_reviews == 0

    def test_second_dispute_by_same_vendor_rejected(self):
        _, review_id = _approved_review()
        _open_dispute(review_id)

        with pytest.raises(DuplicateDispute):
            _open_dispute(review_id)

    def test_only_product_owner_may_dispute(self):
        _, review_id = _approved_review()

        with pytest.raises(NotProductOwner):
            _open_dispute(review_id, vendor_id="vendor-999")
        assert _review(review_id).status == ReviewStatus.APPROVED.value

    def test_unknown_review(self):
        with pytest.raises(ReviewNotFound):
            _open_dispute("missing")

    def test_short_description_rejected(self):
        _, review_id = _approved_review()

        with pytest.raises(ValidationError):
            current_domain.process(
                CreateDispute(review_id=review_id, vendor_id=VENDOR, reason="other", description="Too short"),
                asynchronous=False,
            )

    def test_unknown_reason_rejected(self):
        _, review_id = _approved_review()

        with pytest.raises(ValidationError):
            current_domain.process(
                CreateDispute(
                    review_id=review_id,
                    vendor_id=VENDOR,
                    reason="bad-vibes",
                    description="A perfectly long description.",
                ),
                asynchronous=False,
            )


class TestUpdateDispute:
    def test_vendor_revises_details(self):
        _, review_id = _approved_review()
        dispute_id = _open_dispute(review_id)

        current_domain.process(
            UpdateDispute(
                dispute_id=dispute_id,
                vendor_id=VENDOR,
                reason="spam-or-fake-review",
                description="The reviewer never held an account with us.",
            ),
            asynchronous=False,
        )

        dispute = _dispute(dispute_id)
        assert dispute.reason == "spam-or-fake-review"
        assert dispute.description == "The reviewer never held an account with us."

    def test_other_vendor_cannot_see_dispute(self):
        _, review_id = _approved_review()
        dispute_id = _open_dispute(review_id)

        with pytest.raises(DisputeNotFound):
            current_domain.process(
                UpdateDispute(dispute_id=dispute_id, vendor_id="vendor-999", status="Active"),
                asynchronous=False,
            )

    def test_nothing_to_update(self):
        _, review_id = _approved_review()
        dispute_id = _open_dispute(review_id)

        with pytest.raises(ValidationError):
            current_domain.process(UpdateDispute(dispute_id=dispute_id, vendor_id=VENDOR), asynchronous=False)

    def test_vendor_moves_forward(self):
        _, review_id = _approved_review()
        dispute_id = _open_dispute(review_id)

        current_domain.process(
            UpdateDispute(dispute_id=dispute_id, vendor_id=VENDOR, status="Active"),
            asynchronous=False,
        )

        assert _dispute(dispute_id).status == DisputeStatus.ACTIVE.value
        assert _review(review_id).status == ReviewStatus.DISPUTE.value

    def test_vendor_cannot_move_backward(self):
        _, review_id = _approved_review()
        dispute_id = _open_dispute(review_id)
        current_domain.process(
            UpdateDispute(dispute_id=dispute_id, vendor_id=VENDOR, status="Active"),
            asynchronous=False,
        )

        with pytest.raises(ValidationError):
            current_domain.process(
                UpdateDispute(dispute_id=dispute_id, vendor_id=VENDOR, status="Pending"),
                asynchronous=False,
            )
        assert _dispute(dispute_id).status == DisputeStatus.ACTIVE.value

    def test_resolving_restores_review_and_rating(self):
        product_id, review_id = _approved_review(rating=2)
        dispute_id = _open_dispute(review_id)

        current_domain.process(
            UpdateDispute(dispute_id=dispute_id, vendor_id=VENDOR, status="Resolved"),
            asynchronous=False,
        )

        review = _review(review_id)
        assert review.status == ReviewStatus.APPROVED.value
        assert review.dispute_id is None
        product = current_domain.repository_for(Product).get(product_id)
        assert product.total_reviews == 1
        assert product.avg_rating == 2.0

    def test_moderator_decision_survives_resolution(self):
        _, review_id = _approved_review()
        dispute_id = _open_dispute(review_id)
        current_domain.process(ModerateReview(review_id=review_id, status="Rejected"), asynchronous=False)

        current_domain.process(
            UpdateDispute(dispute_id=dispute_id, vendor_id=VENDOR, status="Resolved"),
            asynchronous=False,
        )

        assert _review(review_id).status == ReviewStatus.REJECTED.value


class TestAdminUpdateDispute:
    def test_admin_can_reopen(self):
        _, review_id = _approved_review()
        dispute_id = _open_dispute(review_id)
        current_domain.process(
            AdminUpdateDispute(dispute_id=dispute_id, admin_id="admin-001", status="Resolved"),
            asynchronous=False,
        )

        current_domain.process(
            AdminUpdateDispute(dispute_id=dispute_id, admin_id="admin-001", status="Pending"),
            asynchronous=False,
        )

        assert _dispute(dispute_id).status == DisputeStatus.PENDING.value
        # Reopening leaves the review where the resolution put it
        assert _review(review_id).status == ReviewStatus.APPROVED.value

    def test_unknown_dispute(self):
        with pytest.raises(DisputeNotFound):
            current_domain.process(
                AdminUpdateDispute(dispute_id="missing", admin_id="admin-001", status="Active"),
                asynchronous=False,
            )


class TestDeleteDispute:
    def test_withdrawal_removes_dispute_and_restores_review(self):
        product_id, review_id = _approved_review(rating=5)
        dispute_id = _open_dispute(review_id)

        current_domain.process(DeleteDispute(dispute_id=dispute_id, vendor_id=VENDOR), asynchronous=False)

        with pytest.raises(ObjectNotFoundError):
            _dispute(dispute_id)
        assert _review(review_id).status == ReviewStatus.APPROVED.value
        assert current_domain.repository_for(Product).get(product_id).total_reviews == 1

    def test_vendor_can_dispute_again_after_withdrawal(self):
        _, review_id = _approved_review()
        dispute_id = _open_dispute(review_id)
        current_domain.process(DeleteDispute(dispute_id=dispute_id, vendor_id=VENDOR), asynchronous=False)

        assert _open_dispute(review_id) != dispute_id

    def test_other_vendor_cannot_delete(self):
        _, review_id = _approved_review()
        dispute_id = _open_dispute(review_id)

        with pytest.raises(DisputeNotFound):
            current_domain.process(DeleteDispute(dispute_id=dispute_id, vendor_id="vendor-999"), asynchronous=False)
        assert _dispute(dispute_id).status == DisputeStatus.PENDING.value

    def test_withdrawal_deletes_explanation_rows(self):
        _, review_id = _approved_review()
        dispute_id = _open_dispute(review_id)
        current_domain.process(
            AddExplanation(dispute_id=dispute_id, author_id=VENDOR, content="Ticket log attached."),
            asynchronous=False,
        )
        explanations = current_domain.repository_for(Explanation)._dao
        assert explanations.query.all().total == 1

        current_domain.process(DeleteDispute(dispute_id=dispute_id, vendor_id=VENDOR), asynchronous=False)

        assert explanations.query.all().total == 0


class TestDisputeAfterRestore:
    def test_new_dispute_releases_review_held_by_withdrawn_one(self):
        product_id, review_id = _approved_review(rating=4)
        first = _open_dispute(review_id)

        current_domain.process(DeleteReview(review_id=review_id, actor_id=REVIEWER), asynchronous=False)
        current_domain.process(DeleteDispute(dispute_id=first, vendor_id=VENDOR), asynchronous=False)
        current_domain.process(
            RestoreReview(review_id=review_id, actor_id="admin-001", actor_role="admin"),
            asynchronous=False,
        )
        assert _review(review_id).status == ReviewStatus.DISPUTE.value

        second = _open_dispute(review_id)
        assert str(_review(review_id).dispute_id) == second

        current_domain.process(
            UpdateDispute(dispute_id=second, vendor_id=VENDOR, status="Resolved"),
            asynchronous=False,
        )

        review = _review(review_id)
        assert review.status == ReviewStatus.APPROVED.value
        assert review.dispute_id is None
        assert current_domain.repository_for(Product).get(product_id).total_reviews == 1
