"""Shared BDD fixtures and step definitions for the Moderation domain."""

import pytest
from moderation.dispute.dispute import Dispute
from moderation.dispute.events import (
    DisputeDetailsUpdated,
    DisputeStatusChanged,
    DisputeWithdrawn,
    ExplanationAdded,
    ExplanationUpdated,
)
from moderation.review.events import (
    ReviewCountabilityChanged,
    ReviewEdited,
    ReviewModerated,
    ReviewPlacedUnderDispute,
    ReviewReleasedFromDispute,
)
from moderation.review.review import Review
from protean.exceptions import InvalidOperationError, ValidationError
from pytest_bdd import given, parsers, then

_EVENT_CLASSES = {
    "ReviewCountabilityChanged": ReviewCountabilityChanged,
    "ReviewEdited": ReviewEdited,
    "ReviewModerated": ReviewModerated,
    "ReviewPlacedUnderDispute": ReviewPlacedUnderDispute,
    "ReviewReleasedFromDispute": ReviewReleasedFromDispute,
    "DisputeDetailsUpdated": DisputeDetailsUpdated,
    "DisputeStatusChanged": DisputeStatusChanged,
    "DisputeWithdrawn": DisputeWithdrawn,
    "ExplanationAdded": ExplanationAdded,
    "ExplanationUpdated": ExplanationUpdated,
}


@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


def _submitted_review(reviewer_id="user-bdd"):
    review = Review.submit(
        product_id="prod-bdd",
        reviewer_id=reviewer_id,
        rating=4,
        title="BDD Test Review",
        content="A review written for behaviour scenarios.",
    )
    review._events.clear()
    return review


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a pending review", target_fixture="review")
def pending_review():
    return _submitted_review()


@given(parsers.cfparse('a pending review by "{reviewer_id}"'), target_fixture="review")
def pending_review_by(reviewer_id):
    return _submitted_review(reviewer_id)


@given("an approved review", target_fixture="review")
def approved_review():
    review = _submitted_review()
    review.moderate("Approved", moderator_id="mod-bdd")
    review._events.clear()
    return review


@given(parsers.cfparse('a dispute by vendor "{vendor_id}" on the review'), target_fixture="dispute")
def dispute_on_review(review, vendor_id):
    dispute = Dispute.open(
        review_id=review.id,
        vendor_id=vendor_id,
        product_id=review.product_id,
        reason="false-or-misleading-information",
        description="The review describes a feature we never shipped.",
    )
    dispute._events.clear()
    review.place_under_dispute(dispute.id)
    review._events.clear()
    return dispute


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the review status is "{status}"'))
def review_status_is(review, status):
    assert review.status == status


@then(parsers.cfparse('the dispute status is "{status}"'))
def dispute_status_is(dispute, status):
    assert dispute.status == status


@then("the action fails with a validation error")
def action_fails_with_validation_error(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then("the action is forbidden")
def action_is_forbidden(error):
    assert error["exc"] is not None, "Expected the action to be refused"
    assert isinstance(error["exc"], InvalidOperationError)


@then(parsers.cfparse("a {event_type} event is raised on the review"))
def review_event_raised(review, event_type):
    event_cls = _EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in review._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in review._events]}"


@then(parsers.cfparse("a {event_type} event is raised on the dispute"))
def dispute_event_raised(dispute, event_type):
    event_cls = _EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in dispute._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in dispute._events]}"
