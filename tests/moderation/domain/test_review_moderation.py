"""Tests for the Review moderation state machine and countability tracking."""

import pytest
from moderation.review.events import ReviewCountabilityChanged, ReviewModerated
from moderation.review.review import Review, ReviewStatus, is_countable
from protean.exceptions import ValidationError


def _make_review(**overrides):
    defaults = {
        "product_id": "prod-001",
        "reviewer_id": "user-001",
        "rating": 4,
        "title": "Solid tool",
        "content": "Does what it says and the setup was painless.",
    }
    defaults.update(overrides)
    review = Review.submit(**defaults)
    review._events.clear()
    return review


def _countability_events(review):
    return [e for e in review._events if isinstance(e, ReviewCountabilityChanged)]


class TestModerationTransitions:
    @pytest.mark.parametrize(
        "status",
        [
            ReviewStatus.APPROVED.value,
            ReviewStatus.REJECTED.value,
            ReviewStatus.FLAGGED.value,
            ReviewStatus.PENDING.value,
        ],
    )
    def test_moderator_can_set_status(self, status):
        review = _make_review()
        review.moderate(status)
        assert review.status == status

    def test_any_status_to_any_other(self):
        review = _make_review()
        review.moderate(ReviewStatus.REJECTED.value)
        review.moderate(ReviewStatus.FLAGGED.value)
        review.moderate(ReviewStatus.APPROVED.value)
        review.moderate(ReviewStatus.PENDING.value)
        assert review.status == ReviewStatus.PENDING.value

    def test_dispute_status_not_settable_by_moderator(self):
        review = _make_review()
        with pytest.raises(ValidationError) as exc:
            review.moderate(ReviewStatus.DISPUTE.value)
        assert "status" in exc.value.messages
        assert review.status == ReviewStatus.PENDING.value

    def test_unknown_status_rejected(self):
        review = _make_review()
        with pytest.raises(ValidationError):
            review.moderate("Published")

    def test_moderation_records_moderator(self):
        review = _make_review()
        review.moderate(ReviewStatus.APPROVED.value, moderator_id="mod-001")
        assert str(review.moderated_by) == "mod-001"


class TestPublishedAt:
    def test_first_approval_sets_published_at(self):
        review = _make_review()
        review.moderate(ReviewStatus.APPROVED.value)
        assert review.published_at is not None

    def test_published_at_set_only_once(self):
        review = _make_review()
        review.moderate(ReviewStatus.APPROVED.value)
        first = review.published_at

        review.moderate(ReviewStatus.REJECTED.value)
        assert review.published_at == first

        review.moderate(ReviewStatus.APPROVED.value)
        assert review.published_at == first

    def test_rejection_does_not_publish(self):
        review = _make_review()
        review.moderate(ReviewStatus.REJECTED.value)
        assert review.published_at is None


class TestModerationNote:
    def test_note_recorded(self):
        review = _make_review()
        review.moderate(ReviewStatus.REJECTED.value, note="Please remove the pricing rant")
        assert review.moderation_note == "Please remove the pricing rant"

    def test_note_overwrites_previous(self):
        review = _make_review()
        review.moderate(ReviewStatus.FLAGGED.value, note="First look")
        review.moderate(ReviewStatus.REJECTED.value, note="Second look")
        assert review.moderation_note == "Second look"

    def test_absent_note_keeps_previous(self):
        review = _make_review()
        review.moderate(ReviewStatus.FLAGGED.value, note="Keep me")
        review.moderate(ReviewStatus.APPROVED.value)
        assert review.moderation_note == "Keep me"


class TestModerationEvents:
    def test_moderate_raises_moderated_event(self):
        review = _make_review()
        review.moderate(ReviewStatus.REJECTED.value, moderator_id="mod-001", note="Off topic")
        moderated = [e for e in review._events if isinstance(e, ReviewModerated)]
        assert len(moderated) == 1
        assert moderated[0].previous_status == ReviewStatus.PENDING.value
        assert moderated[0].status == ReviewStatus.REJECTED.value
        assert moderated[0].moderation_note == "Off topic"

    def test_approval_flips_countability(self):
        review = _make_review()
        review.moderate(ReviewStatus.APPROVED.value)
        events = _countability_events(review)
        assert len(events) == 1
        assert events[0].countable is True

    def test_countability_event_precedes_moderated_event(self):
        review = _make_review()
        review.moderate(ReviewStatus.APPROVED.value)
        names = [e.__class__.__name__ for e in review._events]
        assert names.index("ReviewCountabilityChanged") < names.index("ReviewModerated")

    def test_rejecting_approved_review_flips_countability_off(self):
        review = _make_review()
        review.moderate(ReviewStatus.APPROVED.value)
        review._events.clear()

        review.moderate(ReviewStatus.REJECTED.value)
        events = _countability_events(review)
        assert len(events) == 1
        assert events[0].countable is False

    def test_reapproving_approved_review_does_not_flip(self):
        review = _make_review()
        review.moderate(ReviewStatus.APPROVED.value)
        review._events.clear()

        review.moderate(ReviewStatus.APPROVED.value)
        assert _countability_events(review) == []

    def test_rejecting_pending_review_does_not_flip(self):
        review = _make_review()
        review.moderate(ReviewStatus.REJECTED.value)
        assert _countability_events(review) == []
        assert not is_countable(review)
