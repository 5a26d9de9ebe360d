"""BDD tests for the dispute lifecycle."""

from moderation.dispute.dispute import DisputeStatus
from protean.exceptions import InvalidOperationError, ValidationError
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/dispute_lifecycle.feature")


@when(parsers.cfparse('the vendor sets the dispute status to "{status}"'), target_fixture="dispute")
def vendor_sets_status(dispute, status, error):
    try:
        dispute.change_status(status, changed_by=dispute.vendor_id)
    except ValidationError as exc:
        error["exc"] = exc
    return dispute


@when(parsers.cfparse('an administrator sets the dispute status to "{status}"'), target_fixture="dispute")
def admin_sets_status(dispute, status):
    dispute.change_status(status, changed_by="admin-001", forward_only=False)
    return dispute


@when("the dispute is resolved and the review released", target_fixture="review")
def resolve_and_release(dispute, review):
    dispute.change_status(DisputeStatus.RESOLVED.value, changed_by=dispute.vendor_id)
    review.release_from_dispute(dispute.id)
    return review


@when("a moderator rejects the disputed review", target_fixture="review")
def moderator_rejects(review):
    review.moderate("Rejected", moderator_id="mod-001")
    review._events.clear()
    return review


@when(parsers.cfparse('"{author_id}" explains "{content}"'), target_fixture="dispute")
def add_explanation(dispute, author_id, content):
    dispute.add_explanation(author_id, content)
    return dispute


@when(parsers.cfparse('"{author_id}" edits the latest explanation to "{content}"'), target_fixture="dispute")
def edit_latest_explanation(dispute, author_id, content, error):
    latest = dispute.explanations[-1]
    try:
        dispute.update_explanation(latest.id, author_id, content)
    except InvalidOperationError as exc:
        error["exc"] = exc
    return dispute


@when("the vendor withdraws the dispute", target_fixture="dispute")
def withdraw(dispute):
    dispute.withdraw()
    return dispute


@then(parsers.cfparse("the dispute has {count:d} explanation"))
def dispute_has_explanations(dispute, count):
    assert len(dispute.explanations) == count
