"""FastAPI routes for the Moderation bounded context.

Each route translates between Pydantic schemas (external contract) and
Protean commands (internal domain concepts). Reads go straight to the
reader functions.
"""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from moderation.api.schemas import (
    ActorRequest,
    AdminUpdateDisputeRequest,
    CreateDisputeRequest,
    DisputeIdResponse,
    EditReviewRequest,
    ExplanationIdResponse,
    ExplanationRequest,
    HelpfulCountResponse,
    HelpfulVoteRequest,
    ModerateReviewRequest,
    ProductIdResponse,
    RegisterProductRequest,
    ReviewIdResponse,
    ReviewStatsResponse,
    StatusResponse,
    SubmitReviewRequest,
    UpdateDisputeRequest,
)
from moderation.dispute.explanations import AddExplanation, UpdateExplanation
from moderation.dispute.listing import get_dispute, list_disputes
from moderation.dispute.opening import CreateDispute
from moderation.dispute.updating import AdminUpdateDispute, UpdateDispute
from moderation.dispute.withdrawal import DeleteDispute
from moderation.product.rating import get_review_stats
from moderation.product.registration import RegisterProduct
from moderation.projections.moderation_queue import moderation_queue
from moderation.review.editing import EditReview
from moderation.review.moderation import ModerateReview
from moderation.review.queries import list_deleted_reviews
from moderation.review.removal import DeleteReview, RestoreReview
from moderation.review.submission import SubmitReview
from moderation.review.voting import RemoveHelpfulVote, VoteHelpful

product_router = APIRouter(prefix="/products", tags=["products"])
review_router = APIRouter(prefix="/reviews", tags=["reviews"])
dispute_router = APIRouter(prefix="/disputes", tags=["disputes"])


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def register_product(body: RegisterProductRequest) -> ProductIdResponse:
    """Make a vendor's product reviewable."""
    command = RegisterProduct(name=body.name, slug=body.slug, owner_id=body.owner_id)
    product_id = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=product_id)


@product_router.get("/{product_id}/review-stats", response_model=ReviewStatsResponse)
async def review_stats(product_id: str) -> ReviewStatsResponse:
    """Rating aggregates and sub-rating averages for a product."""
    return ReviewStatsResponse(**get_review_stats(product_id))


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------
@review_router.post("", status_code=201, response_model=ReviewIdResponse)
async def submit_review(body: SubmitReviewRequest) -> ReviewIdResponse:
    """Submit a new product review."""
    command = SubmitReview(
        product_id=body.product_id,
        reviewer_id=body.reviewer_id,
        rating=body.rating,
        title=body.title,
        content=body.content,
        sub_ratings=body.sub_ratings.model_dump() if body.sub_ratings else None,
    )
    review_id = current_domain.process(command, asynchronous=False)
    return ReviewIdResponse(review_id=review_id)


@review_router.get("/deleted")
async def deleted_reviews(page: int = 1, limit: int = 10) -> dict:
    """Soft-deleted reviews for administrators."""
    return list_deleted_reviews(page=page, limit=limit)


@review_router.get("/moderation-queue")
async def queued_reviews(status: str | None = None) -> list[dict]:
    """Reviews waiting for a moderator."""
    return moderation_queue(status=status)


@review_router.put("/{review_id}", response_model=StatusResponse)
async def edit_review(review_id: str, body: EditReviewRequest) -> StatusResponse:
    """Edit a review; it goes back to moderation."""
    command = EditReview(
        review_id=review_id,
        editor_id=body.editor_id,
        title=body.title,
        content=body.content,
        rating=body.rating,
        sub_ratings=body.sub_ratings.model_dump() if body.sub_ratings else None,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@review_router.put("/{review_id}/delete", response_model=StatusResponse)
async def delete_review(review_id: str, body: ActorRequest) -> StatusResponse:
    """Soft-delete a review."""
    command = DeleteReview(review_id=review_id, actor_id=body.actor_id, actor_role=body.actor_role)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@review_router.put("/{review_id}/restore", response_model=StatusResponse)
async def restore_review(review_id: str, body: ActorRequest) -> StatusResponse:
    """Restore a soft-deleted review."""
    command = RestoreReview(review_id=review_id, actor_id=body.actor_id, actor_role=body.actor_role)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@review_router.put("/{review_id}/moderate", response_model=StatusResponse)
async def moderate_review(review_id: str, body: ModerateReviewRequest) -> StatusResponse:
    """Set a review's moderation status."""
    command = ModerateReview(
        review_id=review_id,
        status=body.status,
        moderator_id=body.moderator_id,
        moderation_note=body.moderation_note,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@review_router.post("/{review_id}/helpful", response_model=HelpfulCountResponse)
async def vote_helpful(review_id: str, body: HelpfulVoteRequest) -> HelpfulCountResponse:
    """Mark a review as helpful."""
    count = current_domain.process(VoteHelpful(review_id=review_id, voter_id=body.voter_id), asynchronous=False)
    return HelpfulCountResponse(helpful_count=count)


@review_router.delete("/{review_id}/helpful/{voter_id}", response_model=HelpfulCountResponse)
async def remove_helpful_vote(review_id: str, voter_id: str) -> HelpfulCountResponse:
    """Withdraw a helpful vote."""
    count = current_domain.process(RemoveHelpfulVote(review_id=review_id, voter_id=voter_id), asynchronous=False)
    return HelpfulCountResponse(helpful_count=count)


# ---------------------------------------------------------------------------
# Disputes
# ---------------------------------------------------------------------------
@dispute_router.post("", status_code=201, response_model=DisputeIdResponse)
async def create_dispute(body: CreateDisputeRequest) -> DisputeIdResponse:
    """Dispute a review of one of the vendor's products."""
    command = CreateDispute(
        review_id=body.review_id,
        vendor_id=body.vendor_id,
        reason=body.reason,
        description=body.description,
    )
    dispute_id = current_domain.process(command, asynchronous=False)
    return DisputeIdResponse(dispute_id=dispute_id)


@dispute_router.get("")
async def disputes(
    vendor_id: str | None = None,
    status: str | None = None,
    product_slug: str | None = None,
    page: int = 1,
    limit: int = 10,
    sort_by: str = "created_at",
    sort_order: str = "desc",
) -> dict:
    """List disputes, optionally scoped to a vendor."""
    return list_disputes(
        status=status,
        product_slug=product_slug,
        vendor_id=vendor_id,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )


@dispute_router.get("/{dispute_id}")
async def dispute(dispute_id: str, vendor_id: str) -> dict:
    """A vendor's own dispute."""
    return get_dispute(dispute_id, vendor_id)


@dispute_router.put("/{dispute_id}", response_model=StatusResponse)
async def update_dispute(dispute_id: str, body: UpdateDisputeRequest) -> StatusResponse:
    """Revise a dispute or move its status forward."""
    command = UpdateDispute(
        dispute_id=dispute_id,
        vendor_id=body.vendor_id,
        reason=body.reason,
        description=body.description,
        status=body.status,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@dispute_router.put("/{dispute_id}/admin-status", response_model=StatusResponse)
async def admin_update_dispute(dispute_id: str, body: AdminUpdateDisputeRequest) -> StatusResponse:
    """Set any dispute status on behalf of an administrator."""
    command = AdminUpdateDispute(dispute_id=dispute_id, admin_id=body.admin_id, status=body.status)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@dispute_router.delete("/{dispute_id}", response_model=StatusResponse)
async def delete_dispute(dispute_id: str, vendor_id: str) -> StatusResponse:
    """Withdraw and delete a dispute."""
    current_domain.process(DeleteDispute(dispute_id=dispute_id, vendor_id=vendor_id), asynchronous=False)
    return StatusResponse()


@dispute_router.post("/{dispute_id}/explanations", status_code=201, response_model=ExplanationIdResponse)
async def add_explanation(dispute_id: str, body: ExplanationRequest) -> ExplanationIdResponse:
    """Add to the dispute's explanation thread."""
    command = AddExplanation(dispute_id=dispute_id, author_id=body.author_id, content=body.content)
    explanation_id = current_domain.process(command, asynchronous=False)
    return ExplanationIdResponse(explanation_id=explanation_id)


@dispute_router.put("/{dispute_id}/explanations/{explanation_id}", response_model=StatusResponse)
async def update_explanation(dispute_id: str, explanation_id: str, body: ExplanationRequest) -> StatusResponse:
    """Rewrite one's own explanation."""
    command = UpdateExplanation(
        dispute_id=dispute_id,
        explanation_id=explanation_id,
        author_id=body.author_id,
        content=body.content,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()
