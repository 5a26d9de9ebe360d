"""Pydantic request/response schemas for the Moderation API.

These are separate from Protean commands (anti-corruption pattern).
The API layer is the external contract; commands are internal domain concepts.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class SubRatingsSchema(BaseModel):
    ease_of_use: int = Field(default=0, ge=0, le=7)
    customer_support: int = Field(default=0, ge=0, le=7)
    features: int = Field(default=0, ge=0, le=7)
    pricing: int = Field(default=0, ge=0, le=7)
    technical_support: int = Field(default=0, ge=0, le=7)


class RegisterProductRequest(BaseModel):
    name: str = Field(max_length=255)
    slug: str = Field(max_length=255)
    owner_id: str


class SubmitReviewRequest(BaseModel):
    product_id: str
    reviewer_id: str
    rating: int = Field(ge=1, le=5)
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1, max_length=5000)
    sub_ratings: SubRatingsSchema | None = None


class EditReviewRequest(BaseModel):
    editor_id: str
    title: str | None = Field(default=None, min_length=1, max_length=200)
    content: str | None = Field(default=None, min_length=1, max_length=5000)
    rating: int | None = Field(default=None, ge=1, le=5)
    sub_ratings: SubRatingsSchema | None = None


class ActorRequest(BaseModel):
    actor_id: str
    actor_role: str = "user"


class ModerateReviewRequest(BaseModel):
    status: str  # "Pending", "Approved", "Rejected" or "Flagged"
    moderator_id: str | None = None
    moderation_note: str | None = None


class HelpfulVoteRequest(BaseModel):
    voter_id: str


class CreateDisputeRequest(BaseModel):
    review_id: str
    vendor_id: str
    reason: str
    description: str = Field(min_length=10, max_length=2000)


class UpdateDisputeRequest(BaseModel):
    vendor_id: str
    reason: str | None = None
    description: str | None = Field(default=None, min_length=10, max_length=2000)
    status: str | None = None


class AdminUpdateDisputeRequest(BaseModel):
    admin_id: str
    status: str


class ExplanationRequest(BaseModel):
    author_id: str
    content: str = Field(min_length=1, max_length=2000)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ProductIdResponse(BaseModel):
    product_id: str


class ReviewIdResponse(BaseModel):
    review_id: str


class DisputeIdResponse(BaseModel):
    dispute_id: str


class ExplanationIdResponse(BaseModel):
    explanation_id: str


class HelpfulCountResponse(BaseModel):
    helpful_count: int


class ReviewStatsResponse(BaseModel):
    product_id: str
    avg_rating: float
    total_reviews: int
    rating_distribution: dict[int, int]
    sub_ratings: dict[str, float]


class StatusResponse(BaseModel):
    status: str = "ok"
