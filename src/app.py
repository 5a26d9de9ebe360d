"""Review Moderation FastAPI application.

Web server that processes commands synchronously via HTTP. Every request
runs inside the moderation domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied.
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from moderation.domain import moderation  # noqa: E402
from moderation.utils.logging import add_context, clear_context

moderation.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Review Moderation API",
    description="Product reviews, rating aggregation, moderation and vendor disputes",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the moderation domain context for each request."""
    add_context(method=request.method, path=request.url.path)
    try:
        with moderation.domain_context():
            response = await call_next(request)
    finally:
        clear_context()
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from moderation.api.errors import register_moderation_exception_handlers  # noqa: E402
from moderation.api.routes import dispute_router, product_router, review_router  # noqa: E402

app.include_router(product_router)
app.include_router(review_router)
app.include_router(dispute_router)
register_moderation_exception_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": moderation.name})
