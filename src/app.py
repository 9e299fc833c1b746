"""Push relay FastAPI application.

Registers device tokens, relays messages to users and broadcasts to topics.
Every request under ``/messaging`` runs inside the messaging domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the domain.toml overlay (memory provider by default,
# PostgreSQL under "production").
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from messaging.config import get_settings
from messaging.domain import messaging

messaging.init()

_DOMAIN_PREFIXES = ("/messaging",)


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Push Relay API",
    description="Push-notification session registry and relay",
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
    """Push the messaging domain context for relay requests."""
    if request.url.path.startswith(_DOMAIN_PREFIXES):
        with messaging.domain_context():
            response = await call_next(request)
        return response
    # Health check, docs, etc.
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from messaging.api.routes import router as messaging_router  # noqa: E402

app.include_router(messaging_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    settings = get_settings()
    return JSONResponse(
        content={
            "status": "ok",
            "domain": messaging.name,
            "session_store": settings.session_store,
            "push_gateway": settings.push_gateway,
            "profile_topic": settings.profile_topic,
        }
    )
