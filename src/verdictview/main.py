"""
VerdictView API - Main FastAPI application.

Hosts the results page lifecycle: the analyser stores the raw service
response in a session slot, the results page reads it back normalized.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from verdictview import __version__
from verdictview.config import get_settings
from verdictview.core.models import ResultView
from verdictview.core.normalizer import ResultNormalizer
from verdictview.core.presentation import present
from verdictview.middleware import APITokenMiddleware
from verdictview.storage import SessionStore

logger = logging.getLogger(__name__)


# Global instances
normalizer = ResultNormalizer()
session_store: SessionStore | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - setup and teardown."""
    global session_store

    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    session_store = SessionStore(ttl_seconds=settings.session_ttl_seconds)
    logger.info(f"{settings.app_name} {__version__} started (slot={settings.analysis_slot})")

    yield

    session_store = None


app = FastAPI(
    title="VerdictView API",
    description="Defensive renderer for fact-check analysis results",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(APITokenMiddleware)


# =============================================================================
# Request/Response Models
# =============================================================================


class StoreResponse(BaseModel):
    """Response for storing an analysis."""
    session_id: str
    slot: str
    stored_bytes: int


class ClearResponse(BaseModel):
    """Response for clearing an analysis."""
    session_id: str
    slot: str
    cleared: bool


class EndSessionResponse(BaseModel):
    """Response for dropping a whole session."""
    session_id: str
    slots_removed: int


# =============================================================================
# Helpers
# =============================================================================


def _require_store() -> SessionStore:
    if session_store is None:
        raise HTTPException(status_code=503, detail="Service not initialized")
    return session_store


async def _read_body(request: Request) -> bytes:
    """Read the request body, enforcing the payload size cap."""
    settings = get_settings()
    body = await request.body()
    if len(body) > settings.max_payload_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"Analysis exceeds {settings.max_payload_bytes} bytes",
        )
    return body


def _view(raw: Any) -> ResultView:
    result = normalizer.normalize(raw)
    return present(result, new_check_path=get_settings().new_check_path)


# =============================================================================
# Health
# =============================================================================


@app.get("/health")
async def health() -> dict[str, str]:
    """Basic health check."""
    return {"status": "healthy", "version": __version__}


# =============================================================================
# Session Endpoints (v1)
# =============================================================================


@app.put("/v1/sessions/{session_id}/analysis", response_model=StoreResponse)
async def store_analysis(session_id: str, request: Request) -> StoreResponse:
    """
    Store the raw analysis response for a session.

    The body is kept verbatim; it is only interpreted when read back.
    """
    store = _require_store()
    body = await _read_body(request)

    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="Analysis must be UTF-8 text")

    slot = get_settings().analysis_slot
    await store.set(session_id, slot, text)

    return StoreResponse(session_id=session_id, slot=slot, stored_bytes=len(body))


@app.get("/v1/sessions/{session_id}/results", response_model=ResultView)
async def get_results(session_id: str) -> ResultView:
    """
    Read the stored analysis and return it normalized.

    ALWAYS answers 200: parse and upstream errors live in the body.
    An empty slot yields the default, not-yet-loaded view.
    """
    store = _require_store()
    raw = await store.get(session_id, get_settings().analysis_slot)
    return _view(raw)


@app.delete("/v1/sessions/{session_id}/analysis", response_model=ClearResponse)
async def clear_analysis(session_id: str) -> ClearResponse:
    """Clear the stored analysis so the user can re-run it."""
    store = _require_store()
    slot = get_settings().analysis_slot
    cleared = await store.delete(session_id, slot)
    return ClearResponse(session_id=session_id, slot=slot, cleared=cleared)


@app.delete("/v1/sessions/{session_id}", response_model=EndSessionResponse)
async def end_session(session_id: str) -> EndSessionResponse:
    """Drop every slot a session holds."""
    store = _require_store()
    removed = await store.clear(session_id)
    return EndSessionResponse(session_id=session_id, slots_removed=removed)


# =============================================================================
# Stateless Normalize (v1)
# =============================================================================


@app.post("/v1/normalize", response_model=ResultView)
async def normalize_v1(request: Request) -> ResultView:
    """Normalize a raw analysis body without touching session storage."""
    body = await _read_body(request)
    return _view(body)
