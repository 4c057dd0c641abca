"""Link metadata endpoint.

Routes
------
POST /api/metadata    Body: {"url": "github"}    → resolve

Bodies that are not JSON, or whose ``url`` is not a string, are answered
with the same 400 as a missing ``url`` via :func:`validation_error_handler`.
"""

from __future__ import annotations

from typing import Any, Optional

import structlog
from fastapi import APIRouter, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from linkmeta.resolver import InvalidURLError, MissingURLError, resolve

router = APIRouter()
logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class MetadataRequest(BaseModel):
    url: Optional[str] = None


class MetadataResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: Optional[str] = None
    icon: Optional[str] = None
    is_fallback: bool = Field(alias="isFallback")
    normalized_url: str = Field(alias="normalizedUrl")


class ErrorResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    error: str
    normalized_url: Optional[str] = Field(default=None, alias="normalizedUrl")


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post(
    "/metadata",
    response_model=MetadataResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def metadata_endpoint(body: Optional[MetadataRequest] = None) -> Any:
    """Resolve a user-typed URL into title / description / icon metadata.

    Declared sync so the blocking fetch runs in the server's thread pool.
    Clients should store ``normalizedUrl`` rather than what the user typed.
    """
    raw = body.url if body is not None else None
    try:
        result = resolve(raw)
    except MissingURLError as exc:
        return JSONResponse(status_code=400, content={"error": str(exc)})
    except InvalidURLError as exc:
        return JSONResponse(
            status_code=400,
            content={"error": str(exc), "normalizedUrl": exc.normalized_url},
        )
    except Exception:
        logger.exception("metadata_request_failed", raw_url=raw)
        return JSONResponse(
            status_code=500, content={"error": "Failed to fetch metadata"}
        )
    return result.to_dict()


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Answer unusable request bodies with ``400 {"error": "URL is required"}``."""
    logger.warning(
        "metadata_request_invalid",
        path=request.url.path,
        error_types=[err.get("type") for err in exc.errors()],
    )
    return JSONResponse(status_code=400, content={"error": "URL is required"})
