"""POST /api/validate/{action,workflow} endpoints."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from actval.binding import validate_action, validate_workflow
from actval.deps import get_glob_resolver
from actval.validator.models import ERROR_VOCABULARY_VERSION
from actval.validator.path_globs import GlobResolver

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["validate"])


class ValidateRequest(BaseModel):
    """Request body for the validate endpoints."""

    source: str = Field(..., description="Raw YAML text of the document")
    verbose: bool = Field(False, description="Log which schema the document is treated as")


class HealthResponse(BaseModel):
    status: str = "ok"
    error_vocabulary: str = ERROR_VOCABULARY_VERSION


# Plain functions: globbing blocks, so these run in the threadpool.
@router.post("/validate/action")
def validate_action_endpoint(
    body: ValidateRequest,
    resolver: GlobResolver = Depends(get_glob_resolver),
) -> dict[str, Any]:
    """Validate an Action metadata document and return the serialized state."""
    state = validate_action(body.source, verbose=body.verbose, glob_resolver=resolver)
    logger.debug("Action validated with %d error(s)", len(state["errors"]))
    return state


@router.post("/validate/workflow")
def validate_workflow_endpoint(
    body: ValidateRequest,
    resolver: GlobResolver = Depends(get_glob_resolver),
) -> dict[str, Any]:
    """Validate a Workflow document and return the serialized state."""
    state = validate_workflow(body.source, verbose=body.verbose, glob_resolver=resolver)
    logger.debug("Workflow validated with %d error(s)", len(state["errors"]))
    return state


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse()
