"""FastAPI application -- action-validator HTTP entrypoint."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

import actval.deps as deps
from actval.api.validate import router as validate_router
from actval.config import build_glob_resolver, load_options

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: compose the glob resolver on startup."""
    options = load_options()
    log_level = logging.DEBUG if options.dev_mode else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info("action-validator starting with options: %s", options.model_dump())

    deps._glob_resolver = build_glob_resolver(options)
    logger.info("Glob resolver: %s", type(deps._glob_resolver).__name__)

    yield

    deps._glob_resolver = None


app = FastAPI(
    title="action-validator",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(validate_router)


@app.exception_handler(Exception)
async def internal_fault_handler(request: Request, exc: Exception) -> JSONResponse:
    """Unexpected faults only; invalid documents are ordinary 200 responses."""
    logger.exception("Internal fault while handling %s", request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal validator error"})
