"""Shared FastAPI dependencies."""

from __future__ import annotations

from actval.validator.path_globs import GlobResolver

_glob_resolver: GlobResolver | None = None


def get_glob_resolver() -> GlobResolver:
    """FastAPI dependency: return the shared GlobResolver."""
    assert _glob_resolver is not None, "GlobResolver not initialised"
    return _glob_resolver
