"""Service options and glob resolver composition."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from actval.validator.path_globs import (
    FilesystemGlobResolver,
    GlobResolver,
    SandboxGlobResolver,
)


class ServiceOptions(BaseModel):
    """Options for the HTTP service."""

    glob_mode: Literal["sandbox", "filesystem"] = Field(
        "sandbox", description="How trigger path globs are resolved"
    )
    glob_root: str | None = Field(
        None, description="Directory globs are matched under (filesystem mode)"
    )
    dev_mode: bool = False


def load_options() -> ServiceOptions:
    """Load options from ACTVAL_OPTIONS_PATH (a JSON file) or env fallback."""
    opts_path = os.environ.get("ACTVAL_OPTIONS_PATH", "/data/options.json")
    if Path(opts_path).exists():
        return ServiceOptions.model_validate(json.loads(Path(opts_path).read_text()))
    return ServiceOptions(
        glob_mode=os.environ.get("ACTVAL_GLOB_MODE", "sandbox"),
        glob_root=os.environ.get("ACTVAL_GLOB_ROOT") or None,
        dev_mode=bool(os.environ.get("ACTVAL_DEV_MODE")),
    )


def build_glob_resolver(options: ServiceOptions) -> GlobResolver:
    if options.glob_mode == "filesystem":
        return FilesystemGlobResolver(options.glob_root)
    return SandboxGlobResolver()
