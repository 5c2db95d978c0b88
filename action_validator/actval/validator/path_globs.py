"""Trigger path validation: check that `paths` globs compile and match files."""

from __future__ import annotations

import glob
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from actval.validator.models import ValidationError

logger = logging.getLogger(__name__)

# (event, key) in reporting order
GLOB_FIELDS: tuple[tuple[str, str], ...] = (
    ("push", "paths"),
    ("push", "paths-ignore"),
    ("pull_request", "paths"),
    ("pull_request", "paths-ignore"),
)

ERROR_WILDCARDS = "wildcards are either regular `*` or recursive `**`"
ERROR_RECURSIVE_WILDCARDS = "recursive wildcards must form a single path component"
ERROR_INVALID_RANGE = "invalid range pattern"


class GlobPatternError(ValueError):
    """A glob pattern failed to compile."""

    def __init__(self, pos: int, msg: str) -> None:
        self.pos = pos
        self.msg = msg
        super().__init__(f"Pattern syntax error near position {pos}: {msg}")


def _is_separator(c: str) -> bool:
    return c == "/" or c == os.sep


def compile_glob(pattern: str) -> str:
    """Check glob syntax and return the pattern to hand to the matcher.

    Rejects runs of more than two ``*``, ``**`` that is not a whole path
    component, and ``[...]`` classes that are unterminated or empty. A
    leading ``!`` (a negated trigger pattern) is not part of the glob and is
    dropped here, so the returned pattern must still match a file: a negated
    pattern that excludes nothing is reported like any other.
    """
    if pattern.startswith("!"):
        pattern = pattern[1:]

    chars = pattern
    n = len(chars)
    i = 0
    while i < n:
        c = chars[i]
        if c == "*":
            start = i
            while i < n and chars[i] == "*":
                i += 1
            count = i - start
            if count > 2:
                raise GlobPatternError(start + 2, ERROR_WILDCARDS)
            if count == 2:
                if start == 0 or _is_separator(chars[start - 1]):
                    if i < n and _is_separator(chars[i]):
                        i += 1
                    elif i != n:
                        raise GlobPatternError(i, ERROR_RECURSIVE_WILDCARDS)
                else:
                    raise GlobPatternError(start - 1, ERROR_RECURSIVE_WILDCARDS)
        elif c == "[":
            if i + 4 <= n and chars[i + 1] == "!":
                close = chars.find("]", i + 3)
            elif i + 3 <= n and chars[i + 1] != "!":
                close = chars.find("]", i + 2)
            else:
                close = -1
            if close == -1:
                raise GlobPatternError(i, ERROR_INVALID_RANGE)
            i = close + 1
        else:
            i += 1
    return pattern


class GlobResolver(ABC):
    """Capability: resolve a glob pattern against the environment."""

    @property
    def available(self) -> bool:
        """Whether this environment can see a filesystem at all."""
        return True

    @abstractmethod
    def has_match(self, pattern: str) -> bool:
        """Return True if the compiled ``pattern`` matches at least one entry."""
        ...

    def skip_field(self, field: str) -> None:
        """Called once per present field when the resolver is unavailable."""


class FilesystemGlobResolver(GlobResolver):
    """Matches patterns against the directory tree under ``root``."""

    def __init__(self, root: str | Path | None = None) -> None:
        self._root = Path(root) if root is not None else None

    @property
    def root(self) -> Path:
        return self._root if self._root is not None else Path.cwd()

    def has_match(self, pattern: str) -> bool:
        matches = glob.iglob(
            pattern, root_dir=self.root, recursive=True, include_hidden=True,
        )
        return next(matches, None) is not None


class SandboxGlobResolver(GlobResolver):
    """No filesystem access: path checks become advisory notes."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    @property
    def available(self) -> bool:
        return False

    def has_match(self, pattern: str) -> bool:
        return True

    def skip_field(self, field: str) -> None:
        self._log.warning(
            "Glob validation is not available in this environment; skipping %s",
            field,
        )


def _field_value(parsed_yaml: Any, event: str, key: str) -> Any:
    on = parsed_yaml.get("on") if isinstance(parsed_yaml, dict) else None
    trigger = on.get(event) if isinstance(on, dict) else None
    return trigger.get(key) if isinstance(trigger, dict) else None


def check_path_globs(
    parsed_yaml: Any, resolver: GlobResolver,
) -> list[ValidationError]:
    """Validate the trigger path globs of a workflow.

    Absent or null fields are fine. Each pattern must compile and, when the
    resolver can see a filesystem, match at least one entry.
    """
    issues: list[ValidationError] = []

    for event, key in GLOB_FIELDS:
        globs = _field_value(parsed_yaml, event, key)
        if globs is None:
            continue
        path = f"/on/{event}/{key}"
        if not resolver.available:
            resolver.skip_field(f"on.{event}.{key}")
            continue
        if not isinstance(globs, list):
            # Wrong type is a schema error, reported by the conformance pass.
            continue

        for pattern in globs:
            if not isinstance(pattern, str):
                continue
            try:
                compiled = compile_glob(pattern)
            except GlobPatternError as e:
                issues.append(ValidationError.invalid_glob(path, str(e)))
                continue
            if not resolver.has_match(compiled):
                issues.append(ValidationError.no_files_matching_glob(path, pattern))

    return issues
