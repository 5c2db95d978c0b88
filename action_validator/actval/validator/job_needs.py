"""Job dependency validation: cross-check `needs` against the jobs map."""

from __future__ import annotations

from typing import Any

from actval.validator.models import ValidationError


def _needed_jobs(needs: Any) -> list[str]:
    """Names referenced by a `needs` value: absent, a string, or a list.

    Non-string list entries are skipped; the schema reports their type.
    """
    if isinstance(needs, str):
        return [needs]
    if isinstance(needs, list):
        return [n for n in needs if isinstance(n, str)]
    return []


def check_job_needs(parsed_yaml: Any) -> list[ValidationError]:
    """Return an unresolved-job error for every `needs` entry naming no job.

    Errors follow job-map order, then `needs` order. Dependency cycles are
    not detected.
    """
    issues: list[ValidationError] = []

    if not isinstance(parsed_yaml, dict):
        return issues
    jobs = parsed_yaml.get("jobs")
    if not isinstance(jobs, dict):
        return issues

    for job_name, job in jobs.items():
        if not isinstance(job, dict):
            continue
        for needed in _needed_jobs(job.get("needs")):
            if needed not in jobs:
                issues.append(ValidationError.unresolved_job(job_name, needed))

    return issues
