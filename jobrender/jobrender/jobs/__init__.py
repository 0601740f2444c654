"""Canonical template tables, one per job."""

from __future__ import annotations

from ..core.models import JobSpec, UnknownTemplateError
from . import smbbrokerpush, smbdriver

JOBS: dict[str, JobSpec] = {
    job.name: job for job in (smbdriver.JOB, smbbrokerpush.JOB)
}


def get_job(name: str) -> JobSpec:
    """Look up a job by name."""
    try:
        return JOBS[name]
    except KeyError:
        known = ", ".join(sorted(JOBS))
        raise UnknownTemplateError(
            f"Unknown job '{name}'. Known jobs: {known}"
        ) from None


__all__ = ["JOBS", "get_job"]
