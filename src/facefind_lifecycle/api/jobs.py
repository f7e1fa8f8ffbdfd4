"""Cron-triggered lifecycle job endpoints with bearer token auth."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from facefind_lifecycle.services.lifecycle import ScanFailedError

if TYPE_CHECKING:
    from facefind_lifecycle.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["jobs"])


def _get_cron_secret(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.cron_secret


async def require_cron_secret(
    authorization: str | None = Header(default=None),
    cron_secret: str = Depends(_get_cron_secret),
) -> None:
    """Ensure requests carry the scheduler's bearer token."""
    if not authorization or authorization != f"Bearer {cron_secret}":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/grace-period", dependencies=[Depends(require_cron_secret)])
async def run_grace_period(request: Request) -> dict[str, object]:
    """Purge sessions for events whose grace period has ended."""
    return await _run_job(request, "grace-period")


@router.get("/retention", dependencies=[Depends(require_cron_secret)])
async def run_retention(request: Request) -> dict[str, object]:
    """Archive events whose retention period has ended."""
    return await _run_job(request, "retention")


async def _run_job(request: Request, job_name: str) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    try:
        report = await container.runner.run(job_name)
    except ScanFailedError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        ) from exc
    return report.as_dict()
