"""
Routes de declenchement et de suivi des scans.

- POST /scan : cree un scan et le lance en arriere-plan (202)
- GET /scan/current : scan en cours
- GET /scan/{job_id} : etat d'un scan
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, HTTPException, Request, status
from pydantic import BaseModel

from ...core.entities import ScanJob
from ...core.exceptions import ScanAlreadyRunningError

router = APIRouter(prefix="/scan", tags=["scan"])


class ScanRequest(BaseModel):
    """Corps optionnel de POST /scan."""

    dry_run: Optional[bool] = None


class ScanErrorResponse(BaseModel):
    path: str
    error: str


class ScanLogResponse(BaseModel):
    ts: datetime
    message: str


class ScanJobResponse(BaseModel):
    """Etat d'un scan expose par l'API."""

    id: int
    status: str
    total_files: int
    processed_files: int
    stats: dict[str, int]
    errors: list[ScanErrorResponse]
    logs: list[ScanLogResponse] = []
    dry_run: bool
    started_at: datetime
    finished_at: Optional[datetime] = None

    @classmethod
    def from_job(cls, job: ScanJob) -> "ScanJobResponse":
        return cls(
            id=job.id,
            status=job.status.value,
            total_files=job.total_files,
            processed_files=job.processed_files,
            stats=job.stats.to_dict(),
            errors=[ScanErrorResponse(**e.to_dict()) for e in job.errors],
            logs=[ScanLogResponse(ts=entry.ts, message=entry.message) for entry in job.logs],
            dry_run=job.dry_run,
            started_at=job.started_at,
            finished_at=job.finished_at,
        )


@router.post("", status_code=status.HTTP_202_ACCEPTED, response_model=ScanJobResponse)
async def start_scan(request: Request, body: Optional[ScanRequest] = None):
    """Lance un scan ; 409 si un scan est deja en cours."""
    container = request.app.state.container
    orchestrator = container.scan_orchestrator()
    try:
        job = orchestrator.start_scan(body.dry_run if body else None)
    except ScanAlreadyRunningError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return ScanJobResponse.from_job(job)


@router.get("/current", response_model=ScanJobResponse)
async def current_scan(request: Request):
    """Scan en cours ; 404 si aucun."""
    job = request.app.state.container.scan_job_repository().get_running()
    if job is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No running scan")
    return ScanJobResponse.from_job(job)


@router.get("/{job_id}", response_model=ScanJobResponse)
async def get_scan(request: Request, job_id: int):
    """Etat d'un scan par son ID."""
    job = request.app.state.container.scan_job_repository().get_by_id(job_id)
    if job is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Scan not found")
    return ScanJobResponse.from_job(job)
