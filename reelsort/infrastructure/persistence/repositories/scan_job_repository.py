"""
Implementation SQLModel du repository des scans.

L'exclusion mutuelle des scans repose sur la colonne running_lock :
elle vaut 1 pour le scan en cours et NULL sinon, sous contrainte unique.
La creation d'un scan est donc une seule insertion qui echoue (IntegrityError)
si un autre scan est deja en cours.
"""

import json
from typing import Optional

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, select

from reelsort.core.entities import (
    JobError,
    JobLogEntry,
    JobStats,
    JobStatus,
    ScanJob,
)
from reelsort.core.ports.repositories import IScanJobRepository
from reelsort.infrastructure.persistence.models import ScanJobModel
from reelsort.utils.helpers import as_utc

RUNNING_LOCK = 1


class SQLModelScanJobRepository(IScanJobRepository):
    """Repository SQLModel des scans."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(self, model: ScanJobModel) -> ScanJob:
        """Convertit un modele DB en entite domaine."""
        return ScanJob(
            id=model.id,
            status=JobStatus(model.status),
            total_files=model.total_files,
            processed_files=model.processed_files,
            stats=JobStats(**model.stats),
            errors=[JobError(path=e["path"], error=e["error"]) for e in model.errors],
            logs=[JobLogEntry.from_dict(entry) for entry in model.logs],
            dry_run=model.dry_run,
            started_at=as_utc(model.started_at),
            finished_at=as_utc(model.finished_at),
        )

    def create_if_none_running(self, job: ScanJob) -> Optional[ScanJob]:
        """Insere le scan, ou retourne None si un scan est deja en cours."""
        model = ScanJobModel(
            status=job.status.value,
            running_lock=RUNNING_LOCK if job.status is JobStatus.RUNNING else None,
            total_files=job.total_files,
            processed_files=job.processed_files,
            dry_run=job.dry_run,
            started_at=job.started_at,
            finished_at=job.finished_at,
        )
        model.stats_json = json.dumps(job.stats.to_dict())
        model.errors_json = json.dumps([e.to_dict() for e in job.errors])
        model.logs_json = json.dumps([entry.to_dict() for entry in job.logs])

        self._session.add(model)
        try:
            self._session.commit()
        except IntegrityError:
            self._session.rollback()
            logger.debug("Creation refusee : un scan est deja en cours")
            return None
        self._session.refresh(model)
        return self._to_entity(model)

    def get_by_id(self, job_id: int) -> Optional[ScanJob]:
        """Recupere un scan par son ID."""
        model = self._session.get(ScanJobModel, job_id)
        if model:
            # Relire la ligne : le scan peut etre avance par une autre session
            self._session.refresh(model)
            return self._to_entity(model)
        return None

    def get_running(self) -> Optional[ScanJob]:
        """Retourne le scan en cours, s'il existe."""
        statement = select(ScanJobModel).where(ScanJobModel.running_lock == RUNNING_LOCK)
        model = self._session.exec(statement).first()
        if model:
            self._session.refresh(model)
            return self._to_entity(model)
        return None

    def get_latest(self) -> Optional[ScanJob]:
        """Retourne le scan le plus recent."""
        statement = select(ScanJobModel).order_by(col(ScanJobModel.id).desc())
        model = self._session.exec(statement).first()
        if model:
            self._session.refresh(model)
            return self._to_entity(model)
        return None

    def save_progress(self, job: ScanJob) -> None:
        """Ecrit statut, compteurs, progression, erreurs et journal du scan."""
        model = self._session.get(ScanJobModel, job.id)
        if model is None:
            logger.warning(f"Scan {job.id} introuvable, progression ignoree")
            return

        model.status = job.status.value
        model.running_lock = None if job.status.is_terminal else RUNNING_LOCK
        model.total_files = job.total_files
        model.processed_files = max(model.processed_files, job.processed_files)
        model.stats_json = json.dumps(job.stats.to_dict())
        model.errors_json = json.dumps([e.to_dict() for e in job.errors])
        model.logs_json = json.dumps([entry.to_dict() for entry in job.logs])
        model.finished_at = job.finished_at

        self._session.add(model)
        self._session.commit()
