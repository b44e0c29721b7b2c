"""
Orchestration d'un scan de la bibliotheque (JobTracker).

Pipeline : parcours -> classement -> identification -> rangement ou mise
en attente -> progression et statistiques -> etat final du scan.

Le traitement est sequentiel dans une seule tache asyncio ; la methode
start_scan() retourne des que le scan est cree, les appelants interrogent
ensuite son etat.
"""

import asyncio
import os
from pathlib import Path
from typing import Optional

from loguru import logger

from reelsort.config import Settings
from reelsort.core.entities import (
    ItemStatus,
    LibraryItem,
    LibrarySettings,
    ScanJob,
)
from reelsort.core.entities.library import SUB_STATUS_ERROR
from reelsort.core.exceptions import ConfigurationError, ScanAlreadyRunningError
from reelsort.core.ports.parser import IFilenameParser
from reelsort.core.ports.repositories import (
    ILibraryItemRepository,
    IScanJobRepository,
    ISettingsRepository,
)
from reelsort.core.value_objects import FileCandidate, FilenameMetadata, MediaType
from reelsort.services.matcher import IdentificationMatcher
from reelsort.services.organizer import OrganizerService, organized_media_type
from reelsort.services.scanner import DirectoryCrawler
from reelsort.services.transferer import ACTION_SKIP, TransfererService

ACTION_ERROR = "error"
ACTION_DRY_MOVE = "dry-move"
ACTION_DRY_COPY = "dry-copy"


class ScanOrchestrator:
    """
    Pilote un scan complet de la bibliotheque.

    Utilisation:
        orchestrator = container.scan_orchestrator()
        job = orchestrator.start_scan()
        ...
        job = job_repository.get_by_id(job.id)

    Un seul scan peut etre en cours : l'exclusion est garantie par le
    repository (insertion atomique), sans verrou en memoire.
    """

    def __init__(
        self,
        settings_repository: ISettingsRepository,
        item_repository: ILibraryItemRepository,
        job_repository: IScanJobRepository,
        crawler: DirectoryCrawler,
        filename_parser: IFilenameParser,
        matcher: IdentificationMatcher,
        organizer: OrganizerService,
        transferer: TransfererService,
        settings: Settings,
    ) -> None:
        self._settings_repo = settings_repository
        self._item_repo = item_repository
        self._job_repo = job_repository
        self._crawler = crawler
        self._parser = filename_parser
        self._matcher = matcher
        self._organizer = organizer
        self._transferer = transferer
        self._request_delay = settings.scan_request_delay
        self._flush_interval = settings.progress_flush_interval
        # Reference forte vers les taches lancees (sinon collectees en cours)
        self._tasks: set[asyncio.Task] = set()

    def create_job(self, dry_run: Optional[bool] = None) -> ScanJob:
        """
        Cree un scan a l'etat running sans le lancer.

        Args:
            dry_run: Force le mode simulation ; None reprend le reglage stocke

        Raises:
            ScanAlreadyRunningError: Si un scan est deja en cours
        """
        if dry_run is None:
            stored = self._settings_repo.get()
            dry_run = stored.dry_run if stored else False

        job = self._job_repo.create_if_none_running(ScanJob(dry_run=dry_run))
        if job is None:
            running = self._job_repo.get_running()
            raise ScanAlreadyRunningError(running.id if running else None)

        logger.info(f"Scan {job.id} cree (dry_run={dry_run})")
        return job

    def start_scan(self, dry_run: Optional[bool] = None) -> ScanJob:
        """
        Cree un scan et le lance en tache de fond.

        Doit etre appele depuis une boucle asyncio active.

        Returns:
            Le scan cree, a l'etat running

        Raises:
            ScanAlreadyRunningError: Si un scan est deja en cours
        """
        job = self.create_job(dry_run)
        task = asyncio.get_running_loop().create_task(self.run(job.id))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return job

    async def wait(self) -> None:
        """Attend la fin des scans lances par cet orchestrateur."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))
            self._tasks = {task for task in self._tasks if not task.done()}

    async def run(self, job_id: int) -> ScanJob:
        """
        Execute le scan job_id jusqu'a un etat terminal.

        Une erreur de configuration fait passer le scan a failed. Une erreur
        sur un fichier est enregistree et le traitement continue.

        Returns:
            Le scan dans son etat final
        """
        job = self._job_repo.get_by_id(job_id)
        if job is None:
            raise ValueError(f"Scan introuvable : {job_id}")

        try:
            library = self._load_library_settings(job.dry_run)
            job.log(
                f"Starting scan. dry_run={job.dry_run}, copy_mode={library.is_copy_mode}, "
                f"mount_safety={library.mount_safety}"
            )
            await self._process_library(job, library)
            job.complete()
            job.log("Scan completed successfully.")
            logger.info(
                f"Scan {job.id} termine : {job.processed_files}/{job.total_files} "
                f"fichier(s), stats={job.stats.to_dict()}"
            )
        except ConfigurationError as e:
            logger.error(f"Scan {job.id} en echec : {e}")
            job.add_error(self._error_location(), str(e))
            job.log(f"Aborted: {e}")
            job.fail()
        except Exception as e:
            logger.exception(f"Scan {job.id} interrompu : {e}")
            job.add_error(self._error_location(), f"System Error: {e}")
            job.log(f"Crash: {e}")
            job.fail()
        finally:
            await self._matcher.close()
            self._job_repo.save_progress(job)

        return job

    def _error_location(self) -> str:
        stored = self._settings_repo.get()
        if stored and stored.library_root:
            return str(stored.library_root)
        return "settings"

    def _load_library_settings(self, dry_run: bool) -> LibrarySettings:
        """
        Lit et valide les reglages de la bibliotheque.

        Raises:
            ConfigurationError: Reglages absents ou racine inutilisable
        """
        library = self._settings_repo.get()
        if library is None or library.library_root is None:
            raise ConfigurationError("Library settings not configured")

        root = Path(library.library_root)
        if not root.exists():
            raise ConfigurationError(f"Library root does not exist: {root}")
        if not root.is_dir():
            raise ConfigurationError(f"Library root is not a directory: {root}")
        if not os.access(root, os.R_OK | os.X_OK):
            raise ConfigurationError(f"Library root is not readable: {root}")
        if not dry_run and not os.access(root, os.W_OK):
            raise ConfigurationError(f"Library root is not writable: {root}")

        library.library_root = root
        return library

    async def _process_library(self, job: ScanJob, library: LibrarySettings) -> None:
        root = library.library_root
        device = self._check_mount(root) if library.mount_safety else None

        crawl = self._crawler.crawl(root)
        for crawl_error in crawl.errors:
            job.add_error(crawl_error.path, str(crawl_error))
            job.log(f"Skipped unreadable path: {crawl_error.path}")

        job.total_files = len(crawl.files)
        job.log(f"Found {job.total_files} video files.")
        self._job_repo.save_progress(job)

        for index, candidate in enumerate(crawl.files, start=1):
            if device is not None:
                self._check_mount(root, device)
            try:
                await self._process_file(job, library, candidate)
            except Exception as e:
                logger.exception(f"Erreur inattendue sur {candidate.path} : {e}")
                self._record_failure(job, library, candidate, str(e))

            job.advance(index)
            if index % self._flush_interval == 0:
                self._job_repo.save_progress(job)

    @staticmethod
    def _check_mount(root: Path, expected_device: Optional[int] = None) -> int:
        """
        Verifie que la racine est accessible et reste sur le meme volume.

        Un volume demonte en cours de scan change l'identifiant du volume
        de la racine (point de montage vide du systeme hote).

        Args:
            root: Racine de la bibliotheque
            expected_device: Volume releve au debut du scan (None au premier appel)

        Returns:
            L'identifiant du volume portant la racine

        Raises:
            ConfigurationError: Racine inaccessible ou volume change
        """
        message = f"Mount check failed for {root}. Aborting scan for safety."
        try:
            device = os.stat(root).st_dev
        except OSError as e:
            raise ConfigurationError(message) from e
        if expected_device is not None and device != expected_device:
            raise ConfigurationError(message)
        return device

    async def _process_file(
        self, job: ScanJob, library: LibrarySettings, candidate: FileCandidate
    ) -> None:
        """Traite un fichier : deja range, identifie ou mis en attente."""
        root = library.library_root
        metadata = self._parser.parse(candidate.filename)

        organized_type = organized_media_type(candidate.path, root)
        if organized_type is not None:
            self._refresh_organized(job, library, candidate, metadata, organized_type)
            self._count(job, organized_type)
            return

        if self._request_delay:
            await asyncio.sleep(self._request_delay)
        outcome = await self._matcher.identify(metadata, library.tmdb_api_key)

        item = LibraryItem(
            source_path=candidate.path,
            media_type=outcome.media_type,
            quality=metadata.quality,
            source=metadata.source,
            codec=metadata.codec,
            library_id=library.library_id,
            job_id=job.id,
        )

        if not outcome.confident:
            item.reason = outcome.reason
            self._item_repo.upsert(item)
            job.stats.uncategorized += 1
            return

        item.identification = outcome.identification
        item.destination_path = self._organizer.build_destination(
            root,
            outcome.media_type,
            outcome.identification,
            metadata.quality,
            candidate.extension,
        )

        if job.dry_run:
            item.action = ACTION_DRY_COPY if library.is_copy_mode else ACTION_DRY_MOVE
            self._item_repo.upsert(item)
            logger.debug(f"[dry-run] {candidate.path} -> {item.destination_path}")
            self._count(job, outcome.media_type)
            return

        result = self._transferer.relocate(
            candidate.path,
            item.destination_path,
            copy_mode=library.is_copy_mode,
            library_root=root,
        )
        if not result.success:
            self._record_failure(job, library, candidate, str(result.error), item)
            return

        item.status = ItemStatus.ORGANIZED
        item.destination_path = result.final_path
        item.action = result.action
        if result.action == ACTION_SKIP:
            # Copie deja en place : l'action du rangement initial est conservee
            previous = self._item_repo.get_by_path(result.final_path)
            if previous is not None and previous.status is ItemStatus.ORGANIZED:
                item.action = previous.action
        self._item_repo.mark_organized(candidate.path, item)
        self._count(job, outcome.media_type)

    def _refresh_organized(
        self,
        job: ScanJob,
        library: LibrarySettings,
        candidate: FileCandidate,
        metadata: FilenameMetadata,
        media_type: MediaType,
    ) -> None:
        """
        Enregistre un fichier deja range sans perdre ce qui est connu.

        L'identification, le chemin d'origine et l'action du rangement
        initial sont conserves ; seuls les champs de suivi sont rafraichis.
        """
        item = self._item_repo.get_by_path(candidate.path)
        if item is None:
            item = LibraryItem(
                source_path=candidate.path,
                media_type=media_type,
                action=ACTION_SKIP,
            )
        item.status = ItemStatus.ORGANIZED
        item.destination_path = candidate.path
        item.sub_status = None
        item.reason = None
        if item.media_type is MediaType.UNKNOWN:
            item.media_type = media_type
        item.quality = item.quality or metadata.quality
        item.source = item.source or metadata.source
        item.codec = item.codec or metadata.codec
        item.library_id = library.library_id
        item.job_id = job.id
        self._item_repo.upsert(item)

    def _record_failure(
        self,
        job: ScanJob,
        library: LibrarySettings,
        candidate: FileCandidate,
        message: str,
        item: Optional[LibraryItem] = None,
    ) -> None:
        """Enregistre l'erreur et laisse le fichier en attente (sub_status error)."""
        job.add_error(str(candidate.path), message)
        job.stats.uncategorized += 1

        if item is None:
            item = LibraryItem(
                source_path=candidate.path,
                library_id=library.library_id,
                job_id=job.id,
            )
        item.status = ItemStatus.UNCATEGORIZED
        item.sub_status = SUB_STATUS_ERROR
        item.reason = message
        item.action = ACTION_ERROR
        try:
            self._item_repo.upsert(item)
        except Exception as e:
            logger.error(f"Impossible d'enregistrer l'erreur pour {candidate.path} : {e}")

    @staticmethod
    def _count(job: ScanJob, media_type: MediaType) -> None:
        if media_type is MediaType.TV:
            job.stats.tv += 1
        else:
            job.stats.movies += 1
