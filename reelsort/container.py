"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour les interfaces CLI et Web :
engine et sessions SQLModel, repositories, client TMDB et services du scan.
"""

from dependency_injector import containers, providers
from sqlmodel import Session

from .adapters.api.cache import APICache
from .adapters.api.tmdb_client import TMDBClient
from .adapters.file_system import FileSystemAdapter
from .adapters.parsing.filename_parser import RegexFilenameParser
from .config import Settings
from .infrastructure.persistence.database import create_db_engine, init_db
from .infrastructure.persistence.repositories import (
    SQLModelLibraryItemRepository,
    SQLModelScanJobRepository,
    SQLModelSettingsRepository,
)
from .services.matcher import IdentificationMatcher
from .services.organizer import OrganizerService
from .services.scan_job import ScanOrchestrator
from .services.scanner import DirectoryCrawler
from .services.transferer import TransfererService


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Cree les tables une fois
        orchestrator = container.scan_orchestrator()
        job = orchestrator.start_scan()
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Engine injecte, jamais global
    engine = providers.Singleton(
        create_db_engine,
        database_url=config.provided.database_url,
    )

    # Database - Resource pour initialisation unique
    database = providers.Resource(init_db, engine=engine)

    # Session factory - nouvelle session a chaque appel
    session = providers.Factory(Session, engine)

    # Adapters - implementations concretes des ports
    file_system = providers.Singleton(FileSystemAdapter)
    filename_parser = providers.Singleton(RegexFilenameParser)

    # Repositories - Factory pour nouvelle instance avec session fraiche
    settings_repository = providers.Factory(
        SQLModelSettingsRepository,
        session=session,
    )
    library_item_repository = providers.Factory(
        SQLModelLibraryItemRepository,
        session=session,
    )
    scan_job_repository = providers.Factory(
        SQLModelScanJobRepository,
        session=session,
    )

    # Cache API - Singleton pour partage entre clients
    api_cache = providers.Singleton(
        APICache,
        cache_dir=config.provided.cache_dir,
    )

    # Client TMDB - la cle vient des reglages stockes, lus au debut du scan :
    # le matcher appelle ce provider avec la cle en argument positionnel
    tmdb_client = providers.Factory(
        TMDBClient,
        cache=api_cache,
        language=config.provided.tmdb_language,
        timeout=config.provided.tmdb_timeout,
    )

    # Services sans etat - Singletons
    crawler = providers.Singleton(DirectoryCrawler, file_system=file_system)
    organizer_service = providers.Singleton(OrganizerService)
    transferer_service = providers.Singleton(
        TransfererService,
        file_system=file_system,
    )
    matcher = providers.Factory(
        IdentificationMatcher,
        client_factory=tmdb_client.provider,
    )

    # Orchestrateur - Singleton : garde les references des scans lances
    scan_orchestrator = providers.Singleton(
        ScanOrchestrator,
        settings_repository=settings_repository,
        item_repository=library_item_repository,
        job_repository=scan_job_repository,
        crawler=crawler,
        filename_parser=filename_parser,
        matcher=matcher,
        organizer=organizer_service,
        transferer=transferer_service,
        settings=config,
    )
