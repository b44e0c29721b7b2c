"""
Fixtures pytest partagees pour les tests ReelSort.

Ce module contient les fixtures communes utilisees dans les tests:
- Base SQLite en memoire et repositories
- Mocks des interfaces (IFileSystem, ITitleSearchClient)
- Settings de test avec chemins temporaires
"""

from pathlib import Path
from typing import Iterator
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlmodel import Session

from reelsort.config import Settings
from reelsort.core.ports.api_clients import ITitleSearchClient
from reelsort.core.ports.file_system import IFileSystem
from reelsort.infrastructure.persistence.database import create_db_engine, init_db
from reelsort.infrastructure.persistence.repositories import (
    SQLModelLibraryItemRepository,
    SQLModelScanJobRepository,
    SQLModelSettingsRepository,
)


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings de test : base en memoire, pas de pause entre requetes."""
    return Settings(
        database_url="sqlite://",
        cache_dir=tmp_path / "cache",
        scan_request_delay=0,
        progress_flush_interval=5,
        log_file=tmp_path / "logs" / "reelsort.log",
    )


@pytest.fixture
def session() -> Iterator[Session]:
    """Session sur une base SQLite en memoire, tables creees."""
    engine = create_db_engine("sqlite://")
    init_db(engine)
    with Session(engine) as db_session:
        yield db_session
    engine.dispose()


@pytest.fixture
def settings_repo(session: Session) -> SQLModelSettingsRepository:
    return SQLModelSettingsRepository(session)


@pytest.fixture
def item_repo(session: Session) -> SQLModelLibraryItemRepository:
    return SQLModelLibraryItemRepository(session)


@pytest.fixture
def job_repo(session: Session) -> SQLModelScanJobRepository:
    return SQLModelScanJobRepository(session)


@pytest.fixture
def mock_file_system() -> MagicMock:
    """
    Mock de IFileSystem pour les tests.

    Par defaut la source existe et la destination non.
    """
    mock = MagicMock(spec=IFileSystem)
    mock.exists.side_effect = lambda path: "source" in str(path)
    mock.remove_empty_dir.return_value = False
    mock.is_same_file.return_value = False
    return mock


@pytest.fixture
def mock_search_client() -> AsyncMock:
    """Client de recherche mocke ; configurer search.return_value dans chaque test."""
    client = AsyncMock(spec=ITitleSearchClient)
    client.search.return_value = []
    return client
