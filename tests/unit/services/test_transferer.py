"""
Tests unitaires pour le rangement physique des fichiers.

Utilise le vrai systeme de fichiers (tmp_path) pour les cas nominaux
et un IFileSystem mocke pour simuler les erreurs (EXDEV, copie en echec).
"""

import errno
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from reelsort.adapters.file_system import FileSystemAdapter
from reelsort.services.transferer import (
    ACTION_COPY,
    ACTION_MOVE,
    ACTION_SKIP,
    TransfererService,
    same_path,
)


@pytest.fixture
def transferer() -> TransfererService:
    return TransfererService(FileSystemAdapter())


@pytest.fixture
def library(tmp_path: Path) -> Path:
    root = tmp_path / "library"
    (root / "incoming").mkdir(parents=True)
    return root


def _video(path: Path, content: bytes = b"video") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return path


class TestRelocateRealFileSystem:
    def test_same_path_is_noop(self, transferer: TransfererService, library: Path) -> None:
        source = _video(library / "Movies/A (2000)/A (2000).mkv")

        result = transferer.relocate(source, Path(str(source)), library_root=library)

        assert result.success is True
        assert result.action == ACTION_SKIP
        assert source.exists()

    def test_move_creates_directories_and_cleans_source(
        self, transferer: TransfererService, library: Path
    ) -> None:
        source = _video(library / "incoming/sub/Movie.2024.mkv")
        destination = library / "Movies/Movie (2024)/Movie (2024).mkv"

        result = transferer.relocate(source, destination, library_root=library)

        assert result.success is True
        assert result.action == ACTION_MOVE
        assert result.final_path == destination
        assert destination.read_bytes() == b"video"
        assert not source.exists()
        assert not (library / "incoming/sub").exists()
        # Le parent non vide est conserve
        assert (library / "incoming").exists()

    def test_library_root_never_removed(
        self, transferer: TransfererService, library: Path
    ) -> None:
        (library / "incoming").rmdir()
        source = _video(library / "Movie.2024.mkv")
        destination = library / "Movies/Movie (2024)/Movie (2024).mkv"

        result = transferer.relocate(source, destination, library_root=library)

        assert result.success is True
        assert library.exists()

    def test_copy_keeps_source(self, transferer: TransfererService, library: Path) -> None:
        source = _video(library / "incoming/Movie.2024.mkv")
        destination = library / "Movies/Movie (2024)/Movie (2024).mkv"

        result = transferer.relocate(source, destination, copy_mode=True, library_root=library)

        assert result.success is True
        assert result.action == ACTION_COPY
        assert source.exists()
        assert destination.read_bytes() == b"video"
        # Aucun fichier temporaire restant
        assert [p.name for p in destination.parent.iterdir()] == [destination.name]

    def test_repeated_copy_is_noop(self, transferer: TransfererService, library: Path) -> None:
        source = _video(library / "incoming/Movie.2024.mkv")
        destination = library / "Movies/Movie (2024)/Movie (2024).mkv"
        transferer.relocate(source, destination, copy_mode=True, library_root=library)

        result = transferer.relocate(source, destination, copy_mode=True, library_root=library)

        assert result.success is True
        assert result.action == ACTION_SKIP
        assert result.final_path == destination
        assert source.exists()

    def test_copy_over_different_file_refused(
        self, transferer: TransfererService, library: Path
    ) -> None:
        source = _video(library / "incoming/Movie.2024.mkv", b"new release")
        destination = _video(library / "Movies/Movie (2024)/Movie (2024).mkv", b"old")

        result = transferer.relocate(source, destination, copy_mode=True, library_root=library)

        assert result.success is False
        assert "Destination already exists" in str(result.error)
        assert destination.read_bytes() == b"old"

    def test_existing_destination_refused(
        self, transferer: TransfererService, library: Path
    ) -> None:
        source = _video(library / "incoming/Movie.2024.mkv", b"new")
        destination = _video(library / "Movies/Movie (2024)/Movie (2024).mkv", b"old")

        result = transferer.relocate(source, destination, library_root=library)

        assert result.success is False
        assert "Destination already exists" in str(result.error)
        assert source.read_bytes() == b"new"
        assert destination.read_bytes() == b"old"

    def test_missing_source(self, transferer: TransfererService, library: Path) -> None:
        result = transferer.relocate(
            library / "incoming/absent.mkv", library / "Movies/X/X.mkv"
        )
        assert result.success is False
        assert "Source file not found" in str(result.error)


class TestRelocateFailures:
    """Cas d'erreur simules via un IFileSystem mocke."""

    def test_cross_device_move_falls_back_to_copy(self, mock_file_system: MagicMock) -> None:
        mock_file_system.rename.side_effect = OSError(errno.EXDEV, "Invalid cross-device link")
        transferer = TransfererService(mock_file_system)
        source = Path("/mnt/source/Movie.mkv")
        destination = Path("/library/Movies/Movie/Movie.mkv")

        result = transferer.relocate(source, destination)

        assert result.success is True
        assert result.action == ACTION_MOVE
        temp = mock_file_system.copy.call_args.args[1]
        assert temp.parent == destination.parent
        assert temp.name.startswith(".reelsort-tmp-")
        mock_file_system.replace.assert_called_once_with(temp, destination)
        mock_file_system.delete.assert_called_once_with(source)

    def test_other_rename_errors_are_failures(self, mock_file_system: MagicMock) -> None:
        mock_file_system.rename.side_effect = PermissionError(errno.EACCES, "Permission denied")
        transferer = TransfererService(mock_file_system)

        result = transferer.relocate(
            Path("/data/source/Movie.mkv"), Path("/library/Movies/Movie/Movie.mkv")
        )

        assert result.success is False
        assert "Permission denied" in str(result.error)
        assert result.error.path == "/data/source/Movie.mkv"
        mock_file_system.copy.assert_not_called()
        mock_file_system.delete.assert_not_called()

    def test_copy_failure_leaves_source_intact(self, mock_file_system: MagicMock) -> None:
        mock_file_system.copy.side_effect = OSError(errno.ENOSPC, "No space left on device")
        transferer = TransfererService(mock_file_system)
        source = Path("/data/source/Movie.mkv")

        result = transferer.relocate(
            source, Path("/library/Movies/Movie/Movie.mkv"), copy_mode=True
        )

        assert result.success is False
        assert "No space left" in str(result.error)
        for call in mock_file_system.delete.call_args_list:
            assert call.args[0] != source
        mock_file_system.replace.assert_not_called()


def test_same_path_normalizes() -> None:
    assert same_path(Path("/a/b/../c"), Path("/a/c"))
    assert not same_path(Path("/a/b"), Path("/a/c"))
