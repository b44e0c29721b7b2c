"""Tests unitaires pour les entites de la bibliotheque."""

from pathlib import Path

from reelsort.core.entities import Identification, ItemStatus, LibraryItem


class TestIdentification:
    def test_dict_uses_stored_key_names(self) -> None:
        identification = Identification(id=1, title="Movie", year=2024, poster_path="/p.jpg")
        data = identification.to_dict()
        assert data["posterPath"] == "/p.jpg"
        assert Identification.from_dict(data) == identification


class TestLibraryItem:
    def test_effective_path_is_source_until_organized(self) -> None:
        item = LibraryItem(
            source_path=Path("/l/incoming/a.mkv"),
            destination_path=Path("/l/Movies/A/A.mkv"),
        )
        assert item.effective_path == Path("/l/incoming/a.mkv")

        item.status = ItemStatus.ORGANIZED
        assert item.effective_path == Path("/l/Movies/A/A.mkv")
