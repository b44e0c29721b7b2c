"""
Tests unitaires pour le calcul des chemins de destination.

Verifie les structures films/series, le nettoyage des titres,
le padding SxxEyy et le caractere deterministe des chemins.
"""

from pathlib import Path

import pytest

from reelsort.core.entities import Identification
from reelsort.core.value_objects import MediaType
from reelsort.services.organizer import (
    OrganizerService,
    build_movie_path,
    build_tv_path,
    format_episode_code,
    organized_media_type,
    sanitize_title,
)

ROOT = Path("/library")


class TestSanitizeTitle:
    def test_removes_forbidden_characters(self) -> None:
        assert sanitize_title('What If...?: "Part" 1') == "What If... Part 1"

    def test_collapses_whitespace(self) -> None:
        assert sanitize_title("  Fast   &  Furious ") == "Fast Furious"

    def test_empty_title_falls_back(self) -> None:
        assert sanitize_title("?!*") == "Untitled"
        assert sanitize_title(None) == "Untitled"


class TestEpisodeCode:
    @pytest.mark.parametrize(
        "season,episode,expected",
        [(1, 9, "S01E09"), (12, 100, "S12E100"), (0, 0, "S00E00"), (None, None, "S01E01")],
    )
    def test_padding(self, season, episode, expected: str) -> None:
        assert format_episode_code(season, episode) == expected


class TestMoviePath:
    def test_full_movie_path(self) -> None:
        path = build_movie_path(
            ROOT, Identification(id=1, title="Movie Name", year=2024), "1080p", ".mkv"
        )
        assert path == ROOT / "Movies/Movie Name (2024)/Movie Name (2024) - 1080p.mkv"

    def test_without_year(self) -> None:
        path = build_movie_path(ROOT, Identification(id=1, title="Movie"), "720p", ".mp4")
        assert path == ROOT / "Movies/Movie/Movie - 720p.mp4"

    def test_without_quality(self) -> None:
        path = build_movie_path(
            ROOT, Identification(id=1, title="Movie", year=1999), None, ".avi"
        )
        assert path == ROOT / "Movies/Movie (1999)/Movie (1999).avi"

    def test_extension_case_preserved(self) -> None:
        path = build_movie_path(ROOT, Identification(id=1, title="Movie"), None, ".MKV")
        assert path.suffix == ".MKV"


class TestTvPath:
    def test_full_episode_path(self) -> None:
        identification = Identification(id=7, title="Show: Name", season=1, episode=9)
        path = build_tv_path(ROOT, identification, ".mkv")
        assert path == ROOT / "TV Shows/Show Name/Season 01/Show Name - S01E09.mkv"

    def test_large_numbers(self) -> None:
        identification = Identification(id=7, title="Show", season=12, episode=100)
        path = build_tv_path(ROOT, identification, ".mkv")
        assert path == ROOT / "TV Shows/Show/Season 12/Show - S12E100.mkv"


class TestOrganizerService:
    def test_deterministic(self) -> None:
        organizer = OrganizerService()
        identification = Identification(id=1, title="Movie Name", year=2024)

        first = organizer.build_destination(
            ROOT, MediaType.MOVIE, identification, "1080p", ".mkv"
        )
        second = organizer.build_destination(
            ROOT, MediaType.MOVIE, identification, "1080p", ".mkv"
        )

        assert first == second
        assert organized_media_type(first, ROOT) is MediaType.MOVIE

    def test_unknown_type_refused(self) -> None:
        with pytest.raises(ValueError):
            OrganizerService().build_destination(
                ROOT, MediaType.UNKNOWN, Identification(id=1, title="X"), None, ".mkv"
            )


class TestOrganizedMediaType:
    @pytest.mark.parametrize(
        "path,expected",
        [
            (ROOT / "Movies/A (2000)/A (2000).mkv", MediaType.MOVIE),
            (ROOT / "TV Shows/B/Season 01/B - S01E01.mkv", MediaType.TV),
            (ROOT / "Downloads/A.mkv", None),
            (ROOT / "Movies Extra/A.mkv", None),
        ],
    )
    def test_classification(self, path: Path, expected) -> None:
        assert organized_media_type(path, ROOT) is expected
