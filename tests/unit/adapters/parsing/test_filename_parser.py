"""
Tests unitaires pour l'extraction des metadonnees d'un nom de fichier.

Verifie la priorite des tables de regles, les bornes de l'annee,
la detection saison/episode et le titre nettoye.
"""

import pytest

from reelsort.adapters.parsing import RegexFilenameParser, parse_filename
from reelsort.adapters.parsing.filename_parser import (
    extract_clean_title,
    extract_codec,
    extract_quality,
    extract_season_episode,
    extract_source,
    extract_year,
)
from reelsort.core.ports.parser import IFilenameParser
from reelsort.core.value_objects import FilenameMetadata, MediaType


class TestParseFilename:
    """Tests de parse_filename() sur des noms de release realistes."""

    def test_movie_release_name(self) -> None:
        metadata = parse_filename("Movie.Name.2024.1080p.WEBRip.x265.mkv")

        assert metadata.quality == "1080p"
        assert metadata.year == 2024
        assert metadata.source == "WEBRip"
        assert metadata.codec == "X265"
        assert metadata.clean_title == "Movie Name"
        assert metadata.is_tv is False
        assert metadata.media_type is MediaType.MOVIE

    def test_episode_release_name(self) -> None:
        metadata = parse_filename("Show.Name.S01E09.720p.WEB-DL.mkv")

        assert metadata.is_tv is True
        assert metadata.season == 1
        assert metadata.episode == 9
        assert metadata.clean_title == "Show Name"
        assert metadata.source == "WEB-DL"
        assert metadata.media_type is MediaType.TV

    def test_empty_filename_is_total(self) -> None:
        """Un nom vide donne des metadonnees vides, sans exception."""
        assert parse_filename("") == FilenameMetadata()

    def test_name_without_tags(self) -> None:
        metadata = parse_filename("holiday video.mp4")

        assert metadata.quality is None
        assert metadata.year is None
        assert metadata.source is None
        assert metadata.codec is None
        assert metadata.clean_title == "holiday video"

    def test_parser_class_implements_port(self) -> None:
        parser = RegexFilenameParser()
        assert isinstance(parser, IFilenameParser)
        assert parser.parse("Film.2010.mkv").year == 2010


class TestQuality:
    """La resolution la plus haute gagne, quelle que soit sa position."""

    @pytest.mark.parametrize(
        "filename,expected",
        [
            ("Film.720p.2160p.mkv", "2160p"),
            ("Film.2160p.720p.mkv", "2160p"),
            ("Film.4K.HDR.mkv", "2160p"),
            ("Film.UHD.mkv", "2160p"),
            ("Film.480p.1080p.mkv", "1080p"),
            ("Film.576p.mkv", "576p"),
            ("Film.mkv", None),
        ],
    )
    def test_quality_priority(self, filename: str, expected: str | None) -> None:
        assert extract_quality(filename) == expected


class TestYear:
    @pytest.mark.parametrize(
        "filename,expected",
        [
            ("Film.1900.mkv", 1900),
            ("Film.2099.mkv", 2099),
            ("Film.1899.mkv", None),
            ("Film.2100.mkv", None),
            ("Film.12024.mkv", None),
            ("Blade.Runner.1982.Final.Cut.2007.mkv", 1982),
        ],
    )
    def test_year_bounds(self, filename: str, expected: int | None) -> None:
        assert extract_year(filename) == expected


class TestSourceAndCodec:
    def test_source_tags_are_normalized(self) -> None:
        assert extract_source("film.webdl.mkv") == "WEB-DL"
        assert extract_source("film.web-rip.mkv") == "WEBRip"
        assert extract_source("Film.BluRay.mkv") == "BLURAY"
        assert extract_source("Film.DVDRip.avi") == "DVDRIP"

    def test_leftmost_source_wins(self) -> None:
        assert extract_source("Film.BluRay.WEB-DL.mkv") == "BLURAY"
        assert extract_source("Film.WEB-DL.BluRay.mkv") == "WEB-DL"

    def test_source_requires_word_boundary(self) -> None:
        """'cam' dans 'Camera' n'est pas une source."""
        assert extract_source("Camera.Obscura.mkv") is None

    def test_codec_uppercased(self) -> None:
        assert extract_codec("Film.hevc.mkv") == "HEVC"
        assert extract_codec("Film.x264-GRP.mkv") == "X264"
        assert extract_codec("Film.AV1.mkv") == "AV1"
        assert extract_codec("Film.mkv") is None

    def test_leftmost_codec_wins(self) -> None:
        assert extract_codec("Film.HEVC.x264.mkv") == "HEVC"
        assert extract_codec("Film.x264.HEVC.mkv") == "X264"

    def test_two_tags_of_each_kind(self) -> None:
        metadata = parse_filename("Movie.2020.BluRay.WEB-DL.HEVC.x264.mkv")
        assert metadata.source == "BLURAY"
        assert metadata.codec == "HEVC"


class TestSeasonEpisode:
    @pytest.mark.parametrize(
        "filename,expected",
        [
            ("Show.S01E02.mkv", (1, 2)),
            ("show s1 e2.mkv", (1, 2)),
            ("Show Season 2 Episode 3.mkv", (2, 3)),
            ("Show.1x02.mkv", (1, 2)),
            ("Show.S12E100.mkv", (12, 100)),
            ("Movie.2024.mkv", (None, None)),
        ],
    )
    def test_markers(self, filename: str, expected: tuple) -> None:
        assert extract_season_episode(filename) == expected


class TestCleanTitle:
    def test_brackets_and_parentheses_removed(self) -> None:
        assert extract_clean_title("[Group] Title (2019).mkv") == "Title"

    def test_audio_codecs_removed(self) -> None:
        assert extract_clean_title("Film.Title.DTS.AAC.1080p.mkv") == "Film Title"

    def test_separators_collapsed(self) -> None:
        assert extract_clean_title("The_Big-Movie..Name.mp4") == "The Big Movie Name"

    def test_only_tags_gives_empty_title(self) -> None:
        assert extract_clean_title("2024.1080p.x265.mkv") == ""
