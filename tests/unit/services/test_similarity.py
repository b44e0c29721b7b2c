"""Tests unitaires pour le score de similarite entre titres."""

import pytest

from reelsort.services import similarity


class TestNormalize:
    def test_lowercases_and_strips_non_alnum(self) -> None:
        assert similarity.normalize("The Matrix: Reloaded!") == "thematrixreloaded"

    def test_none_is_empty(self) -> None:
        assert similarity.normalize(None) == ""


class TestDistance:
    def test_classic_edit_distance(self) -> None:
        assert similarity.distance("kitten", "sitting") == 3

    def test_distance_on_normalized_forms(self) -> None:
        assert similarity.distance("The-Matrix", "the matrix") == 0


class TestScore:
    def test_identical_titles(self) -> None:
        assert similarity.score("Movie Name", "movie.name") == 1.0

    def test_both_empty(self) -> None:
        assert similarity.score("", "!!!") == 1.0

    def test_one_empty(self) -> None:
        assert similarity.score("Movie", "") == 0.0
        assert similarity.score(None, "Movie") == 0.0

    def test_partial_similarity(self) -> None:
        # "moviename" vs "movienames" : distance 1 sur 10
        assert similarity.score("Movie Name", "Movie Names") == pytest.approx(0.9)

    @pytest.mark.parametrize(
        "a,b",
        [
            ("Inception", "Interstellar"),
            ("Amelie", "Le Fabuleux Destin d'Amelie Poulain"),
            ("abc", "xyz"),
        ],
    )
    def test_symmetric_and_bounded(self, a: str, b: str) -> None:
        forward = similarity.score(a, b)
        assert forward == similarity.score(b, a)
        assert 0.0 <= forward <= 1.0
