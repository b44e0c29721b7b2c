"""
Tests des commandes CLI via typer.testing.CliRunner.

Chaque test utilise une base SQLite fichier dans tmp_path (partagee par
les invocations successives) et ne touche pas au reseau.
"""

from pathlib import Path

import httpx
import pytest
import respx
from typer.testing import CliRunner

from reelsort.adapters.cli.helpers import console
from reelsort.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REELSORT_DATABASE_URL", f"sqlite:///{tmp_path / 'reelsort.db'}")
    monkeypatch.setenv("REELSORT_CACHE_DIR", str(tmp_path / "cache"))
    monkeypatch.setenv("REELSORT_LOG_FILE", str(tmp_path / "logs" / "reelsort.log"))
    monkeypatch.setenv("REELSORT_SCAN_REQUEST_DELAY", "0")
    # Console large : les tableaux Rich ne coupent pas les cellules
    monkeypatch.setattr(console, "width", 200)


@pytest.fixture
def library(tmp_path: Path) -> Path:
    root = tmp_path / "library"
    root.mkdir()
    return root


class TestConfigure:
    def test_save_and_show(self, library: Path) -> None:
        result = runner.invoke(
            app, ["configure", "--root", str(library), "--api-key", "0123456789abcdef", "--copy"]
        )

        assert result.exit_code == 0
        assert "Reglages enregistres" in result.output

        shown = runner.invoke(app, ["configure"])
        assert shown.exit_code == 0
        assert "copie" in shown.output
        assert "0123...cdef" in shown.output
        assert "Reglages enregistres" not in shown.output

    def test_mount_safety_toggle(self, library: Path) -> None:
        result = runner.invoke(app, ["configure", "--root", str(library), "--no-mount-safety"])

        assert result.exit_code == 0
        assert "Securite montage" in result.output
        row = next(line for line in result.output.splitlines() if "Securite montage" in line)
        assert "non" in row


class TestScan:
    def test_scan_without_settings_fails(self) -> None:
        result = runner.invoke(app, ["scan"])

        assert result.exit_code == 1
        assert "failed" in result.output

    def test_scan_then_status_and_items(self, library: Path) -> None:
        (library / "Movie.Name.2024.1080p.mkv").write_bytes(b"video")
        runner.invoke(app, ["configure", "--root", str(library)])

        scanned = runner.invoke(app, ["scan"])
        assert scanned.exit_code == 0
        assert "completed" in scanned.output
        assert "1/1" in scanned.output

        status = runner.invoke(app, ["status"])
        assert status.exit_code == 0
        assert "Scan 1" in status.output
        assert "Found 1 video files." in status.output
        assert "Scan completed successfully." in status.output

        items = runner.invoke(app, ["items", "--status", "uncategorized"])
        assert items.exit_code == 0
        assert "No API Key" in items.output

        organized = runner.invoke(app, ["items", "--status", "organized"])
        assert "Aucun fichier organized" in organized.output

    def test_status_without_scan(self) -> None:
        result = runner.invoke(app, ["status"])
        assert result.exit_code == 1
        assert "Aucun scan" in result.output


class TestCheckKey:
    def test_missing_key(self) -> None:
        result = runner.invoke(app, ["check-key"])
        assert result.exit_code == 1
        assert "Missing API Key" in result.output

    def test_valid_key(self) -> None:
        with respx.mock:
            respx.get("https://api.themoviedb.org/3/configuration").mock(
                return_value=httpx.Response(200, json={"images": {}})
            )
            result = runner.invoke(
                app, ["check-key", "--api-key", "0123456789abcdef0123456789abcdef"]
            )

        assert result.exit_code == 0
        assert "VALID" in result.output
        assert "v3" in result.output


def test_version() -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "ReelSort v" in result.output
