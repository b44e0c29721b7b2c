"""Tests unitaires pour l'entite ScanJob et sa machine a etats."""

import pytest

from reelsort.core.entities import JobError, JobLogEntry, JobStatus, ScanJob
from reelsort.core.exceptions import InvalidJobTransitionError


class TestScanJob:
    def test_initial_state(self) -> None:
        job = ScanJob()
        assert job.status is JobStatus.RUNNING
        assert job.finished_at is None
        assert job.stats.to_dict() == {"movies": 0, "tv": 0, "uncategorized": 0, "errors": 0}

    def test_progress_never_decreases(self) -> None:
        job = ScanJob()
        job.advance(5)
        job.advance(3)
        assert job.processed_files == 5

    def test_add_error_increments_counter(self) -> None:
        job = ScanJob()
        error = job.add_error("/library/a.mkv", "boom")
        assert error == JobError(path="/library/a.mkv", error="boom")
        assert job.stats.errors == 1
        assert job.errors == [error]

    def test_log_entries_are_timestamped(self) -> None:
        job = ScanJob()
        entry = job.log("Found 3 video files.")
        assert job.logs == [entry]
        assert entry.ts.tzinfo is not None
        assert JobLogEntry.from_dict(entry.to_dict()) == entry

    @pytest.mark.parametrize("finish", ["complete", "fail"])
    def test_terminal_states_set_finished_at(self, finish: str) -> None:
        job = ScanJob()
        getattr(job, finish)()
        assert job.status.is_terminal
        assert job.finished_at is not None

    def test_no_transition_out_of_terminal_state(self) -> None:
        job = ScanJob()
        job.complete()

        with pytest.raises(InvalidJobTransitionError):
            job.fail()
        with pytest.raises(InvalidJobTransitionError):
            job.advance(1)
        assert job.status is JobStatus.COMPLETED
