import threading
from pathlib import Path

import pytest

from source_structure.errors import ScanInProgressError, ScanIOError
from source_structure.services import scanner
from source_structure.services.project import new_project
from source_structure.services.scan_jobs import ScanRunner, ScanState


@pytest.fixture
def runner():
    runner = ScanRunner()
    yield runner
    runner.shutdown()


def _block_line_counting(monkeypatch) -> tuple[threading.Event, threading.Event]:
    """Make count_lines wait until released so a scan stays in flight."""
    started = threading.Event()
    release = threading.Event()
    real_count_lines = scanner.count_lines

    def slow_count_lines(path: str) -> int:
        started.set()
        release.wait(timeout=5)
        return real_count_lines(path)

    monkeypatch.setattr(scanner, "count_lines", slow_count_lines)
    return started, release


def test_background_scan_completes(runner, tmp_path: Path) -> None:
    (tmp_path / "a.py").write_text("1\n2\n")
    project = new_project(tmp_path)

    job = runner.start(project)

    assert job.wait(timeout=5) == ScanState.COMPLETED
    assert job.result() is True
    assert job.error is None
    assert project.root_folder.files[0].lines == 2
    assert runner.busy is False


def test_second_scan_is_rejected_while_running(runner, monkeypatch, tmp_path: Path) -> None:
    (tmp_path / "a.py").write_text("1\n")
    project = new_project(tmp_path)
    started, release = _block_line_counting(monkeypatch)

    job = runner.start(project)
    assert started.wait(timeout=5)
    assert runner.busy is True
    assert job.state == ScanState.RUNNING

    with pytest.raises(ScanInProgressError):
        runner.start(project)

    release.set()
    assert job.wait(timeout=5) == ScanState.COMPLETED

    # Once finished a new scan may start.
    assert runner.start(project).wait(timeout=5) == ScanState.COMPLETED


def test_cancel_stops_running_scan(runner, monkeypatch, tmp_path: Path) -> None:
    for name in ("a.py", "b.py", "c.py"):
        (tmp_path / name).write_text("x\n")
    project = new_project(tmp_path)
    started, release = _block_line_counting(monkeypatch)

    job = runner.start(project)
    assert started.wait(timeout=5)

    assert runner.cancel() is True
    release.set()

    assert job.wait(timeout=5) == ScanState.CANCELLED
    assert job.result() is False
    # The file being counted when the cancel arrived is finished, the rest are not added.
    assert [f.name for f in project.root_folder.files] == ["a.py"]
    assert project.root_folder.files[0].lines == 1


def test_cancel_without_running_scan(runner) -> None:
    assert runner.cancel() is False


def test_failed_scan_is_reported(runner, tmp_path: Path) -> None:
    project = new_project(tmp_path / "missing")

    job = runner.start(project)

    assert job.wait(timeout=5) == ScanState.FAILED
    assert isinstance(job.error, ScanIOError)
    with pytest.raises(ScanIOError):
        job.result()
