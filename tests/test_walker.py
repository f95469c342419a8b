# tests/test_walker.py
from unittest.mock import MagicMock

import pytest

from utbanner.core.annotator import FileAnnotator
from utbanner.core.runner import update_banners
from utbanner.core.walker import CoverageWalker
from utbanner.models import CoverageFile, CoverageModule, CoverageReport, RunSummary, VisitResult

STALE = b"//UT Coverage: 0%, 0/4, NEED_MORE\nint x;\n"


@pytest.fixture
def project(tmp_path):
    """Three stale sources a.cpp, b.cpp, c.cpp plus a binary."""
    for name in ("a.cpp", "b.cpp", "c.cpp"):
        (tmp_path / name).write_bytes(STALE)
    (tmp_path / "app.exe").write_bytes(b"MZ\x00\x00")
    return tmp_path


def make_report(*files):
    return CoverageReport(modules=(CoverageModule("app.exe", tuple(files)),))

# --- Test 1: Eligibility ---

@pytest.mark.parametrize("entry", [
    CoverageFile("a.cpp", 2, 4, has_children=True),
    CoverageFile("a.cpp", 2, 4, is_visible=False),
    CoverageFile("app.exe", 2, 4),
    CoverageFile("Core.DLL", 2, 4),
    CoverageFile("a.cpp", 0, 0),
    CoverageFile("missing.cpp", 2, 4),
])
def test_ineligible_files_are_never_visited(project, entry):
    (project / "Core.DLL").write_bytes(b"MZ")
    annotator = MagicMock(spec=FileAnnotator)

    results = list(CoverageWalker(annotator, root=project).walk(make_report(entry)))

    assert results == []
    annotator.process.assert_not_called()

def test_eligible_file_resolves_against_root(project):
    annotator = MagicMock(spec=FileAnnotator)
    annotator.process.return_value = VisitResult.updated("a.cpp")

    list(CoverageWalker(annotator, root=project).walk(make_report(CoverageFile("a.cpp", 2, 4))))

    annotator.process.assert_called_once_with(project / "a.cpp", 2, 4)

def test_walk_follows_module_then_file_order(project):
    report = CoverageReport(modules=(
        CoverageModule("one", (CoverageFile("c.cpp", 1, 4), CoverageFile("a.cpp", 1, 4))),
        CoverageModule("two", (CoverageFile(str(project / "b.cpp"), 1, 4),)),
    ))
    walker = CoverageWalker(MagicMock(spec=FileAnnotator), root=project)

    assert [f.path for f in walker.eligible_files(report)] == ["c.cpp", "a.cpp", str(project / "b.cpp")]

def test_walk_is_lazy(project):
    annotator = MagicMock(spec=FileAnnotator)
    results = CoverageWalker(annotator, root=project).walk(make_report(CoverageFile("a.cpp", 1, 4)))

    annotator.process.assert_not_called()
    next(results)
    annotator.process.assert_called_once()

# --- Test 2: Whole runs ---

def test_error_isolation(project, monkeypatch):
    real_read = type(project).read_bytes

    def flaky_read(path):
        if path.name == "b.cpp":
            raise PermissionError("locked by another process")
        return real_read(path)

    monkeypatch.setattr(type(project), "read_bytes", flaky_read)
    log_file = project / "run.log"
    report = make_report(*(CoverageFile(n, 4, 4) for n in ("a.cpp", "b.cpp", "c.cpp")))

    summary = update_banners(report, root=project, log_file=log_file)

    assert summary == RunSummary(updated=2, skipped=0, error=1)
    assert summary.total == 3
    assert summary.log_path == log_file
    assert "b.cpp 4/4" in log_file.read_text(encoding="utf-8")
    assert (project / "a.cpp").read_bytes().startswith(b"//UT Coverage: 100%, 4/4, NEED_MORE\n")
    assert (project / "b.cpp").read_bytes() == STALE

def test_second_run_is_idempotent(project):
    report = make_report(
        CoverageFile("a.cpp", 1, 4),
        CoverageFile("b.cpp", 4, 4),
        CoverageFile("c.cpp", 199, 200),
    )
    log_file = project / "run.log"

    first = update_banners(report, root=project, log_file=log_file)
    snapshot = {n: (project / n).read_bytes() for n in ("a.cpp", "b.cpp", "c.cpp")}
    second = update_banners(report, root=project, log_file=log_file)

    assert first == RunSummary(updated=3)
    assert second == RunSummary(skipped=3)
    assert {n: (project / n).read_bytes() for n in snapshot} == snapshot
    assert second.log_path is None
    assert not log_file.exists()

def test_ineligible_rows_count_nowhere(project):
    report = make_report(
        CoverageFile("a.cpp", 1, 4),
        CoverageFile("app.exe", 1, 4),
        CoverageFile("folder", 1, 4, has_children=True),
        CoverageFile("b.cpp", 1, 4, is_visible=False),
    )

    summary = update_banners(report, root=project, log_file=project / "run.log")

    assert summary.as_dict() == {"updated": 1, "skipped": 0, "error": 0, "total": 1}
    assert (project / "b.cpp").read_bytes() == STALE

def test_unreachable_path_does_not_abort_the_run(project):
    report = make_report(
        CoverageFile("a.cpp", 1, 4),
        CoverageFile("x" * 300 + ".cpp", 1, 4),
        CoverageFile("c.cpp", 1, 4),
    )

    summary = update_banners(report, root=project, log_file=project / "run.log")

    assert summary == RunSummary(updated=2)
    assert (project / "c.cpp").read_bytes().startswith(b"//UT Coverage: 25%, 1/4, NEED_MORE\n")

def test_is_eligible_treats_os_errors_as_absent(project, monkeypatch):
    def broken_is_file(path):
        raise PermissionError("parent not searchable")

    monkeypatch.setattr(type(project), "is_file", broken_is_file)
    walker = CoverageWalker(MagicMock(spec=FileAnnotator), root=project)

    assert walker.is_eligible(CoverageFile("a.cpp", 1, 4)) is False
