# tests/test_summary.py
from pathlib import Path
from unittest.mock import MagicMock

from utbanner.core.summary import ConsoleNotifier, format_summary, report_summary, summarize
from utbanner.models import RunSummary, VisitResult


def results(updated=0, skipped=0, failed=0):
    yield from (VisitResult.updated(f"u{i}.cpp") for i in range(updated))
    yield from (VisitResult.skipped(f"s{i}.cpp") for i in range(skipped))
    yield from (VisitResult.failed(f"e{i}.cpp", "OSError: boom", None) for i in range(failed))


def test_summarize_counts_each_outcome():
    summary = summarize(results(updated=3, skipped=2, failed=1), log_path=Path("run.log"))

    assert (summary.updated, summary.skipped, summary.error, summary.total) == (3, 2, 1, 6)
    assert summary.log_path == Path("run.log")

def test_summarize_drops_log_path_without_errors():
    summary = summarize(results(updated=1), log_path=Path("run.log"))

    assert summary.log_path is None
    assert summary.as_dict() == {"updated": 1, "skipped": 0, "error": 0, "total": 1}

def test_summarize_empty_run():
    assert summarize([]) == RunSummary()
    assert RunSummary().total == 0

def test_add_returns_new_summary():
    start = RunSummary()
    after = start.add(VisitResult.updated("a.cpp"))

    assert start.updated == 0
    assert after.updated == 1

def test_format_summary():
    assert format_summary(RunSummary(2, 1, 0)) == "Files updated: 2, skipped: 1, total: 3"
    assert format_summary(RunSummary(2, 1, 4)) == "Files updated: 2, skipped: 1, err: 4, total: 7"

def test_report_success_does_not_show_log():
    notifier = MagicMock()

    report_summary(RunSummary(1, 1, 0), notifier)

    notifier.success.assert_called_once_with("Files updated: 1, skipped: 1, total: 2")
    notifier.show_log.assert_not_called()
    notifier.failure.assert_not_called()

def test_report_failure_shows_log():
    notifier = MagicMock()

    report_summary(RunSummary(0, 0, 1, Path("run.log")), notifier)

    notifier.show_log.assert_called_once_with(Path("run.log"))
    notifier.failure.assert_called_once_with("Files updated: 0, skipped: 0, err: 1, total: 1")
    notifier.success.assert_not_called()

def test_console_notifier(capsys):
    notifier = ConsoleNotifier()
    report_summary(RunSummary(0, 2, 1, Path("run.log")), notifier)

    captured = capsys.readouterr()
    assert "Error details: run.log" in captured.err
    assert "err: 1, total: 3" in captured.err
