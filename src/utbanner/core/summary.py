# src/utbanner/core/summary.py
import sys
from functools import reduce
from pathlib import Path
from typing import Iterable, Optional, Protocol

from utbanner.models import RunSummary, VisitResult


class Notifier(Protocol):
    def success(self, message: str) -> None: ...

    def failure(self, message: str) -> None: ...

    def show_log(self, log_path: Optional[Path]) -> None: ...


def summarize(results: Iterable[VisitResult], log_path: Optional[Path] = None) -> RunSummary:
    """Folds a stream of results into a fresh RunSummary."""
    summary = reduce(RunSummary.add, results, RunSummary())
    if summary.error:
        return RunSummary(summary.updated, summary.skipped, summary.error, log_path)
    return summary


def format_summary(summary: RunSummary) -> str:
    if summary.error:
        return (
            f"Files updated: {summary.updated}, skipped: {summary.skipped}, "
            f"err: {summary.error}, total: {summary.total}"
        )
    return f"Files updated: {summary.updated}, skipped: {summary.skipped}, total: {summary.total}"


def report_summary(summary: RunSummary, notifier: Notifier) -> None:
    """Errors point the operator at the diagnostic log; details never go in the summary."""
    message = format_summary(summary)
    if summary.error:
        notifier.show_log(summary.log_path)
        notifier.failure(message)
    else:
        notifier.success(message)


class ConsoleNotifier:
    """Prints the run notice for the command line."""

    def __init__(self, out=None, err=None):
        self._out = out
        self._err = err

    def _stream(self, err: bool):
        # Resolved per call so redirected std streams are honoured.
        if err:
            return self._err or sys.stderr
        return self._out or sys.stdout

    def success(self, message: str) -> None:
        print(f"Success! {message}", file=self._stream(False))

    def failure(self, message: str) -> None:
        print(f"Finished with errors. {message}", file=self._stream(True))

    def show_log(self, log_path: Optional[Path]) -> None:
        if log_path is not None:
            print(f"Error details: {log_path}", file=self._stream(True))
