# src/utbanner/core/runner.py
from pathlib import Path
from typing import Optional

from utbanner.config import DEFAULT_ENCODING
from utbanner.core.annotator import FileAnnotator
from utbanner.core.summary import summarize
from utbanner.core.walker import CoverageWalker
from utbanner.logging import close_diagnostic_log, default_log_path, open_diagnostic_log
from utbanner.models import CoverageReport, RunSummary


def update_banners(
    report: CoverageReport,
    root: Optional[Path] = None,
    encoding: str = DEFAULT_ENCODING,
    log_file: Optional[Path] = None,
) -> RunSummary:
    """
    Runs one banner batch over the report and returns its summary.
    Error details are appended to ``log_file`` (a temp file by default).
    """
    log_file = Path(log_file) if log_file is not None else default_log_path()
    diagnostics = open_diagnostic_log(log_file)
    try:
        walker = CoverageWalker(FileAnnotator(encoding=encoding, diagnostics=diagnostics), root=root)
        return summarize(walker.walk(report), log_path=log_file)
    finally:
        close_diagnostic_log(diagnostics)
