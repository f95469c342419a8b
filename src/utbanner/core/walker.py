# src/utbanner/core/walker.py
from pathlib import Path
from typing import Iterator, Optional

from utbanner.config import BINARY_EXTENSIONS
from utbanner.core.annotator import FileAnnotator
from utbanner.logging import get_logger
from utbanner.models import CoverageFile, CoverageReport, VisitResult

logger = get_logger("walker")


class CoverageWalker:
    """Drives the annotator over the eligible files of a report, one file at a time."""

    def __init__(self, annotator: FileAnnotator, root: Optional[Path] = None):
        self.annotator = annotator
        self.root = Path(root) if root is not None else Path.cwd()

    def resolve(self, entry: CoverageFile) -> Path:
        path = Path(entry.path)
        return path if path.is_absolute() else self.root / path

    def is_eligible(self, entry: CoverageFile) -> bool:
        """
        Leaf rows that are visible, not binaries, have lines to count
        and exist on disk. Anything else is never visited.
        """
        if not entry.is_visible or entry.has_children:
            return False
        if entry.path.lower().endswith(BINARY_EXTENSIONS):
            return False
        if entry.total_lines <= 0:
            return False
        try:
            return self.resolve(entry).is_file()
        except OSError:
            # Unreachable paths (too long, no permission on a parent) count as absent.
            return False

    def eligible_files(self, report: CoverageReport) -> Iterator[CoverageFile]:
        for entry in report.iter_files():
            if self.is_eligible(entry):
                yield entry
            else:
                logger.debug("Not eligible: %s", entry.path)

    def walk(self, report: CoverageReport) -> Iterator[VisitResult]:
        """Lazily yields one VisitResult per eligible file, in report order."""
        for entry in self.eligible_files(report):
            yield self.annotator.process(self.resolve(entry), entry.covered_lines, entry.total_lines)
