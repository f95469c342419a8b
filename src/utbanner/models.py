# src/utbanner/models.py
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple


@dataclass(frozen=True)
class CoverageFile:
    """One file row of a coverage report."""
    path: str
    covered_lines: int
    total_lines: int
    is_visible: bool = True
    has_children: bool = False


@dataclass(frozen=True)
class CoverageModule:
    name: str
    files: Tuple[CoverageFile, ...] = ()


@dataclass(frozen=True)
class CoverageReport:
    """Module -> file tree, as produced by the coverage run."""
    modules: Tuple[CoverageModule, ...] = ()
    exit_code: int = 0

    def iter_files(self):
        for module in self.modules:
            yield from module.files


class VisitOutcome(Enum):
    UPDATED = "updated"
    SKIPPED = "skipped"
    ERROR = "error"


@dataclass(frozen=True)
class VisitResult:
    """Result of processing exactly one file. Errors are returned, not raised."""
    path: str
    outcome: VisitOutcome
    error: Optional[str] = None
    fragment: Optional[str] = None

    @classmethod
    def updated(cls, path: str) -> "VisitResult":
        return cls(path, VisitOutcome.UPDATED)

    @classmethod
    def skipped(cls, path: str) -> "VisitResult":
        return cls(path, VisitOutcome.SKIPPED)

    @classmethod
    def failed(cls, path: str, error: str, fragment: Optional[str]) -> "VisitResult":
        return cls(path, VisitOutcome.ERROR, error=error, fragment=fragment)


@dataclass(frozen=True)
class RunSummary:
    """Tally of one banner run. Build a new one per run."""
    updated: int = 0
    skipped: int = 0
    error: int = 0
    log_path: Optional[Path] = field(default=None, compare=False)

    @property
    def total(self) -> int:
        return self.updated + self.skipped + self.error

    def add(self, result: VisitResult) -> "RunSummary":
        if result.outcome is VisitOutcome.UPDATED:
            return replace(self, updated=self.updated + 1)
        if result.outcome is VisitOutcome.SKIPPED:
            return replace(self, skipped=self.skipped + 1)
        return replace(self, error=self.error + 1)

    def as_dict(self) -> dict:
        data = {
            "updated": self.updated,
            "skipped": self.skipped,
            "error": self.error,
            "total": self.total,
        }
        if self.error:
            data["log_path"] = str(self.log_path) if self.log_path else None
        return data
