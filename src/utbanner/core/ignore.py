# src/utbanner/core/ignore.py
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

import pathspec

from utbanner.models import CoverageModule, CoverageReport


def load_ignore_spec(ignore_file: Optional[Path], extra_patterns: Optional[List[str]] = None) -> pathspec.PathSpec:
    """
    Loads rules from .bannerignore and creates a PathSpec object.
    Extra patterns (from --exclude) are appended after the file's rules.
    """
    lines = []

    if ignore_file is not None and ignore_file.exists():
        with open(ignore_file, "r", encoding="utf-8") as f:
            lines = f.readlines()

    if extra_patterns:
        lines.extend(extra_patterns)

    try:
        return pathspec.PathSpec.from_lines("gitwildmatch", lines)
    except Exception as e:
        print(f"Error parsing ignore rules: {e}", file=sys.stderr)
        return pathspec.PathSpec.from_lines("gitwildmatch", [])


def _match_path(path: str, root: Path) -> str:
    """Path as matched against ignore rules: relative to root when it lives below it."""
    candidate = Path(path)
    if candidate.is_absolute():
        try:
            candidate = candidate.relative_to(root)
        except ValueError:
            pass
    return candidate.as_posix()


def is_visible(path: str, filter_text: str, spec: pathspec.PathSpec, root: Path) -> bool:
    # Same rule as the tree view filter box: case-insensitive substring, empty shows all.
    if filter_text and filter_text.lower() not in path.lower():
        return False
    return not spec.match_file(_match_path(path, root))


def apply_visibility(
    report: CoverageReport,
    filter_text: str = "",
    spec: Optional[pathspec.PathSpec] = None,
    root: Optional[Path] = None,
) -> CoverageReport:
    """Returns a copy of the report with every file's visibility flag recomputed."""
    spec = spec or pathspec.PathSpec.from_lines("gitwildmatch", [])
    root = (root or Path.cwd()).resolve()

    modules = tuple(
        CoverageModule(
            name=module.name,
            files=tuple(replace(f, is_visible=is_visible(f.path, filter_text, spec, root)) for f in module.files),
        )
        for module in report.modules
    )
    return replace(report, modules=modules)
