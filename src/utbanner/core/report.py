# src/utbanner/core/report.py
"""
Loads a coverage report into the module -> file tree.

Two formats are read: a small JSON document and Cobertura XML (the export
format most C++ coverage tools offer). Coverage itself is never computed here,
only counted from what the report states.
"""
import json
import xml.etree.ElementTree as ET
from pathlib import Path, PurePath
from typing import Any, Dict, List

from utbanner.models import CoverageFile, CoverageModule, CoverageReport


class ReportError(RuntimeError):
    """Raised when a coverage report cannot be read or is inconsistent."""


def load_report(report_path: Path) -> CoverageReport:
    report_path = Path(report_path)
    suffix = report_path.suffix.lower()
    if suffix not in (".json", ".xml"):
        raise ReportError(f"Unsupported report format '{report_path.suffix}' (expected .json or .xml)")
    try:
        text = report_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ReportError(f"Cannot read report {report_path}: {e}") from e

    if suffix == ".json":
        return parse_json_report(text)
    return parse_cobertura_report(text)


def _make_file(path: Any, covered: Any, total: Any) -> CoverageFile:
    if not isinstance(path, str) or not path:
        raise ReportError(f"File entry without a path: {path!r}")
    if isinstance(covered, bool) or isinstance(total, bool) or not isinstance(covered, int) or not isinstance(total, int):
        raise ReportError(f"Line counts of {path} must be integers")
    if covered < 0 or total < 0:
        raise ReportError(f"Negative line count for {path}")
    if covered > total:
        raise ReportError(f"{path}: covered lines ({covered}) exceed total lines ({total})")
    return CoverageFile(path=path, covered_lines=covered, total_lines=total)


def parse_json_report(text: str) -> CoverageReport:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ReportError(f"Invalid JSON report: {e}") from e
    if not isinstance(data, dict) or not isinstance(data.get("modules"), list):
        raise ReportError("JSON report must be an object with a 'modules' list")

    modules: List[CoverageModule] = []
    for raw_module in data["modules"]:
        if not isinstance(raw_module, dict):
            raise ReportError("Each module must be an object")
        files = []
        for raw_file in raw_module.get("files", []):
            if not isinstance(raw_file, dict):
                raise ReportError("Each file entry must be an object")
            files.append(_make_file(raw_file.get("path"), raw_file.get("covered"), raw_file.get("total")))
        modules.append(CoverageModule(name=str(raw_module.get("name", "")), files=tuple(files)))

    exit_code = data.get("exit_code", 0)
    if not isinstance(exit_code, int):
        raise ReportError("'exit_code' must be an integer")
    return CoverageReport(modules=tuple(modules), exit_code=exit_code)


def parse_cobertura_report(text: str) -> CoverageReport:
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise ReportError(f"Invalid Cobertura XML: {e}") from e
    if root.tag != "coverage":
        raise ReportError(f"Not a Cobertura report (root element <{root.tag}>)")

    source_el = root.find("sources/source")
    source = source_el.text.strip() if source_el is not None and source_el.text else ""

    modules: List[CoverageModule] = []
    for package in root.findall("packages/package"):
        # filename -> {line number -> hit}, classes of one file are merged
        hits_by_file: Dict[str, Dict[int, bool]] = {}
        for cls in package.findall("classes/class"):
            filename = cls.get("filename", "")
            if not filename:
                raise ReportError(f"<class> without filename in package '{package.get('name', '')}'")
            lines = hits_by_file.setdefault(filename, {})
            for line in cls.findall("lines/line"):
                try:
                    number = int(line.get("number", ""))
                    hits = int(line.get("hits", "0"))
                except ValueError as e:
                    raise ReportError(f"Bad <line> entry in {filename}: {e}") from e
                lines[number] = lines.get(number, False) or hits > 0

        files = []
        for filename, lines in hits_by_file.items():
            path = filename
            if source and not PurePath(filename).is_absolute():
                path = str(PurePath(source) / filename)
            files.append(_make_file(path, sum(lines.values()), len(lines)))
        modules.append(CoverageModule(name=package.get("name", ""), files=tuple(files)))

    return CoverageReport(modules=tuple(modules))
