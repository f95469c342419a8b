# src/utbanner/core/annotator.py
import codecs
import logging
import re
from pathlib import Path
from typing import Optional, Tuple

from utbanner.config import DEFAULT_ENCODING, DIAGNOSTIC_RECORD, NOT_READ_YET
from utbanner.core.banner import BannerState, classify_banner, merge_banner, render_banner
from utbanner.logging import get_logger
from utbanner.models import VisitResult

logger = get_logger("annotator")

# CRLF, lone CR and LF all end a line.
LINE_END = re.compile(rb"\r\n|\r|\n")


class EmptyFileError(ValueError):
    """Raised when a file has no first line to inspect."""


class FileAnnotator:
    """Rewrites the banner line of one file at a time."""

    def __init__(self, encoding: str = DEFAULT_ENCODING, diagnostics: Optional[logging.Logger] = None):
        self.encoding = encoding
        self.diagnostics = diagnostics or logger

    @staticmethod
    def _split_first_line(raw: bytes) -> Tuple[bytes, bytes, bytes, bytes]:
        """
        Splits raw content into (bom, first line, line terminator, remainder).
        The remainder is returned untouched so the body is written back byte for byte.
        """
        bom = b""
        if raw.startswith(codecs.BOM_UTF8):
            bom, raw = codecs.BOM_UTF8, raw[len(codecs.BOM_UTF8):]

        match = LINE_END.search(raw)
        if match is None:
            return bom, raw, b"", b""
        return bom, raw[:match.start()], match.group(), raw[match.end():]

    def process(self, path, covered: int, total: int) -> VisitResult:
        """
        Brings the banner of ``path`` up to date.
        Returns UPDATED, SKIPPED (foreign or already current) or ERROR; never raises.
        """
        path = Path(path)
        fragment = NOT_READ_YET
        try:
            raw = path.read_bytes()
            if not raw:
                raise EmptyFileError(f"{path} is empty")

            bom, line, terminator, remainder = self._split_first_line(raw)
            fragment = line.decode(self.encoding)

            rendered = render_banner(covered, total, path.as_posix())
            state = classify_banner(fragment, rendered)
            if state is not BannerState.STALE:
                logger.debug("Skipping %s (%s)", path, state.value)
                return VisitResult.skipped(str(path))

            new_line = merge_banner(fragment, rendered)
            path.write_bytes(bom + new_line.encode(self.encoding) + terminator + remainder)
            logger.debug("Updated %s: %s", path, new_line)
            return VisitResult.updated(str(path))

        except Exception as e:
            self.diagnostics.error(
                DIAGNOSTIC_RECORD.format(error=repr(e), path=path, covered=covered, total=total, fragment=fragment),
                exc_info=e,
            )
            logger.debug("Failed on %s: %s", path, e)
            return VisitResult.failed(str(path), f"{type(e).__name__}: {e}", fragment)
