# tests/conftest.py
import pytest

from utbanner.logging import close_diagnostic_log, open_diagnostic_log


@pytest.fixture
def diagnostics(tmp_path):
    """A diagnostic logger writing to tmp_path/diagnostics.log."""
    log_file = tmp_path / "diagnostics.log"
    logger = open_diagnostic_log(log_file)
    logger.log_file = log_file
    yield logger
    close_diagnostic_log(logger)


@pytest.fixture
def write_source(tmp_path):
    """Creates a source file with raw bytes below tmp_path/src."""
    src = tmp_path / "src"
    src.mkdir(exist_ok=True)

    def _write(name: str, content: bytes):
        path = src / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path

    return _write
