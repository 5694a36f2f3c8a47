"""Tests for the logging helpers."""

from __future__ import annotations

import io
import logging
from logging.handlers import RotatingFileHandler

from utils.logger import EncodingSafeStreamHandler, resolve_level, setup_logging


def test_setup_logging_attaches_handlers(tmp_path) -> None:
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level

    try:
        setup_logging(log_level="debug", log_file="test_logging.log", max_bytes=1024, backup_count=1, log_dir=tmp_path)

        assert root.level == logging.DEBUG
        assert any(isinstance(handler, RotatingFileHandler) for handler in root.handlers)
        assert any(isinstance(handler, EncodingSafeStreamHandler) for handler in root.handlers)
        assert (tmp_path / "test_logging.log").exists()
        assert logging.getLogger("urllib3").level == logging.WARNING

        # Invalid log level should fall back to INFO without raising.
        setup_logging(log_level="invalid", log_file="test_logging.log", log_dir=tmp_path)
        assert root.level == logging.INFO
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        for handler in original_handlers:
            root.addHandler(handler)
        root.setLevel(original_level)


def test_resolve_level_handles_unknown_names() -> None:
    assert resolve_level("warning") == logging.WARNING
    assert resolve_level("nonsense") == logging.INFO
    assert resolve_level(None) == logging.INFO  # type: ignore[arg-type]


def test_encoding_safe_stream_handler_handles_unicode_errors() -> None:
    class _MockStream(io.StringIO):
        def write(self, __s: str) -> int:  # type: ignore[override]
            raise UnicodeEncodeError("ascii", "é", 0, 1, "invalid")

    handler = EncodingSafeStreamHandler(_MockStream())
    record = logging.LogRecord("test", logging.INFO, __file__, 0, "message", args=None, exc_info=None)

    # Should swallow error without raising.
    handler.emit(record)


def test_cp1250_console_gets_replacement_characters() -> None:
    class _Cp1250Stream(io.StringIO):
        encoding = "cp1250"

        def write(self, s: str) -> int:  # type: ignore[override]
            if any(ord(char) > 255 for char in s):
                raise UnicodeEncodeError("cp1250", s, 0, len(s), "character maps to <undefined>")
            return super().write(s)

    stream = _Cp1250Stream()
    handler = EncodingSafeStreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(message)s"))
    record = logging.LogRecord(
        "alerts.lifecycle", logging.INFO, __file__, 0, "🚨 alert enabled for <@alice>", args=None, exc_info=None
    )

    handler.emit(record)

    contents = stream.getvalue()
    assert "alert enabled for <@alice>" in contents
    assert "?" in contents
