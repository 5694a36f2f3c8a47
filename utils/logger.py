"""
Logging configuration for HASS Alert CLI.

Updates: v0.2.0 - 2026-10-02 - Configurable log directory, quieter HTTP loggers.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_LOG_DIR = Path(__file__).parent.parent / "logs"


class EncodingSafeStreamHandler(logging.StreamHandler):
    """Stream handler that survives consoles unable to encode mentions or emoji."""

    def emit(self, record: logging.LogRecord) -> None:  # type: ignore[override]
        stream = self.stream
        if stream is None:
            return

        msg = self.format(record)

        try:
            stream.write(msg + self.terminator)
        except UnicodeEncodeError:
            encoding = getattr(stream, "encoding", None) or "utf-8"
            safe_message = msg.encode(encoding, errors="replace").decode(encoding, errors="replace")
            try:
                stream.write(safe_message + self.terminator)
            except Exception:
                self.handleError(record)
                return
        except Exception:
            self.handleError(record)
            return

        self.flush()


def resolve_level(log_level: str) -> int:
    """Map a level name to its numeric value, defaulting to INFO."""
    normalized = log_level.upper() if isinstance(log_level, str) else "INFO"
    return logging._nameToLevel.get(normalized, logging.INFO)


def setup_logging(log_level: str = "INFO",
                  log_file: str = "hass_alert_cli.log",
                  max_bytes: int = 5 * 1024 * 1024,  # 5MB
                  backup_count: int = 3,
                  log_dir: Optional[Path] = None) -> None:
    """Attach a rotating file handler and an encoding-safe console handler to the root logger."""

    level = resolve_level(log_level)

    target_dir = Path(log_dir) if log_dir is not None else DEFAULT_LOG_DIR
    target_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)

    # Disable codes are logged at DEBUG, so the file keeps everything
    file_handler = RotatingFileHandler(
        target_dir / log_file,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8"
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)

    # Console handler goes to stderr so the chat session output stays readable
    console_handler: logging.Handler = EncodingSafeStreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    root.addHandler(file_handler)
    root.addHandler(console_handler)

    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('requests').setLevel(logging.WARNING)
