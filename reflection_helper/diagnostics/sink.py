"""Append-only diagnostics file shared by all accessor operations.

Each line looks like:

    [2024-05-01 12:30:00] [ReflectionHelper] Set field [_count] succeeded, new value: 5

The file is truncated when a sink is created and only appended to afterwards.
The process-wide sink is created lazily on first use.
"""

import logging
import threading
from datetime import datetime
from typing import ClassVar, Optional

from rich.console import Console

from .config import DiagnosticsConfig

logger = logging.getLogger("reflection_helper")
logger.addHandler(logging.NullHandler())

# Fallback channel when the log file itself cannot be written
_fallback_console = Console(stderr=True)


class DiagnosticsSink:
    """Timestamped line writer backed by a single text file.

    Usage:
        sink = DiagnosticsSink.instance()
        sink.write("something happened")

        # Or an explicit sink, e.g. per test
        sink = DiagnosticsSink(DiagnosticsConfig(directory=tmp_path))
    """

    _instance: ClassVar[Optional["DiagnosticsSink"]] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, config: Optional[DiagnosticsConfig] = None):
        """Initialize the sink and truncate its file.

        Args:
            config: File location and format; defaults to
                <cwd>/MTF_SCP_Debug.txt
        """
        self.config = config or DiagnosticsConfig()
        self.path = self.config.path
        self._write_lock = threading.Lock()
        self._truncate()

    @classmethod
    def instance(cls) -> "DiagnosticsSink":
        """Return the process-wide sink, creating it on first access."""
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    def _truncate(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text("", encoding=self.config.encoding)
        except OSError as e:
            _fallback_console.print(
                f"Could not reset diagnostics file {self.path}: {e}",
                markup=False,
                highlight=False,
            )

    def format_line(self, message: str) -> str:
        """Prefix a message with the current local timestamp."""
        timestamp = datetime.now().strftime(self.config.timestamp_format)
        return f"[{timestamp}] {message}"

    def write(self, message: str, level: int = logging.DEBUG) -> None:
        """Append one line to the diagnostics file.

        Failures are reported on stderr and never raised.

        Args:
            message: Line content without timestamp
            level: Level used when mirroring to the Python logger
        """
        line = self.format_line(message)
        try:
            with self._write_lock:
                with open(self.path, "a", encoding=self.config.encoding) as f:
                    f.write(line + "\n")
        except (OSError, ValueError) as e:
            _fallback_console.print(
                f"Diagnostics write failed: {e}", markup=False, highlight=False
            )

        if self.config.mirror_to_logging:
            logger.log(level, message)

    def line_count(self) -> int:
        """Number of lines currently in the diagnostics file."""
        try:
            with open(self.path, "r", encoding=self.config.encoding) as f:
                return sum(1 for _ in f)
        except OSError:
            return 0
