"""Configuration for the diagnostics sink."""

from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_LOG_FILENAME = "MTF_SCP_Debug.txt"
DEFAULT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class DiagnosticsConfig(BaseModel):
    """Where and how the diagnostics sink writes its lines.

    The directory is captured when the config is built, so the process-wide
    sink logs into the working directory current at its first use.
    """

    directory: Path = Field(default_factory=Path.cwd, description="Directory holding the log file")
    filename: str = Field(DEFAULT_LOG_FILENAME, description="Log file name")
    encoding: str = Field("utf-8", description="Text encoding of the log file")
    timestamp_format: str = Field(
        DEFAULT_TIMESTAMP_FORMAT, description="strftime format of the line prefix"
    )
    mirror_to_logging: bool = Field(
        True, description="Also emit each line through the reflection_helper logger"
    )

    @property
    def path(self) -> Path:
        """Full path of the log file."""
        return self.directory / self.filename
