from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class FileRotationSettings(BaseModel):
    """
    Date-based rotation settings (daily).

    This maps cleanly to Python's standard library TimedRotatingFileHandler behavior.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    backup_count: int = 5


class FileLoggingSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    enabled: bool = False
    path: str = "data/logs/service-config.log"
    rotation: FileRotationSettings = Field(default_factory=FileRotationSettings)


class LoggingSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    level: str = "WARNING"
    file: FileLoggingSettings = Field(default_factory=FileLoggingSettings)


class CheckSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    # Raise on present-but-unparsable values instead of treating them as missing.
    strict: bool = False
    dotenv_path: Optional[str] = ".env"
    yaml_path: Optional[str] = None
    output_format: Literal["text", "json"] = "text"


class ToolSettings(BaseModel):
    """Effective settings of the service-config command line tool after all overrides."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    check: CheckSettings = Field(default_factory=CheckSettings)


@dataclass(frozen=True, slots=True)
class SettingsLoadRequest:
    """
    Optional inputs for a settings loader.

    When `yaml_path` is None only defaults and environment overrides apply.
    """

    yaml_path: Optional[str] = None
    env_prefix: str = "SERVICE_CONFIG__"
    dotenv_path: Optional[str] = ".env"
