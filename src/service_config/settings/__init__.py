"""Settings of the service-config tooling (logging, check defaults)."""

from service_config.settings.loader import YamlSettingsLoader
from service_config.settings.models import (
    CheckSettings,
    LoggingSettings,
    SettingsLoadRequest,
    ToolSettings,
)

__all__ = ["CheckSettings", "LoggingSettings", "SettingsLoadRequest", "ToolSettings", "YamlSettingsLoader"]
