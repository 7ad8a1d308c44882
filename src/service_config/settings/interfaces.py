from __future__ import annotations

from typing import Protocol

from service_config.settings.models import SettingsLoadRequest, ToolSettings


class SettingsLoader(Protocol):
    """
    Loads effective tool settings.

    Precedence, lowest first: model defaults, YAML file, `.env` file, process environment.
    """

    def load(self, request: SettingsLoadRequest = SettingsLoadRequest()) -> ToolSettings:
        ...
