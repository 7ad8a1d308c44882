from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from service_config.settings.models import SettingsLoadRequest, ToolSettings


def _merged(base: Mapping[str, Any], layer: Mapping[str, Any]) -> Dict[str, Any]:
    result = dict(base)
    for key, value in layer.items():
        current = result.get(key)
        result[key] = _merged(current, value) if isinstance(current, dict) and isinstance(value, Mapping) else value
    return result


def _yaml_layer(path: Path) -> Dict[str, Any]:
    try:
        import yaml  # type: ignore[import-not-found]
    except ModuleNotFoundError as e:  # pragma: no cover
        raise ModuleNotFoundError("Missing dependency: PyYAML is required to read settings files.") from e

    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Settings file must hold a mapping, got: {type(data).__name__}")
    return data


def _dotenv_overrides(path: Path) -> Dict[str, str]:
    try:
        from dotenv import dotenv_values  # type: ignore[import-not-found]
    except ModuleNotFoundError as e:  # pragma: no cover
        raise ModuleNotFoundError("Missing dependency: python-dotenv is required to read .env files.") from e

    if not path.exists():
        return {}
    return {name: value for name, value in dotenv_values(path).items() if value is not None}


def _override_layer(
    defaults: Mapping[str, Any],
    variables: Iterable[Tuple[str, str]],
    prefix: str,
) -> Dict[str, Any]:
    """
    Turn `PREFIX__SECTION__FIELD=value` variables into a nested mapping.

    Every path must name a leaf of the default settings tree.
    """
    layer: Dict[str, Any] = {}
    for name, value in variables:
        if not name.startswith(prefix):
            continue
        path = [part.lower() for part in name[len(prefix) :].split("__") if part]
        if not path:
            raise ValueError(f"Invalid settings override variable: {name}")

        node: Any = defaults
        target = layer
        for depth, part in enumerate(path):
            if not isinstance(node, dict) or part not in node:
                raise KeyError(f"Unknown settings key path: {'.'.join(path)}")
            node = node[part]
            if depth < len(path) - 1:
                target = target.setdefault(part, {})
        if isinstance(node, dict):
            raise TypeError(f"Cannot override a settings section from the environment: {'.'.join(path)}")
        # pydantic coerces the string to the field type on validation
        target[path[-1]] = value
    return layer


class YamlSettingsLoader:
    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self._environ = environ

    def load(self, request: SettingsLoadRequest = SettingsLoadRequest()) -> ToolSettings:
        defaults = ToolSettings().model_dump(mode="python")
        settings = defaults

        if request.yaml_path is not None:
            settings = _merged(settings, _yaml_layer(Path(request.yaml_path)))

        variables: Dict[str, str] = {}
        if request.dotenv_path is not None:
            variables.update(_dotenv_overrides(Path(request.dotenv_path)))
        variables.update(os.environ if self._environ is None else self._environ)

        settings = _merged(settings, _override_layer(defaults, variables.items(), request.env_prefix))
        return ToolSettings.model_validate(settings)
