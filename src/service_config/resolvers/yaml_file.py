from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from service_config.coercion import stringify_default
from service_config.resolvers.mapping import MapResolver


def _read_flat_yaml(path: Path) -> Dict[str, Optional[str]]:
    try:
        import yaml  # type: ignore[import-not-found]
    except ModuleNotFoundError as e:  # pragma: no cover
        raise ModuleNotFoundError(
            "Missing dependency: PyYAML is required to read YAML config files. Install 'PyYAML'."
        ) from e

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Top-level YAML must be a mapping, got: {type(data).__name__}")

    values: Dict[str, Optional[str]] = {}
    for key, value in data.items():
        values[str(key)] = _scalar_to_raw(str(key), value)
    return values


def _scalar_to_raw(key: str, value: Any) -> Optional[str]:
    if isinstance(value, (dict, list)):
        raise ValueError(f"Config value must be a scalar. key={key} got={type(value).__name__}")
    return stringify_default(value)


class YamlResolver(MapResolver):
    """Resolves keys from a flat YAML mapping read once at construction."""

    def __init__(self, path: str, *, strict: bool = False) -> None:
        self.path = Path(path)
        super().__init__(_read_flat_yaml(self.path), strict=strict)
