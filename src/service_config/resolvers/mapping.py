from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional, Tuple, Union

from service_config.resolvers.interfaces import ConfigResolver

logger = logging.getLogger(__name__)

Entries = Union[Mapping[str, Optional[str]], Iterable[Tuple[str, Optional[str]]]]


class MapResolver(ConfigResolver):
    """Resolves keys from a fixed mapping. Entries with a None value are dropped."""

    def __init__(self, entries: Entries = (), *, strict: bool = False) -> None:
        super().__init__(strict=strict)
        items = entries.items() if isinstance(entries, Mapping) else entries
        self._values: Dict[str, str] = {}
        for key, value in items:
            if value is not None:
                self._values[key] = value

    def resolve(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def keys(self) -> Tuple[str, ...]:
        return tuple(self._values)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(keys={len(self._values)})"


def _read_dotenv(dotenv_path: Path) -> Dict[str, Optional[str]]:
    try:
        from dotenv import dotenv_values  # type: ignore[import-not-found]
    except ModuleNotFoundError as e:  # pragma: no cover
        raise ModuleNotFoundError(
            "Missing dependency: python-dotenv is required to read .env files. Install 'python-dotenv'."
        ) from e

    if not dotenv_path.exists():
        logger.debug("config.dotenv_missing path=%s", dotenv_path)
        return {}
    return dict(dotenv_values(dotenv_path))


class EnvResolver(MapResolver):
    """
    Snapshot of the process environment taken at construction.

    When `dotenv_path` names an existing file its values sit underneath the environment:
    a variable set in the environment always wins. The environment itself is never modified.
    """

    def __init__(self, *, dotenv_path: Optional[str] = None, strict: bool = False) -> None:
        values: Dict[str, Optional[str]] = {}
        if dotenv_path is not None:
            values.update(_read_dotenv(Path(dotenv_path)))
        values.update(os.environ)
        super().__init__(values, strict=strict)
        logger.debug("config.env_snapshot keys=%d dotenv=%s", len(self.keys()), dotenv_path)


class ChainResolver(ConfigResolver):
    """Asks each resolver in order and returns the first value found."""

    def __init__(self, *resolvers: ConfigResolver, strict: bool = False) -> None:
        super().__init__(strict=strict)
        self.resolvers = tuple(resolvers)

    def resolve(self, key: str) -> Optional[str]:
        for resolver in self.resolvers:
            value = resolver.resolve(key)
            if value is not None:
                return value
        return None
