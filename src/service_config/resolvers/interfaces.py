from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional, Union

from service_config.coercion import ConfigType, ConfigValue, coerce, stringify_default
from service_config.errors import MalformedConfigurationError, MissingConfigurationError

logger = logging.getLogger(__name__)


class ConfigResolver(ABC):
    """
    Provides configuration values. Implementations only supply `resolve`.

    Typed lookups, defaults and the missing-value policy are derived here. Nothing is cached,
    so every call reflects the current state of the backing source.
    """

    def __init__(self, *, strict: bool = False) -> None:
        self.strict = strict

    @abstractmethod
    def resolve(self, key: str) -> Optional[str]:
        """Return the raw string for `key`, or None when the source has no value."""

    def get_or_none(
        self,
        key: str,
        type_: Any,
        default: Optional[ConfigValue] = None,
    ) -> Optional[ConfigValue]:
        config_type = ConfigType.of(type_)
        raw = self.resolve(key)
        if raw is None:
            raw = stringify_default(default)
        if raw is None:
            return None
        value = coerce(raw, config_type)
        if value is None:
            if self.strict:
                raise MalformedConfigurationError(key, config_type.value)
            logger.warning("config.malformed_value key=%s type=%s", key, config_type.value)
        return value

    def get(self, key: str, type_: Any, default: Optional[ConfigValue] = None) -> ConfigValue:
        value = self.get_or_none(key, type_, default)
        if value is None:
            raise MissingConfigurationError(key)
        return value

    def has_key(self, key: str) -> bool:
        return self.resolve(key) is not None

    def get_string(self, key: str, default: Optional[str] = None) -> str:
        return self.get(key, ConfigType.TEXT, default)  # type: ignore[return-value]

    def get_number(self, key: str, default: Optional[Union[str, int, float]] = None) -> Union[int, float]:
        return self.get(key, ConfigType.NUMBER, default)  # type: ignore[return-value]

    def get_boolean(self, key: str, default: Optional[Union[str, bool]] = None) -> bool:
        return self.get(key, ConfigType.BOOLEAN, default)  # type: ignore[return-value]
