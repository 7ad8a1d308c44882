from __future__ import annotations

import enum
import math
import re
from typing import Any, Callable, Mapping, Optional, Union

from service_config.errors import ConfigDeclarationError

ConfigValue = Union[str, int, float, bool]

_INT_LITERAL = re.compile(r"[+-]?\d+", re.ASCII)


class ConfigType(enum.Enum):
    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"

    @classmethod
    def of(cls, tag: Any) -> "ConfigType":
        """
        Normalize a declaration type tag.

        Accepts a ConfigType member or one of the builtin types str, int, float and bool.
        """
        if isinstance(tag, ConfigType):
            return tag
        if tag is str:
            return cls.TEXT
        if tag is bool:
            return cls.BOOLEAN
        if tag is int or tag is float:
            return cls.NUMBER
        name = getattr(tag, "__name__", repr(tag))
        raise ConfigDeclarationError(
            f"Config values can only be declared as text, number or boolean, got: {name}"
        )


def parse_text(raw: str) -> Optional[str]:
    return raw


def parse_number(raw: str) -> Optional[Union[int, float]]:
    text = raw.strip()
    if not text or not text.isascii() or "_" in text:
        return None
    if _INT_LITERAL.fullmatch(text):
        return int(text)
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_boolean(raw: str) -> Optional[bool]:
    # Only the exact literal "true" is truthy, everything else is False.
    return raw == "true"


PARSERS: Mapping[ConfigType, Callable[[str], Optional[ConfigValue]]] = {
    ConfigType.TEXT: parse_text,
    ConfigType.NUMBER: parse_number,
    ConfigType.BOOLEAN: parse_boolean,
}


def coerce(raw: str, type_: Any) -> Optional[ConfigValue]:
    """Return the typed value for `raw`, or None when it cannot be parsed."""
    return PARSERS[ConfigType.of(type_)](raw)


def stringify_default(value: Optional[ConfigValue]) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
