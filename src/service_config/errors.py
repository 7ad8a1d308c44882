from __future__ import annotations


class ConfigError(Exception):
    """Base class for configuration errors raised by this package."""


class ConfigDeclarationError(ConfigError):
    """A config field was declared with an unsupported type or an invalid key."""


class NotConnectedError(ConfigError):
    """A config field was read on an instance that no Mesh constructed."""


class MissingConfigurationError(ConfigError):
    def __init__(self, key: str) -> None:
        super().__init__(f"Configuration {key} is missing")
        self.key = key


class MalformedConfigurationError(ConfigError):
    """Raised by strict resolvers when a present value cannot be coerced."""

    def __init__(self, key: str, type_name: str) -> None:
        super().__init__(f"Configuration {key} is not a valid {type_name}")
        self.key = key
        self.type_name = type_name


class MeshError(Exception):
    """Container wiring errors (unknown keys, unconstructible services)."""
