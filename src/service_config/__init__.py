"""Typed config values for services wired through a Mesh container."""

from service_config.binding import ConfigBinder, ConfigField
from service_config.coercion import ConfigType
from service_config.errors import (
    ConfigDeclarationError,
    ConfigError,
    MalformedConfigurationError,
    MeshError,
    MissingConfigurationError,
    NotConnectedError,
)
from service_config.introspection import collect_all, invalid_values, missing_keys
from service_config.mesh import ConstantBinding, Mesh, ServiceBinding
from service_config.registry import ConfigDeclarationRegistry, ConfigFieldDeclaration
from service_config.resolvers import ChainResolver, ConfigResolver, EnvResolver, MapResolver, YamlResolver

# Application-wide defaults for the common case of a single registry.
default_registry = ConfigDeclarationRegistry()
config = ConfigBinder(default_registry)

__all__ = [
    "ChainResolver",
    "ConfigBinder",
    "ConfigDeclarationError",
    "ConfigDeclarationRegistry",
    "ConfigError",
    "ConfigField",
    "ConfigFieldDeclaration",
    "ConfigResolver",
    "ConfigType",
    "ConstantBinding",
    "EnvResolver",
    "MalformedConfigurationError",
    "MapResolver",
    "Mesh",
    "MeshError",
    "MissingConfigurationError",
    "NotConnectedError",
    "ServiceBinding",
    "YamlResolver",
    "collect_all",
    "config",
    "default_registry",
    "invalid_values",
    "missing_keys",
]
