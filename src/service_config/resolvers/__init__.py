"""Configuration sources: the resolver contract and its concrete implementations."""

from service_config.resolvers.interfaces import ConfigResolver
from service_config.resolvers.mapping import ChainResolver, EnvResolver, MapResolver
from service_config.resolvers.yaml_file import YamlResolver

__all__ = ["ChainResolver", "ConfigResolver", "EnvResolver", "MapResolver", "YamlResolver"]
