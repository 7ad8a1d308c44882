from __future__ import annotations

from typing import Any, Optional

from service_config.coercion import ConfigType, ConfigValue
from service_config.errors import ConfigDeclarationError, NotConnectedError
from service_config.mesh import MESH_REF, Mesh
from service_config.registry import ConfigDeclarationRegistry, ConfigFieldDeclaration
from service_config.resolvers.interfaces import ConfigResolver


class ConfigField:
    """
    Descriptor for one config value on a service class.

    Registers itself with the registry when the owning class is created. Every read on an
    instance goes to the ConfigResolver bound in the instance's Mesh; values are not cached.
    """

    def __init__(
        self,
        registry: ConfigDeclarationRegistry,
        type_: ConfigType,
        default: Optional[ConfigValue],
        key: Optional[str],
    ) -> None:
        self._registry = registry
        self._type = type_
        self._default = default
        self._key = key
        self.declaration: Optional[ConfigFieldDeclaration] = None

    def __set_name__(self, owner: type, name: str) -> None:
        if self.declaration is not None:
            raise ConfigDeclarationError(
                f"Config field {self.declaration.key} is already declared on "
                f"{self.declaration.owner.__name__}, cannot reuse it as {owner.__name__}.{name}"
            )
        self.declaration = self._registry.declare(owner, self._key or name, self._type, self._default)

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        decl = self.declaration
        if decl is None:
            raise NotConnectedError("Config field was not declared on a class")
        mesh = getattr(instance, MESH_REF, None)
        if not isinstance(mesh, Mesh):
            raise NotConnectedError(
                f"Could not read config {decl.key}: {type(instance).__name__} not connected to Mesh"
            )
        resolver = mesh.resolve(ConfigResolver)
        return resolver.get(decl.key, decl.type, decl.default_value)

    def __set__(self, instance: Any, value: Any) -> None:
        key = self.declaration.key if self.declaration else "?"
        raise AttributeError(f"Config value {key} is read-only")


class ConfigBinder:
    """Creates config fields that declare themselves in the given registry."""

    def __init__(self, registry: ConfigDeclarationRegistry) -> None:
        self.registry = registry

    def value(self, type_: Any, *, default: Optional[ConfigValue] = None, key: Optional[str] = None) -> Any:
        # Raises ConfigDeclarationError inside the class body.
        return ConfigField(self.registry, ConfigType.of(type_), default, key)

    def text(self, *, default: Optional[str] = None, key: Optional[str] = None) -> Any:
        return self.value(ConfigType.TEXT, default=default, key=key)

    def number(self, *, default: Optional[ConfigValue] = None, key: Optional[str] = None) -> Any:
        return self.value(ConfigType.NUMBER, default=default, key=key)

    def boolean(self, *, default: Optional[ConfigValue] = None, key: Optional[str] = None) -> Any:
        return self.value(ConfigType.BOOLEAN, default=default, key=key)
