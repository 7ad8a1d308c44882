from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Dict, Literal, Mapping, Optional, Type, TypeVar, Union

from service_config.errors import MeshError

logger = logging.getLogger(__name__)

MESH_REF = "__mesh_ref__"

BindingKind = Literal["service", "constant"]
T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class ServiceBinding:
    key: Any
    cls: type
    kind: BindingKind = "service"


@dataclass(frozen=True, slots=True)
class ConstantBinding:
    key: Any
    value: Any
    kind: BindingKind = "constant"


Binding = Union[ServiceBinding, ConstantBinding]


class Mesh:
    """
    A minimal composition container.

    Services are classes constructed without arguments on first lookup and then reused.
    Every instance the mesh constructs carries a reference back to it, which is how config
    fields find the resolver bound in this mesh.
    """

    def __init__(self, name: str = "default", parent: Optional["Mesh"] = None) -> None:
        self.name = name
        self.parent = parent
        self._bindings: Dict[Any, Binding] = {}
        self._instances: Dict[Any, Any] = {}

    @property
    def bindings(self) -> Mapping[Any, Binding]:
        return dict(self._bindings)

    def service(self, cls: type, key: Any = None) -> "Mesh":
        if not isinstance(cls, type):
            raise MeshError(f"Service must be a class, got: {type(cls).__name__}")
        binding_key = cls if key is None else key
        self._bindings[binding_key] = ServiceBinding(key=binding_key, cls=cls)
        self._instances.pop(binding_key, None)
        return self

    def constant(self, key: Any, value: Any) -> "Mesh":
        self._bindings[key] = ConstantBinding(key=key, value=value)
        self._instances.pop(key, None)
        return self

    def resolve(self, key: Type[T]) -> T:
        binding = self._bindings.get(key)
        if binding is None:
            if self.parent is not None:
                return self.parent.resolve(key)
            raise MeshError(f"{_key_name(key)} not found in Mesh {self.name}")
        if isinstance(binding, ConstantBinding):
            return binding.value
        if key not in self._instances:
            self._instances[key] = self._construct(binding)
        return self._instances[key]

    def connect(self, instance: T) -> T:
        """Attach an externally created instance to this mesh."""
        setattr(instance, MESH_REF, self)
        return instance

    def _construct(self, binding: ServiceBinding) -> Any:
        try:
            inspect.signature(binding.cls).bind()
        except TypeError as e:
            raise MeshError(f"Could not construct {binding.cls.__name__} in Mesh {self.name}: {e}") from e
        except ValueError:
            # no introspectable signature, let the call itself decide
            pass
        instance = binding.cls()
        logger.debug("mesh.service_constructed mesh=%s service=%s", self.name, binding.cls.__qualname__)
        return self.connect(instance)

    def __repr__(self) -> str:
        return f"Mesh(name={self.name!r}, bindings={len(self._bindings)})"


def _key_name(key: Any) -> str:
    return getattr(key, "__name__", repr(key))
