from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from service_config.coercion import ConfigType, ConfigValue, stringify_default
from service_config.errors import ConfigDeclarationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ConfigFieldDeclaration:
    key: str
    type: ConfigType
    default_value: Optional[str]
    owner: type

    @property
    def required(self) -> bool:
        return self.default_value is None


class ConfigDeclarationRegistry:
    """
    Declared config fields, keyed by the class that declared them.

    Lookups walk the class MRO, so a subclass sees every field declared on its ancestors.
    One registry is created by the application and handed to the binder and to introspection.
    """

    def __init__(self) -> None:
        self._by_owner: Dict[type, List[ConfigFieldDeclaration]] = {}

    def declare(
        self,
        owner: type,
        key: str,
        type_: Any,
        default: Optional[ConfigValue] = None,
    ) -> ConfigFieldDeclaration:
        if not isinstance(owner, type):
            raise ConfigDeclarationError(f"Config owner must be a class, got: {type(owner).__name__}")
        if not isinstance(key, str) or not key:
            raise ConfigDeclarationError(f"Config key must be a non-empty string. owner={owner.__name__}")
        decl = ConfigFieldDeclaration(
            key=key,
            type=ConfigType.of(type_),
            default_value=stringify_default(default),
            owner=owner,
        )
        self._by_owner.setdefault(owner, []).append(decl)
        logger.debug(
            "config.declared owner=%s key=%s type=%s has_default=%s",
            owner.__qualname__,
            key,
            decl.type.value,
            decl.default_value is not None,
        )
        return decl

    def owned_by(self, cls: type) -> Sequence[ConfigFieldDeclaration]:
        return tuple(self._by_owner.get(cls, ()))

    def declarations_for(self, class_or_instance: Any) -> List[ConfigFieldDeclaration]:
        """Return declarations of the class and all its ancestors, most derived class first."""
        cls = class_or_instance if isinstance(class_or_instance, type) else type(class_or_instance)
        result: List[ConfigFieldDeclaration] = []
        for klass in cls.__mro__:
            result.extend(self._by_owner.get(klass, ()))
        return result

    def __len__(self) -> int:
        return sum(len(decls) for decls in self._by_owner.values())
