from __future__ import annotations

from typing import List

from service_config.errors import MalformedConfigurationError
from service_config.mesh import Mesh, ServiceBinding
from service_config.registry import ConfigDeclarationRegistry, ConfigFieldDeclaration
from service_config.resolvers.interfaces import ConfigResolver


def collect_all(mesh: Mesh, registry: ConfigDeclarationRegistry) -> List[ConfigFieldDeclaration]:
    """Return config declarations of every service bound to the mesh, sorted by key."""
    result: List[ConfigFieldDeclaration] = []
    for binding in mesh.bindings.values():
        if isinstance(binding, ServiceBinding):
            result.extend(registry.declarations_for(binding.cls))
    return sorted(result, key=lambda decl: decl.key)


def missing_keys(
    mesh: Mesh,
    registry: ConfigDeclarationRegistry,
    resolver: ConfigResolver,
) -> List[ConfigFieldDeclaration]:
    """Required declarations the resolver has no value for."""
    return [
        decl
        for decl in collect_all(mesh, registry)
        if decl.required and not resolver.has_key(decl.key)
    ]


def invalid_values(
    mesh: Mesh,
    registry: ConfigDeclarationRegistry,
    resolver: ConfigResolver,
) -> List[ConfigFieldDeclaration]:
    """
    Declarations whose value, or default when the key is absent, does not coerce to the declared type.

    Reading such a field fails at runtime, whether or not the resolver is strict.
    """
    result: List[ConfigFieldDeclaration] = []
    for decl in collect_all(mesh, registry):
        if decl.required and not resolver.has_key(decl.key):
            continue
        try:
            value = resolver.get_or_none(decl.key, decl.type, decl.default_value)
        except MalformedConfigurationError:
            value = None
        if value is None:
            result.append(decl)
    return result
