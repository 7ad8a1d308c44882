from __future__ import annotations

import argparse
import importlib
import json
import logging
import sys
from typing import Any, List, Optional, Sequence

from service_config.introspection import collect_all, invalid_values, missing_keys
from service_config.logging import init_logging
from service_config.mesh import Mesh
from service_config.registry import ConfigDeclarationRegistry, ConfigFieldDeclaration
from service_config.resolvers import ChainResolver, ConfigResolver, EnvResolver, YamlResolver
from service_config.settings import SettingsLoadRequest, ToolSettings, YamlSettingsLoader
from service_config.settings.interfaces import SettingsLoader

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="service-config", description="Inspect config values declared by services")
    parser.add_argument(
        "--settings",
        default=None,
        help="Path to a YAML settings file for this tool (default: none)",
    )
    parser.add_argument(
        "--registry",
        default="service_config:default_registry",
        help="module:attribute of the declaration registry (default: service_config:default_registry)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to run")

    # Command: describe
    describe_parser = subparsers.add_parser("describe", help="List every config value declared by the Mesh services")
    describe_parser.add_argument("target", help="module:attribute naming a Mesh or a function returning one")
    describe_parser.add_argument("--format", choices=["text", "json"], default=None, help="Output format")

    # Command: check
    check_parser = subparsers.add_parser("check", help="Fail if a required config value is not set")
    check_parser.add_argument("target", help="module:attribute naming a Mesh or a function returning one")
    check_parser.add_argument("--dotenv", default=None, help="Path to a .env file read underneath the environment")
    check_parser.add_argument("--yaml", default=None, help="Path to a flat YAML file read underneath the environment")

    return parser


def _load_object(spec: str) -> Any:
    module_name, sep, attr = spec.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Expected module:attribute, got: {spec}")
    obj: Any = importlib.import_module(module_name)
    for part in attr.split("."):
        obj = getattr(obj, part)
    return obj


def _load_mesh(spec: str) -> Mesh:
    obj = _load_object(spec)
    if not isinstance(obj, Mesh) and callable(obj):
        obj = obj()
    if not isinstance(obj, Mesh):
        raise TypeError(f"{spec} is not a Mesh, got: {type(obj).__name__}")
    return obj


def _load_registry(spec: str) -> ConfigDeclarationRegistry:
    obj = _load_object(spec)
    if not isinstance(obj, ConfigDeclarationRegistry):
        raise TypeError(f"{spec} is not a ConfigDeclarationRegistry, got: {type(obj).__name__}")
    return obj


def _declaration_to_dict(decl: ConfigFieldDeclaration) -> dict[str, Any]:
    return {
        "key": decl.key,
        "type": decl.type.value,
        "default": decl.default_value,
        "required": decl.required,
        "owner": f"{decl.owner.__module__}.{decl.owner.__qualname__}",
    }


def _format_text(decls: Sequence[ConfigFieldDeclaration]) -> str:
    lines: List[str] = []
    for decl in decls:
        default = "(required)" if decl.default_value is None else f"default={decl.default_value}"
        lines.append(f"{decl.key}\t{decl.type.value}\t{default}\t{decl.owner.__qualname__}")
    return "\n".join(lines)


def _build_check_resolver(settings: ToolSettings, args: argparse.Namespace) -> ConfigResolver:
    dotenv_path = args.dotenv or settings.check.dotenv_path
    yaml_path = args.yaml or settings.check.yaml_path
    env = EnvResolver(dotenv_path=dotenv_path, strict=settings.check.strict)
    if yaml_path is None:
        return env
    return ChainResolver(env, YamlResolver(yaml_path), strict=settings.check.strict)


def _describe(args: argparse.Namespace, settings: ToolSettings) -> int:
    registry = _load_registry(args.registry)
    decls = collect_all(_load_mesh(args.target), registry)
    output_format = args.format or settings.check.output_format
    if output_format == "json":
        print(json.dumps([_declaration_to_dict(d) for d in decls], indent=2))
    else:
        print(_format_text(decls))
    return 0


def _check(args: argparse.Namespace, settings: ToolSettings) -> int:
    registry = _load_registry(args.registry)
    mesh = _load_mesh(args.target)
    resolver = _build_check_resolver(settings, args)
    missing = missing_keys(mesh, registry, resolver)
    for decl in missing:
        print(f"missing: {decl.key} ({decl.type.value}) declared by {decl.owner.__qualname__}", file=sys.stderr)

    invalid = invalid_values(mesh, registry, resolver)
    for decl in invalid:
        print(
            f"invalid: Configuration {decl.key} is not a valid {decl.type.value} "
            f"declared by {decl.owner.__qualname__}",
            file=sys.stderr,
        )

    logger.info("check.completed target=%s missing=%d invalid=%d", args.target, len(missing), len(invalid))
    return 1 if missing or invalid else 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    loader: SettingsLoader = YamlSettingsLoader()
    settings = loader.load(SettingsLoadRequest(yaml_path=args.settings))
    init_logging(settings.logging)

    if args.command == "describe":
        return _describe(args, settings)
    if args.command == "check":
        return _check(args, settings)
    parser.error(f"Unknown command: {args.command}")
    return 2


if __name__ == "__main__":
    sys.exit(main())
