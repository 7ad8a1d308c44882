from __future__ import annotations

import logging

from service_config import ConfigResolver, EnvResolver, Mesh, collect_all, config, default_registry
from service_config.logging import init_logging
from service_config.settings import SettingsLoadRequest, YamlSettingsLoader


class Greeter:
    GREETING = config.text(default="hello")
    REPEAT = config.number(default=1)
    SHOUT = config.boolean(default=False)

    def greet(self, name: str) -> str:
        text = " ".join([f"{self.GREETING} {name}"] * int(self.REPEAT))
        return text.upper() if self.SHOUT else text


def build_mesh() -> Mesh:
    mesh = Mesh(name="example")
    mesh.service(Greeter)
    mesh.constant(ConfigResolver, EnvResolver(dotenv_path=".env"))
    return mesh


def main() -> None:
    settings = YamlSettingsLoader().load(SettingsLoadRequest())
    init_logging(settings.logging)

    logger = logging.getLogger("example")
    mesh = build_mesh()
    for decl in collect_all(mesh, default_registry):
        logger.warning("Config declared key=%s type=%s default=%s", decl.key, decl.type.value, decl.default_value)
    print(mesh.resolve(Greeter).greet("world"))


if __name__ == "__main__":
    main()
