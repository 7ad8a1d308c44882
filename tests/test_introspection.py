import unittest

from service_config.binding import ConfigBinder
from service_config.introspection import collect_all, invalid_values, missing_keys
from service_config.mesh import Mesh
from service_config.registry import ConfigDeclarationRegistry
from service_config.resolvers import ConfigResolver, MapResolver

registry = ConfigDeclarationRegistry()
config = ConfigBinder(registry)


class HttpServer:
    PORT = config.number(default=8080)
    HOST = config.text()


class Database:
    URL = config.text()
    POOL_SIZE = config.number(default=5)


class ReadOnlyDatabase(Database):
    REPLICA_URL = config.text()


class NotAService:
    SECRET = config.text()


class IntrospectionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.mesh = Mesh()
        self.mesh.service(HttpServer)
        self.mesh.service(ReadOnlyDatabase)
        self.mesh.constant(NotAService, NotAService())
        self.mesh.constant(ConfigResolver, MapResolver({"HOST": "0.0.0.0"}))

    def test_collect_all_is_sorted_and_skips_constants(self) -> None:
        keys = [d.key for d in collect_all(self.mesh, registry)]
        self.assertEqual(keys, ["HOST", "POOL_SIZE", "PORT", "REPLICA_URL", "URL"])

    def test_collect_all_includes_inherited_declarations(self) -> None:
        owners = {d.key: d.owner for d in collect_all(self.mesh, registry)}
        self.assertIs(owners["URL"], Database)
        self.assertIs(owners["REPLICA_URL"], ReadOnlyDatabase)

    def test_duplicate_keys_keep_encounter_order(self) -> None:
        local_registry = ConfigDeclarationRegistry()
        binder = ConfigBinder(local_registry)

        class First:
            PORT = binder.number(default=1)

        class Second:
            PORT = binder.number(default=2)

        mesh = Mesh().service(First).service(Second)
        decls = collect_all(mesh, local_registry)
        self.assertEqual([d.owner for d in decls], [First, Second])

    def test_empty_mesh(self) -> None:
        self.assertEqual(collect_all(Mesh(), registry), [])

    def test_missing_keys_reports_required_values_only(self) -> None:
        resolver = self.mesh.resolve(ConfigResolver)
        keys = [d.key for d in missing_keys(self.mesh, registry, resolver)]
        self.assertEqual(keys, ["REPLICA_URL", "URL"])

    def test_invalid_values_reports_present_values_that_do_not_coerce(self) -> None:
        resolver = MapResolver({"HOST": "0.0.0.0", "PORT": "eighty", "URL": "db://"})
        keys = [d.key for d in invalid_values(self.mesh, registry, resolver)]
        self.assertEqual(keys, ["PORT"])

    def test_invalid_values_in_strict_mode(self) -> None:
        resolver = MapResolver({"PORT": "eighty", "POOL_SIZE": "5"}, strict=True)
        keys = [d.key for d in invalid_values(self.mesh, registry, resolver)]
        self.assertEqual(keys, ["PORT"])

    def test_invalid_values_skips_missing_required_keys(self) -> None:
        self.assertEqual(invalid_values(self.mesh, registry, MapResolver()), [])


if __name__ == "__main__":
    unittest.main()
