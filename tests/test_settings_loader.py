import tempfile
import unittest
from pathlib import Path

from pydantic import ValidationError

from service_config.settings import SettingsLoadRequest, ToolSettings, YamlSettingsLoader


class YamlSettingsLoaderTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.no_dotenv = str(self.tmp / "missing.env")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_defaults_without_files_or_overrides(self) -> None:
        settings = YamlSettingsLoader(environ={}).load(SettingsLoadRequest(dotenv_path=self.no_dotenv))
        self.assertEqual(settings, ToolSettings())
        self.assertEqual(settings.logging.level, "WARNING")
        self.assertFalse(settings.check.strict)

    def test_yaml_is_merged_over_defaults(self) -> None:
        path = self.tmp / "settings.yaml"
        path.write_text("logging:\n  level: DEBUG\ncheck:\n  strict: true\n", encoding="utf-8")
        settings = YamlSettingsLoader(environ={}).load(
            SettingsLoadRequest(yaml_path=str(path), dotenv_path=self.no_dotenv)
        )
        self.assertEqual(settings.logging.level, "DEBUG")
        self.assertEqual(settings.logging.file.rotation.backup_count, 5)
        self.assertTrue(settings.check.strict)

    def test_environment_overrides_yaml(self) -> None:
        path = self.tmp / "settings.yaml"
        path.write_text("logging:\n  level: DEBUG\n", encoding="utf-8")
        environ = {
            "SERVICE_CONFIG__LOGGING__LEVEL": "ERROR",
            "SERVICE_CONFIG__LOGGING__FILE__ROTATION__BACKUP_COUNT": "9",
            "SERVICE_CONFIG__CHECK__STRICT": "true",
            "UNRELATED": "ignored",
        }
        settings = YamlSettingsLoader(environ=environ).load(
            SettingsLoadRequest(yaml_path=str(path), dotenv_path=self.no_dotenv)
        )
        self.assertEqual(settings.logging.level, "ERROR")
        self.assertEqual(settings.logging.file.rotation.backup_count, 9)
        self.assertTrue(settings.check.strict)

    def test_dotenv_overrides_sit_under_environment(self) -> None:
        dotenv_path = self.tmp / ".env"
        dotenv_path.write_text(
            "SERVICE_CONFIG__LOGGING__LEVEL=INFO\nSERVICE_CONFIG__CHECK__OUTPUT_FORMAT=json\n",
            encoding="utf-8",
        )
        environ = {"SERVICE_CONFIG__LOGGING__LEVEL": "ERROR"}
        settings = YamlSettingsLoader(environ=environ).load(SettingsLoadRequest(dotenv_path=str(dotenv_path)))
        self.assertEqual(settings.logging.level, "ERROR")
        self.assertEqual(settings.check.output_format, "json")

    def test_unknown_override_path_raises(self) -> None:
        loader = YamlSettingsLoader(environ={"SERVICE_CONFIG__NOPE__LEVEL": "x"})
        with self.assertRaises(KeyError):
            loader.load(SettingsLoadRequest(dotenv_path=self.no_dotenv))

    def test_section_override_raises(self) -> None:
        loader = YamlSettingsLoader(environ={"SERVICE_CONFIG__LOGGING": "x"})
        with self.assertRaises(TypeError):
            loader.load(SettingsLoadRequest(dotenv_path=self.no_dotenv))

    def test_unknown_yaml_field_fails_validation(self) -> None:
        path = self.tmp / "settings.yaml"
        path.write_text("check:\n  colour: red\n", encoding="utf-8")
        with self.assertRaises(ValidationError):
            YamlSettingsLoader(environ={}).load(SettingsLoadRequest(yaml_path=str(path), dotenv_path=self.no_dotenv))

    def test_missing_yaml_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            YamlSettingsLoader(environ={}).load(
                SettingsLoadRequest(yaml_path=str(self.tmp / "nope.yaml"), dotenv_path=self.no_dotenv)
            )


if __name__ == "__main__":
    unittest.main()
