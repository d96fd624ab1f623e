"""
Tests for ConfigManager and the config models.

Uses tmp_path for every YAML file so the shipped src/config files are only
read by the tests that check them explicitly.
"""

from pathlib import Path

import pytest

import config

from managers.config_manager import ConfigManager
from models.config import APIConfig, GlitchConfig, LoggingConfig, WatchFaceConfig
from models.enums import LogLevel

FACTORY_DEFAULTS = """
glitch:
  frames_per_cell: 3
  alphabet: "1234567890:"
  tick_delay_ms: 33
  start_delay_ms: 1000
watch_face:
  cooldown_ms: 5000
api:
  port: 8000
logging:
  level: INFO
"""


@pytest.fixture
def config_dir(tmp_path):
    (tmp_path / "factory_defaults.yaml").write_text(FACTORY_DEFAULTS, encoding="utf-8")
    return tmp_path


def make_manager(config_dir, main_yaml=None):
    config_path = config_dir / "config.yaml"
    if main_yaml is not None:
        config_path.write_text(main_yaml, encoding="utf-8")
    return ConfigManager(config_path=config_path, defaults_path=config_dir / "factory_defaults.yaml")


class TestConfigManagerLoading:
    """Main file, includes and sections."""

    def test_load_sections(self, config_dir):
        manager = make_manager(config_dir, """
glitch:
  frames_per_cell: 4
  alphabet: "#*"
  tick_delay_ms: 20
watch_face:
  cooldown_ms: 3000
  trigger_second: 4
api:
  enabled: false
  port: 9001
logging:
  level: debug
  use_colors: false
""")
        manager.load()

        assert manager.using_defaults is False
        assert manager.glitch == GlitchConfig(frames_per_cell=4, alphabet="#*", tick_delay_ms=20)
        assert manager.watch_face.cooldown_ms == 3000
        assert manager.watch_face.trigger_second == 4
        assert manager.api == APIConfig(enabled=False, port=9001)
        assert manager.logging == LoggingConfig(level=LogLevel.DEBUG, use_colors=False)

    def test_missing_sections_use_model_defaults(self, config_dir):
        manager = make_manager(config_dir, "glitch:\n  frames_per_cell: 2\n")
        manager.load()

        assert manager.glitch.frames_per_cell == 2
        assert manager.watch_face == WatchFaceConfig()
        assert manager.api == APIConfig()

    def test_includes_are_merged_and_main_file_wins(self, config_dir):
        (config_dir / "glitch.yaml").write_text("glitch:\n  frames_per_cell: 5\n", encoding="utf-8")
        (config_dir / "api.yaml").write_text("api:\n  port: 7000\n", encoding="utf-8")
        manager = make_manager(config_dir, """
include:
  - glitch.yaml
  - api.yaml
api:
  port: 7001
""")
        data = manager.load()

        assert manager.glitch.frames_per_cell == 5
        assert manager.api.port == 7001
        assert "include" not in data

    def test_unknown_keys_are_ignored(self, config_dir):
        manager = make_manager(config_dir, "glitch:\n  frames_per_cell: 2\n  colour: green\n")
        manager.load()

        assert manager.using_defaults is False
        assert manager.glitch.frames_per_cell == 2

    def test_get_section_returns_raw_dict(self, config_dir):
        manager = make_manager(config_dir, "api:\n  port: 8123\n")
        manager.load()

        assert manager.get_section("api") == {"port": 8123}
        assert manager.get_section("missing") == {}
        assert manager.get_section("missing", {"a": 1}) == {"a": 1}

    def test_shipped_config_loads(self):
        manager = ConfigManager()
        manager.load()

        assert manager.using_defaults is False
        assert manager.glitch == GlitchConfig()
        assert manager.watch_face == WatchFaceConfig()


class TestConfigManagerFallback:
    """Failures fall back to factory defaults."""

    def test_missing_config_file(self, config_dir):
        manager = make_manager(config_dir)
        manager.load()

        assert manager.using_defaults is True
        assert manager.glitch == GlitchConfig()

    def test_invalid_value(self, config_dir):
        manager = make_manager(config_dir, "glitch:\n  frames_per_cell: 0\n")
        manager.load()

        assert manager.using_defaults is True
        assert manager.glitch.frames_per_cell == 3

    def test_missing_include(self, config_dir):
        manager = make_manager(config_dir, "include:\n  - nope.yaml\n")
        manager.load()

        assert manager.using_defaults is True

    def test_non_mapping_document(self, config_dir):
        manager = make_manager(config_dir, "- just\n- a list\n")
        manager.load()

        assert manager.using_defaults is True

    def test_malformed_yaml(self, config_dir):
        manager = make_manager(config_dir, "glitch: [unclosed\n")
        manager.load()

        assert manager.using_defaults is True

    def test_one_bad_section_discards_all(self, config_dir):
        manager = make_manager(config_dir, "api:\n  port: 9999\nlogging:\n  level: LOUD\n")
        manager.load()

        assert manager.using_defaults is True
        assert manager.api.port == 8000

    def test_missing_factory_defaults_uses_model_defaults(self, tmp_path):
        manager = ConfigManager(
            config_path=tmp_path / "config.yaml",
            defaults_path=tmp_path / "factory_defaults.yaml",
        )

        assert manager.load() == {}

        assert manager.using_defaults is True
        assert manager.glitch == GlitchConfig()
        assert manager.watch_face == WatchFaceConfig()
        assert manager.api == APIConfig()
        assert manager.logging == LoggingConfig()

    def test_invalid_factory_defaults_uses_model_defaults(self, tmp_path):
        (tmp_path / "factory_defaults.yaml").write_text("glitch:\n  tick_delay_ms: 0\n", encoding="utf-8")
        manager = ConfigManager(
            config_path=tmp_path / "config.yaml",
            defaults_path=tmp_path / "factory_defaults.yaml",
        )

        manager.load()

        assert manager.using_defaults is True
        assert manager.glitch == GlitchConfig()


class TestShippedConfigFiles:
    """YAML files live inside the config package so they install with it."""

    def test_files_sit_next_to_the_package(self):
        config_dir = Path(config.__file__).parent
        for name in ("config.yaml", "factory_defaults.yaml", "glitch.yaml", "watch_face.yaml"):
            assert (config_dir / name).is_file(), name

    def test_default_paths_point_into_the_package(self):
        manager = ConfigManager()

        assert manager.config_path.parent == Path(config.__file__).resolve().parent
        assert manager.factory_defaults_path.parent == manager.config_path.parent

    def test_yaml_is_declared_as_package_data(self):
        pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
        text = pyproject.read_text(encoding="utf-8")

        assert '"config*"' in text
        assert 'config = ["*.yaml"]' in text


class TestConfigModels:
    """Validation in the dataclasses themselves."""

    @pytest.mark.parametrize("kwargs", [
        {"frames_per_cell": 0},
        {"alphabet": ""},
        {"tick_delay_ms": 0},
        {"start_delay_ms": -1},
    ])
    def test_glitch_config_rejects(self, kwargs):
        with pytest.raises(ValueError):
            GlitchConfig(**kwargs)

    @pytest.mark.parametrize("kwargs", [
        {"interactive_update_ms": 0},
        {"cooldown_ms": -1},
        {"trigger_second_modulo": 0},
        {"trigger_second": 10},
        {"trigger_second_modulo": 5, "trigger_second": 7},
    ])
    def test_watch_face_config_rejects(self, kwargs):
        with pytest.raises(ValueError):
            WatchFaceConfig(**kwargs)

    @pytest.mark.parametrize("port", [0, 65536])
    def test_api_config_rejects_port(self, port):
        with pytest.raises(ValueError):
            APIConfig(port=port)

    def test_numeric_alphabet_from_yaml_is_stringified(self):
        assert GlitchConfig.from_dict({"alphabet": 1234}).alphabet == "1234"

    def test_section_must_be_mapping(self):
        with pytest.raises(ValueError):
            WatchFaceConfig.from_dict(["cooldown_ms", 1])

    @pytest.mark.parametrize("raw, level", [
        ("warn", LogLevel.WARN),
        ("ERROR", LogLevel.ERROR),
        (LogLevel.DEBUG, LogLevel.DEBUG),
    ])
    def test_log_level_parsing(self, raw, level):
        assert LoggingConfig.from_dict({"level": raw}).level == level

    def test_unknown_log_level(self):
        with pytest.raises(ValueError):
            LoggingConfig.from_dict({"level": "verbose"})
