"""
Config Manager

Loads the watch face configuration from YAML (with include support) and
builds the typed config models.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from models.config import APIConfig, GlitchConfig, LoggingConfig, WatchFaceConfig
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CONFIG)

SRC_DIR = Path(__file__).resolve().parent.parent


class ConfigManager:
    """
    Main configuration manager with include system support

    Loads config.yaml and processes the include: directive to merge modular
    YAML files. Falls back to factory_defaults.yaml when the main config is
    missing, unreadable or invalid, and to the model defaults if that fails too.

    Example:
        config = ConfigManager()
        config.load()

        config.glitch.frames_per_cell      # 3
        config.watch_face.cooldown_ms      # 5000
        config.api.port                    # 8000
    """

    def __init__(
        self,
        config_path: Union[str, Path] = "config/config.yaml",
        defaults_path: Union[str, Path] = "config/factory_defaults.yaml",
    ):
        """
        Initialize ConfigManager

        Args:
            config_path: Path to main config.yaml (relative paths resolve against src/)
            defaults_path: Path to factory defaults fallback
        """
        self.config_path = SRC_DIR / Path(config_path)
        self.factory_defaults_path = SRC_DIR / Path(defaults_path)
        self.data: Dict[str, Any] = {}
        self.using_defaults = False

        self.glitch = GlitchConfig()
        self.watch_face = WatchFaceConfig()
        self.api = APIConfig()
        self.logging = LoggingConfig()

    def load(self) -> Dict[str, Any]:
        """
        Load YAML configuration

        Process:
        1. Load main config.yaml
        2. If it has 'include:' list, load and merge those files
        3. Build typed config sections
        4. On any failure, repeat with factory defaults

        Returns:
            Merged config data dict
        """
        try:
            self.data = self._read(self.config_path)
            self._build_sections(self.data)
            self.using_defaults = False
            log.info("Configuration loaded", path=str(self.config_path))

        except Exception as ex:
            log.error("Failed to load config", path=str(self.config_path), exception=ex)
            log.warn("Falling back to factory defaults")
            self.using_defaults = True

            try:
                self.data = self._read(self.factory_defaults_path)
                self._build_sections(self.data)
            except Exception as defaults_ex:
                log.error("Failed to load factory defaults", path=str(self.factory_defaults_path),
                          exception=defaults_ex)
                log.warn("Using built-in defaults")
                self.data = {}
                self._build_sections(self.data)

        return self.data

    def _read(self, path: Path) -> Dict[str, Any]:
        with open(path, "r", encoding="utf-8") as f:
            main_config = yaml.safe_load(f) or {}

        if not isinstance(main_config, dict):
            raise ValueError(f"{path.name} must contain a mapping at top level")

        if 'include' in main_config:
            log.debug("Using include-based configuration", file=path.name)
            merged = self._load_with_includes(main_config.pop('include'), path.parent)
            merged.update(main_config)
            return merged

        return main_config

    def _load_with_includes(self, include_list: List[str], config_dir: Path) -> Dict[str, Any]:
        """
        Load and merge multiple YAML files from include list

        Args:
            include_list: List of filenames to load (e.g., ["glitch.yaml", "api.yaml"])
            config_dir: Directory containing config files

        Returns:
            Merged config dict (later files override earlier ones)
        """
        merged: Dict[str, Any] = {}

        for filename in include_list:
            filepath = config_dir / filename
            try:
                with open(filepath, 'r', encoding='utf-8') as f:
                    file_data = yaml.safe_load(f)
                    if file_data:
                        merged.update(file_data)
                        log.debug(f"Loaded {filename}", keys=str(list(file_data.keys())))
            except FileNotFoundError:
                log.error(f"File not found: {filename}")
                raise

        return merged

    def _build_sections(self, data: Dict[str, Any]) -> None:
        glitch = GlitchConfig.from_dict(data.get("glitch"))
        watch_face = WatchFaceConfig.from_dict(data.get("watch_face"))
        api = APIConfig.from_dict(data.get("api"))
        logging_cfg = LoggingConfig.from_dict(data.get("logging"))

        # Assign only after every section validated
        self.glitch = glitch
        self.watch_face = watch_face
        self.api = api
        self.logging = logging_cfg

    def get_section(self, name: str, default: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Raw section dict as loaded from YAML"""
        return self.data.get(name, default or {})
