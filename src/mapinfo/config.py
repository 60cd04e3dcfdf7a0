"""
mapinfo Configuration

Loads configuration from a YAML file or environment variables.
Describes where the asset extractor wrote its output and how the
exported project is laid out.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)


# Default configuration file locations (checked in order)
CONFIG_SEARCH_PATHS = [
    Path.home() / ".mapinfo" / "config.yaml",
    Path("mapinfo.yaml"),
]


DEFAULT_CONFIG = {
    # Root the extractor exported into
    "extract_dir": "Extract",

    # Bundle export folders are recognized by this substring
    "bundle_marker": ".bundle",

    # Relative to extract_dir
    "build_settings_path": "globalgamemanagers/ExportedProject/ProjectSettings/EditorBuildSettings.asset",

    # Relative to each bundle folder
    "preset_cache_dir": "ExportedProject/Assets/MonoBehaviour",
    "presets_dir": "ExportedProject/Assets/Content/Locations/_Presets",

    # File naming
    "asset_extension": ".asset",
    "identity_suffix": ".meta",
}


class MapInfoConfig:
    """Configuration for a mapinfo run."""

    def __init__(self, config_path: Optional[Path] = None):
        self._config: Dict[str, Any] = dict(DEFAULT_CONFIG)
        self._config_path: Optional[Path] = None

        # Load from file if found
        self._load_config(config_path)

        # Override with environment variables
        self._apply_env_overrides()

    def _load_config(self, explicit_path: Optional[Path] = None) -> None:
        """Load configuration from YAML file."""
        search_paths = [Path(explicit_path)] if explicit_path else CONFIG_SEARCH_PATHS

        for config_path in search_paths:
            if config_path and config_path.exists():
                try:
                    with open(config_path, 'r', encoding='utf-8') as f:
                        user_config = yaml.safe_load(f) or {}
                    if not isinstance(user_config, dict):
                        raise ValueError("top level must be a mapping")
                    self._config.update(user_config)
                    self._config_path = config_path
                    return
                except (OSError, yaml.YAMLError, ValueError) as e:
                    logger.warning(f"Failed to load config from {config_path}: {e}")

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides."""
        env_mappings = {
            "MAPINFO_EXTRACT_DIR": "extract_dir",
            "MAPINFO_BUNDLE_MARKER": "bundle_marker",
        }

        for env_var, config_key in env_mappings.items():
            if env_var in os.environ:
                self._config[config_key] = os.environ[env_var]

    def set(self, key: str, value: Any) -> None:
        """Override a single setting (used for command line arguments)."""
        if key not in DEFAULT_CONFIG:
            raise KeyError(f"Unknown config key: {key}")
        self._config[key] = value

    @property
    def config_path(self) -> Optional[Path]:
        """Path to loaded config file, or None if using defaults."""
        return self._config_path

    @property
    def extract_dir(self) -> Path:
        """Root folder of the extracted game data."""
        return Path(self._config["extract_dir"])

    @property
    def bundle_marker(self) -> str:
        return self._config["bundle_marker"]

    @property
    def build_settings_path(self) -> Path:
        """Absolute path of the EditorBuildSettings manifest."""
        return self.extract_dir / self._config["build_settings_path"]

    def preset_cache_dir(self, bundle_dir: Path) -> Path:
        """Folder holding every preset MonoBehaviour of a bundle."""
        return Path(bundle_dir) / self._config["preset_cache_dir"]

    def presets_dir(self, bundle_dir: Path) -> Path:
        """Folder holding the top-level location presets of a bundle."""
        return Path(bundle_dir) / self._config["presets_dir"]

    @property
    def asset_extension(self) -> str:
        return self._config["asset_extension"]

    @property
    def identity_suffix(self) -> str:
        return self._config["identity_suffix"]

    def to_dict(self) -> Dict[str, Any]:
        """Export current configuration as dict."""
        return {
            "extract_dir": str(self.extract_dir),
            "bundle_marker": self.bundle_marker,
            "build_settings_path": self._config["build_settings_path"],
            "preset_cache_dir": self._config["preset_cache_dir"],
            "presets_dir": self._config["presets_dir"],
            "asset_extension": self.asset_extension,
            "identity_suffix": self.identity_suffix,
            "config_file": str(self._config_path) if self._config_path else None,
        }


CONFIG_HEADER = """# mapinfo Configuration
#
# Paths describing the asset extractor's output. extract_dir and
# bundle_marker can also be set with MAPINFO_EXTRACT_DIR and
# MAPINFO_BUNDLE_MARKER.

"""


def write_default_config(path: Optional[Path] = None) -> Path:
    """
    Write a default configuration file.

    Returns the path where config was written.
    """
    path = Path(path) if path is not None else CONFIG_SEARCH_PATHS[0]
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w', encoding='utf-8') as f:
        f.write(CONFIG_HEADER)
        yaml.safe_dump(DEFAULT_CONFIG, f, sort_keys=False, default_flow_style=False)

    return path
