"""Constants and TOML configuration for unity-builder."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

CONFIG_FILE_NAME = ".unity-builder.toml"
DEFAULT_BUILD_NAME = "TestBuild"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Flags whose values are never shown in diagnostic output
SECRET_FLAGS: tuple[str, ...] = (
    "androidKeystorePass",
    "androidKeyaliasName",
    "androidKeyaliasPass",
)
HIDDEN_PLACEHOLDER = "*HIDDEN*"


# =============================================================================
# Configuration File
# =============================================================================


@dataclass
class BuilderConfig:
    """Configuration for unity-builder"""

    default_build_name: str = DEFAULT_BUILD_NAME
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def load(cls, config_path: Path | None = None) -> BuilderConfig:
        """Load configuration from TOML file.

        An explicit path wins over discovery. Unreadable files fall back to defaults.
        """
        config = cls()

        toml_path = config_path if config_path and config_path.exists() else cls._find_config_file()

        if toml_path:
            try:
                with open(toml_path, "rb") as f:
                    data = tomllib.load(f)
                config = cls._from_dict(data)
                logger.debug(f"Loaded config from {toml_path}")
            except (tomllib.TOMLDecodeError, OSError) as e:
                logger.warning(f"Ignoring unreadable config {toml_path}: {e}")

        return config

    @classmethod
    def _find_config_file(cls) -> Path | None:
        """Find config file in current directory or Unity project root"""
        cwd = Path.cwd()

        config_in_cwd = cwd / CONFIG_FILE_NAME
        if config_in_cwd.exists():
            return config_in_cwd

        for parent in [cwd, *list(cwd.parents)]:
            if (parent / "Assets").is_dir() and (parent / "ProjectSettings").is_dir():
                config_in_project = parent / CONFIG_FILE_NAME
                if config_in_project.exists():
                    return config_in_project
                break

        return None

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> BuilderConfig:
        """Create config from dictionary (TOML data)"""
        return cls(
            default_build_name=str(data.get("default_build_name", DEFAULT_BUILD_NAME)),
            log_level=str(data.get("log_level", DEFAULT_LOG_LEVEL)).upper(),
        )

    def to_toml(self) -> str:
        """Generate TOML string from config"""
        return f'''# unity-builder configuration

# Used when -customBuildName is absent or empty
default_build_name = "{self.default_build_name}"

# DEBUG, INFO, WARNING, ERROR
log_level = "{self.log_level}"
'''
