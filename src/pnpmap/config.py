"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Constructor arguments
  2. Environment variables  (PNPMAP__SNAPSHOT__FORMAT=sqlite)
  3. pnpmap.yaml            (searched in cwd, then the user config dir)
  4. Hardcoded defaults

The config file is optional; all fields have sensible defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, ConfigDict
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

_DEFAULT_CONFIG_DIR = platformdirs.user_config_dir("pnpmap")


def _find_config_file() -> str | None:
    """Return the path of the first pnpmap.yaml found, or None."""
    candidates = [
        Path("pnpmap.yaml"),
        Path(_DEFAULT_CONFIG_DIR) / "pnpmap.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class MapSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # Two packages installed at the same location abort the build
    reject_duplicate_locations: bool = True


class SnapshotSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    format: Literal["json", "sqlite"] = "json"
    path: str = ".pnp.json"


class ResolutionSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # Requests for these names are left to the host loader
    builtin_modules: list[str] = []
    # Top-level project directory; unclaimed files below it belong to the project
    project_root: str | None = None


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: PNPMAP__LOGGING__LEVEL=DEBUG
        env_prefix="PNPMAP__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    map: MapSettings = MapSettings()
    snapshot: SnapshotSettings = SnapshotSettings()
    resolution: ResolutionSettings = ResolutionSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
