"""Unit tests for configuration loading and validation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pnpmap.config import MapSettings, ResolutionSettings, Settings, SnapshotSettings


class TestDefaults:
    def test_duplicate_locations_rejected_by_default(self) -> None:
        assert Settings().map.reject_duplicate_locations is True

    def test_snapshot_defaults(self) -> None:
        settings = SnapshotSettings()
        assert settings.format == "json"
        assert settings.path == ".pnp.json"

    def test_resolution_defaults(self) -> None:
        settings = ResolutionSettings()
        assert settings.builtin_modules == []
        assert settings.project_root is None


class TestEnvironmentOverrides:
    def test_nested_env_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PNPMAP__SNAPSHOT__FORMAT", "sqlite")
        monkeypatch.setenv("PNPMAP__SNAPSHOT__PATH", "/tmp/pnp.db")
        monkeypatch.setenv("PNPMAP__MAP__REJECT_DUPLICATE_LOCATIONS", "false")
        settings = Settings()
        assert settings.snapshot.format == "sqlite"
        assert settings.snapshot.path == "/tmp/pnp.db"
        assert settings.map.reject_duplicate_locations is False

    def test_constructor_args_beat_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PNPMAP__LOGGING__LEVEL", "DEBUG")
        settings = Settings(logging={"level": "ERROR"})
        assert settings.logging.level == "ERROR"


class TestConfigValidation:
    def test_unknown_snapshot_format_raises(self) -> None:
        with pytest.raises(ValidationError):
            SnapshotSettings(format="xml")  # type: ignore[arg-type]

    def test_wrong_type_raises(self) -> None:
        with pytest.raises(ValidationError):
            MapSettings(reject_duplicate_locations="sometimes")  # type: ignore[arg-type]

    def test_unknown_top_level_field_raises(self) -> None:
        with pytest.raises(ValidationError):
            Settings(completely_unknown_field="oops")  # type: ignore[call-arg]

    def test_unknown_nested_field_raises(self) -> None:
        """A typo like 'pth' instead of 'path' is caught instead of silently ignored."""
        with pytest.raises(ValidationError):
            SnapshotSettings(pth="/intended/.pnp.json")  # type: ignore[call-arg]
