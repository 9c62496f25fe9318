"""Tests for YAML settings loading."""

from __future__ import annotations

from pathlib import Path

from pantrychef.config.settings import CONFIG_ENV_VAR, Settings, default_config_path


class TestSettingsLoad:
    """Tests for Settings.load and Settings.save."""

    def test_missing_file_gives_defaults(self, tmp_path):
        settings = Settings.load(tmp_path / "missing.yaml")
        assert settings.logging.level == "WARNING"
        assert settings.pantry.expiring_within_days == 7
        assert settings.generation.seed is None
        assert settings.defaults.output_format == "table"
        assert settings.database.path.name == "pantrychef.db"

    def test_reads_sections(self, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text(
            "database:\n"
            f"  path: {tmp_path / 'chef.db'}\n"
            "logging:\n"
            "  level: debug\n"
            "pantry:\n"
            "  expiring_within_days: 3\n"
            "generation:\n"
            "  seed: 99\n"
        )

        settings = Settings.load(config)

        assert settings.database.path == tmp_path / "chef.db"
        assert settings.logging.level == "DEBUG"
        assert settings.pantry.expiring_within_days == 3
        assert settings.generation.seed == 99
        assert settings.defaults.output_format == "table"

    def test_empty_file(self, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("")
        assert Settings.load(config) == Settings()

    def test_save_then_load(self, tmp_path):
        config = tmp_path / "nested" / "config.yaml"
        settings = Settings()
        settings.database.path = tmp_path / "chef.db"
        settings.generation.seed = 5
        settings.defaults.output_format = "json"

        settings.save(config)

        assert Settings.load(config) == settings


class TestConfigPath:
    """Tests for default_config_path."""

    def test_env_var_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "custom.yaml"))
        assert default_config_path() == tmp_path / "custom.yaml"

    def test_default_location(self, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        assert default_config_path() == Path.home() / ".pantrychef" / "config.yaml"
