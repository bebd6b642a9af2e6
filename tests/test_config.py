"""Tests for settings loading."""

import logging
import os
from pathlib import Path

import pytest

from fluentflow.progression import DEFAULT_PROGRESS_DB
from fluentflow.utils import Settings, configure_logging, load_settings


@pytest.fixture(autouse=True)
def isolated_environ(monkeypatch):
    """Work on a private copy of the environment without FLUENTFLOW_ variables."""
    environ = {k: v for k, v in os.environ.items() if not k.startswith("FLUENTFLOW_")}
    monkeypatch.setattr(os, "environ", environ)
    return environ


class TestLoadSettings:
    """Test environment-driven settings."""

    def test_defaults(self, tmp_path):
        settings = load_settings(tmp_path / "missing.env")
        assert settings.progress_db == DEFAULT_PROGRESS_DB
        assert settings.learner_id == "default"
        assert settings.development_mode is False
        assert settings.log_level == "INFO"

    def test_from_environment(self, tmp_path, isolated_environ):
        isolated_environ.update({
            "FLUENTFLOW_PROGRESS_DB": str(tmp_path / "p.db"),
            "FLUENTFLOW_LEARNER_ID": "kim",
            "FLUENTFLOW_DEVELOPMENT_MODE": "Yes",
            "FLUENTFLOW_LOG_LEVEL": "debug",
        })
        settings = load_settings(tmp_path / "missing.env")
        assert settings.progress_db == tmp_path / "p.db"
        assert settings.learner_id == "kim"
        assert settings.development_mode is True
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize("value", ["0", "false", "no", "off", "maybe"])
    def test_development_mode_falsy(self, tmp_path, isolated_environ, value):
        isolated_environ["FLUENTFLOW_DEVELOPMENT_MODE"] = value
        assert load_settings(tmp_path / "missing.env").development_mode is False

    def test_blank_values_ignored(self, tmp_path, isolated_environ):
        isolated_environ["FLUENTFLOW_LEARNER_ID"] = "   "
        assert load_settings(tmp_path / "missing.env").learner_id == "default"

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("FLUENTFLOW_LEARNER_ID=from_file\nFLUENTFLOW_DEVELOPMENT_MODE=1\n", encoding="utf-8")
        settings = load_settings(env_file)
        assert settings.learner_id == "from_file"
        assert settings.development_mode is True

    def test_environment_wins_over_env_file(self, tmp_path, isolated_environ):
        env_file = tmp_path / ".env"
        env_file.write_text("FLUENTFLOW_LEARNER_ID=from_file\n", encoding="utf-8")
        isolated_environ["FLUENTFLOW_LEARNER_ID"] = "from_env"
        assert load_settings(env_file).learner_id == "from_env"

    def test_unknown_log_level(self, tmp_path, isolated_environ):
        isolated_environ["FLUENTFLOW_LOG_LEVEL"] = "chatty"
        with pytest.raises(ValueError):
            load_settings(tmp_path / "missing.env")


class TestSettings:
    """Test the Settings model directly."""

    def test_path_coercion(self):
        settings = Settings(progress_db="data/progress.db")
        assert settings.progress_db == Path("data/progress.db")

    def test_configure_logging(self, monkeypatch):
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))
        configure_logging("debug")
        assert calls["level"] == "DEBUG"
        assert "%(levelname)s" in calls["format"]
