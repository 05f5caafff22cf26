"""
Tests for service configuration.
"""

import pytest

from sprint_planner.config import Config


ENV_VARS = [
    "SPRINT_PLANNER_DATA_DIR",
    "DEFAULT_DAILY_HOUR",
    "INCLUDE_HOLIDAYS",
    "DEFAULT_LOCALE",
    "LOG_LEVEL",
    "CORS_ORIGINS",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def write_config(tmp_path, text: str) -> str:
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return str(path)


class TestConfig:
    """Tests for Config loading."""

    def test_defaults_without_file(self, tmp_path):
        config = Config(str(tmp_path / "missing.yaml"))

        assert config.data_dir == "data"
        assert config.default_daily_hour == "08:00"
        assert config.include_holidays is True
        assert config.locale == "tr"
        assert config.cors_origins == ["*"]

    def test_values_from_yaml(self, tmp_path):
        path = write_config(tmp_path, "planning:\n  include_holidays: false\nreports:\n  locale: en\n")

        config = Config(path)

        assert config.include_holidays is False
        assert config.locale == "en"

    def test_empty_section(self, tmp_path):
        """A section whose keys are all commented out falls back to defaults."""
        path = write_config(tmp_path, "planning:\n#  include_holidays: false\n")

        config = Config(path, overrides={"planning": {"default_daily_hour": "07:30"}})

        assert config.include_holidays is True
        assert config.default_daily_hour == "07:30"

    def test_empty_section_with_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("INCLUDE_HOLIDAYS", "no")
        path = write_config(tmp_path, "planning:\n")

        assert Config(path).include_holidays is False

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SPRINT_PLANNER_DATA_DIR", "/srv/planner")
        monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
        path = write_config(tmp_path, "data:\n  dir: local\n")

        config = Config(path)

        assert config.data_dir == "/srv/planner"
        assert config.cors_origins == ["http://a.test", "http://b.test"]

    def test_log_level_is_upper_case(self, tmp_path):
        config = Config(str(tmp_path / "missing.yaml"), overrides={"logging": {"level": "debug"}})

        assert config.log_level == "DEBUG"
