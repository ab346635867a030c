"""
Tests for settings loading (defaults, YAML file, environment).
"""

import pytest
from pydantic import ValidationError
from timesheet_exporter.infra.config import Settings


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    """Run from an empty directory so no workspace config/.env is picked up"""
    monkeypatch.chdir(tmp_path)
    for name in ("TIMESHEET_LOG_LEVEL", "TIMESHEET_THEME", "TIMESHEET_API_BASE_URL",
                 "TIMESHEET_REQUEST_TIMEOUT", "TIMESHEET_CONFIG_DIR"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


def make_settings(base):
    return Settings(config_dir=base / "config-home", data_dir=base / "data", export_dir=base / "out")


def test_defaults(isolated):
    settings = make_settings(isolated)
    assert settings.api_base_url == "https://api.clockify.me/api/v1"
    assert settings.log_level == "INFO"
    assert settings.session_file == isolated / "config-home" / "session.yaml"
    assert settings.config_dir.is_dir()


def test_yaml_file_overrides_defaults(isolated):
    config_home = isolated / "config-home"
    config_home.mkdir()
    (config_home / "settings.yaml").write_text(
        "log_level: DEBUG\ntheme: dark\nexport_dir: /tmp/timesheets\nunknown_key: 1\n",
        encoding="utf-8",
    )

    settings = Settings(config_dir=config_home, data_dir=isolated / "data")

    assert settings.log_level == "DEBUG"
    assert settings.theme == "dark"
    assert str(settings.export_dir) == "/tmp/timesheets"


def test_environment_wins_over_yaml(isolated, monkeypatch):
    config_home = isolated / "config-home"
    config_home.mkdir()
    (config_home / "settings.yaml").write_text("log_level: DEBUG\n", encoding="utf-8")
    monkeypatch.setenv("TIMESHEET_LOG_LEVEL", "WARNING")

    settings = make_settings(isolated)

    assert settings.log_level == "WARNING"


def write_yaml(base, text):
    config_home = base / "config-home"
    config_home.mkdir(exist_ok=True)
    (config_home / "settings.yaml").write_text(text, encoding="utf-8")


def test_dotenv_wins_over_yaml(isolated):
    write_yaml(isolated, "log_level: DEBUG\ntheme: dark\n")
    (isolated / ".env").write_text("TIMESHEET_LOG_LEVEL=WARNING\n", encoding="utf-8")

    settings = make_settings(isolated)

    assert settings.log_level == "WARNING"
    assert settings.theme == "dark"


def test_constructor_arguments_win_over_yaml(isolated):
    write_yaml(isolated, "log_level: DEBUG\n")

    settings = Settings(config_dir=isolated / "config-home", data_dir=isolated / "data",
                        export_dir=isolated / "out", log_level="ERROR")

    assert settings.log_level == "ERROR"


def test_yaml_values_are_coerced(isolated):
    write_yaml(isolated, 'request_timeout: "5"\n')

    settings = make_settings(isolated)

    assert settings.request_timeout == 5.0
    assert isinstance(settings.request_timeout, float)


def test_invalid_yaml_value_is_rejected(isolated):
    write_yaml(isolated, "request_timeout: soon\n")

    with pytest.raises(ValidationError):
        make_settings(isolated)


def test_workspace_config_file_takes_precedence(isolated):
    write_yaml(isolated, "theme: dark\n")
    (isolated / "config").mkdir()
    (isolated / "config" / "settings.yaml").write_text("theme: light\n", encoding="utf-8")

    settings = make_settings(isolated)

    assert settings.theme == "light"
