"""
Configuration management using Pydantic Settings.

Architecture Decision: Why pydantic-settings?
- Type-safe configuration with validation
- Supports multiple sources (YAML, env vars, defaults)
- Easy to test with different configurations
"""

import os
from pathlib import Path
from typing import Optional, Tuple, Type

from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

APP_NAME = "TimesheetExporter"


def default_config_dir(app_name: str = APP_NAME) -> Path:
    """Per-user config directory based on OS"""
    if os.name == 'nt':  # Windows
        base = Path(os.getenv('APPDATA'))
    else:  # Linux/Mac
        base = Path.home() / '.config'
    return base / app_name.lower()


def default_data_dir(app_name: str = APP_NAME) -> Path:
    """Per-user data directory based on OS"""
    if os.name == 'nt':  # Windows
        base = Path(os.getenv('APPDATA'))
    else:  # Linux/Mac
        base = Path.home() / '.local' / 'share'
    return base / app_name.lower()


def find_yaml_config(config_dir: Path) -> Path:
    """Workspace ``config/settings.yaml`` if present, else the user's one"""
    config_file = Path("config/settings.yaml")
    if config_file.exists():
        return config_file
    return Path(config_dir) / "settings.yaml"


class Settings(BaseSettings):
    """
    Application settings with multiple sources, highest priority first:
    1. Constructor arguments
    2. Environment variables
    3. .env file
    4. YAML config file
    5. Default values (hardcoded)
    """
    model_config = SettingsConfigDict(
        env_prefix='TIMESHEET_',
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
    )

    # Application paths
    app_name: str = APP_NAME
    config_dir: Optional[Path] = None
    data_dir: Optional[Path] = None
    export_dir: Optional[Path] = None

    # Clockify API
    api_base_url: str = "https://api.clockify.me/api/v1"
    request_timeout: float = 30.0

    # Logging
    log_level: str = "INFO"

    # UI
    theme: str = "auto"
    language: str = "auto"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._init_paths()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        # The YAML file lives in config_dir, so resolve that first
        config_dir = (
            init_settings.init_kwargs.get('config_dir')
            or os.getenv('TIMESHEET_CONFIG_DIR')
            or default_config_dir(init_settings.init_kwargs.get('app_name', APP_NAME))
        )
        yaml_settings = YamlConfigSettingsSource(
            settings_cls,
            yaml_file=find_yaml_config(Path(config_dir)),
            yaml_file_encoding='utf-8',
        )
        return init_settings, env_settings, dotenv_settings, yaml_settings, file_secret_settings

    def _init_paths(self):
        """Fill in OS default paths and create the directories"""
        if self.config_dir is None:
            self.config_dir = default_config_dir(self.app_name)

        if self.data_dir is None:
            self.data_dir = default_data_dir(self.app_name)

        if self.export_dir is None:
            downloads = Path.home() / 'Downloads'
            self.export_dir = downloads if downloads.is_dir() else self.data_dir / 'exports'

        # Create directories if they don't exist
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    @property
    def session_file(self) -> Path:
        return self.config_dir / "session.yaml"


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings():
    """Reload settings from file"""
    global _settings
    _settings = Settings()
    return _settings
