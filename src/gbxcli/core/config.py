"""
Configuration Management for gbx-cli

Runtime settings come from environment variables (optionally a .env file).
Account credentials issued at sign-up are kept in ~/.gbx/config.yaml.
"""

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import structlog
import yaml
from dotenv import find_dotenv, load_dotenv

from .errors import (
    ConfigNotFoundError,
    ConfigParseError,
    EmptyCredentialError,
    LocalIOError,
    ValidationError,
)
from .models import Config

logger = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://api.globalblackbox.io"
DEFAULT_TIMEOUT = 30.0
CONFIG_DIR_NAME = ".gbx"
CONFIG_FILE_NAME = "config.yaml"

DIR_MODE = 0o700
FILE_MODE = 0o600


def default_config_dir() -> Path:
    """Get the default per-user configuration directory"""
    try:
        return Path.home() / CONFIG_DIR_NAME
    except RuntimeError as e:
        raise LocalIOError(f"unable to determine home directory: {e}") from e


@dataclass
class APIConfig:
    """Runtime settings for talking to the service"""
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    config_dir: Optional[Path] = None
    log_level: str = "WARNING"
    user_agent: str = "gbx-cli"


def load_settings() -> APIConfig:
    """Load settings from the environment, honouring a local .env file"""
    load_dotenv(find_dotenv(usecwd=True))

    settings = APIConfig()
    if os.getenv("GBX_API_URL"):
        settings.base_url = os.getenv("GBX_API_URL").rstrip("/")

    raw_timeout = os.getenv("GBX_TIMEOUT")
    if raw_timeout:
        try:
            settings.timeout = float(raw_timeout)
        except ValueError as e:
            raise ValidationError("GBX_TIMEOUT must be a number", {"field": "GBX_TIMEOUT", "value": raw_timeout}) from e
        if settings.timeout <= 0:
            raise ValidationError("GBX_TIMEOUT must be positive", {"field": "GBX_TIMEOUT", "value": raw_timeout})

    if os.getenv("GBX_CONFIG_DIR"):
        settings.config_dir = Path(os.getenv("GBX_CONFIG_DIR")).expanduser()

    if os.getenv("GBX_LOG_LEVEL"):
        settings.log_level = os.getenv("GBX_LOG_LEVEL").upper()

    return settings


class ConfigStore:
    """
    Owns the local credential file. The file holds a bearer credential, so
    it is only ever readable by the owning user.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        self._config_dir = Path(config_dir) if config_dir else None

    @property
    def config_dir(self) -> Path:
        return self._config_dir or default_config_dir()

    @property
    def path(self) -> Path:
        return self.config_dir / CONFIG_FILE_NAME

    def exists(self) -> bool:
        return self.path.is_file()

    def save(self, config: Config) -> Path:
        """Write the config, replacing any previous file in one step"""
        config_dir = self.config_dir
        config_file = config_dir / CONFIG_FILE_NAME

        try:
            if not config_dir.exists():
                config_dir.mkdir(mode=DIR_MODE, parents=True)
        except OSError as e:
            raise LocalIOError(f"failed to create config directory: {e}", {"path": str(config_dir)}) from e

        data = yaml.safe_dump(config.to_dict(), default_flow_style=False, sort_keys=True)

        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(prefix=".config-", suffix=".yaml", dir=str(config_dir))
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(data)
            os.chmod(tmp_path, FILE_MODE)
            os.replace(tmp_path, config_file)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise LocalIOError(f"failed to write config file: {e}", {"path": str(config_file)}) from e

        logger.info("Configuration saved", path=str(config_file))
        return config_file

    def load(self) -> Config:
        """Read the stored config"""
        config_file = self.path
        if not config_file.exists():
            raise ConfigNotFoundError(f"config file not found at {config_file}", {"path": str(config_file)})

        try:
            with open(config_file, "r", encoding="utf-8") as f:
                raw = f.read()
        except OSError as e:
            raise LocalIOError(f"failed to read config file: {e}", {"path": str(config_file)}) from e

        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ConfigParseError(f"failed to parse config file: {e}", {"path": str(config_file)}) from e

        config = Config.from_dict(data)
        logger.debug("Configuration loaded", path=str(config_file))
        return config

    def get_api_key(self) -> str:
        """Return the stored API key"""
        config = self.load()
        if not config.api_key.strip():
            raise EmptyCredentialError("API key not found in config file", {"path": str(self.path)})
        return config.api_key
