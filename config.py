import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from dataverse.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_FILE = 'config.json'
DEFAULT_API_VERSION = '9.2'
DEFAULT_STORAGE_STATE = 'playwright/.auth/user.json'


@dataclass(frozen=True)
class RecordUrls:
    """Model-driven app URLs derived from the environment and app id."""
    application: str

    @property
    def base_form(self) -> str:
        return self.application + '&pagetype=entityrecord&etn='

    @property
    def base_view(self) -> str:
        return self.application + '&pagetype=entitylist&etn='

    def record_form(self, logical_name: str, record_id: str) -> str:
        return f"{self.base_form}{logical_name}&id={record_id}"

    def view(self, logical_name: str) -> str:
        return self.base_view + logical_name


@dataclass(frozen=True)
class PowerPlatformConfig:
    username: str = ''
    password: str = ''
    secret: str = ''
    app_id: str = ''
    base_url: str = ''
    api_version: str = DEFAULT_API_VERSION
    copilot_enabled: bool = False
    storage_state: str = DEFAULT_STORAGE_STATE
    access_token: Optional[str] = None

    @property
    def web_api_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/api/data/v{self.api_version}"

    @property
    def urls(self) -> RecordUrls:
        return RecordUrls(f"{self.base_url.rstrip('/')}/main.aspx?appid={self.app_id}")

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url)


def _parse_flag(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == 'true'
    return bool(value)


def _env_flag(name: str) -> bool:
    return _parse_flag(os.getenv(name, 'false'))


def from_environment() -> PowerPlatformConfig:
    return PowerPlatformConfig(
        username=os.getenv('USERNAME', ''),
        password=os.getenv('PASSWORD', ''),
        secret=os.getenv('SECRET', ''),
        app_id=os.getenv('APP_ID', ''),
        base_url=os.getenv('BASE_URL', ''),
        api_version=os.getenv('API_VERSION', DEFAULT_API_VERSION),
        copilot_enabled=_env_flag('COPILOT_ENABLED'),
        storage_state=os.getenv('STORAGE_STATE', DEFAULT_STORAGE_STATE),
        access_token=os.getenv('ACCESS_TOKEN') or None,
    )


def from_file(path: Path) -> PowerPlatformConfig:
    try:
        data = json.loads(path.read_text(encoding='utf-8'))
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must hold a JSON object")

    # config.json keys are camelCase
    return PowerPlatformConfig(
        username=data.get('username', ''),
        password=data.get('password', ''),
        secret=data.get('secret', ''),
        app_id=data.get('appId', ''),
        base_url=data.get('baseUrl', ''),
        api_version=str(data.get('apiVersion', DEFAULT_API_VERSION)),
        copilot_enabled=_parse_flag(data.get('copilotEnabled', False)),
        storage_state=data.get('storageState', DEFAULT_STORAGE_STATE),
        access_token=data.get('accessToken') or None,
    )


def load_config(path: Optional[Path] = None) -> PowerPlatformConfig:
    """
    Load credentials from config.json if it exists, otherwise from
    environment variables (a .env file in the working directory is read
    first).
    """
    load_dotenv(Path.cwd() / '.env')
    config_path = Path(path) if path else Path.cwd() / CONFIG_FILE

    if config_path.exists():
        logger.info(f"Loading credentials from {config_path.name}")
        return from_file(config_path)

    logger.info("Loading credentials from environment variables")
    return from_environment()
