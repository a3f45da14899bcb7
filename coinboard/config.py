import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from .constants import Defaults, EnvVars

logger = logging.getLogger("config")


class ConfigurationError(Exception):
    """Raised at startup when required settings are missing or invalid."""


class ApiConfig(BaseModel):
    """
    Immutable connection settings for the upstream market data API.

    Built once at process start and handed to every client by reference.
    """

    model_config = ConfigDict(frozen=True)

    base_url: str
    api_key: str
    api_key_header: str = Defaults.API_KEY_HEADER
    timeout: float = Field(default=Defaults.TIMEOUT, gt=0)


def load_config(env_file: Optional[str] = None) -> ApiConfig:
    """
    Read API settings from the environment (and an optional .env file).

    Args:
        env_file: Path to a dotenv file. Defaults to `.env` discovery.

    Returns:
        A frozen `ApiConfig`.

    Raises:
        ConfigurationError: If the base URL or API key is missing, or the
            timeout is not a positive number.
    """

    load_dotenv(env_file)

    base_url = os.getenv(EnvVars.BASE_URL)
    api_key = os.getenv(EnvVars.API_KEY)

    if not base_url:
        logger.error(f"Missing required setting {EnvVars.BASE_URL}")
        raise ConfigurationError("Could not get base url")
    if not api_key:
        logger.error(f"Missing required setting {EnvVars.API_KEY}")
        raise ConfigurationError("Could not get api key")

    raw_timeout = os.getenv(EnvVars.TIMEOUT)
    try:
        timeout = float(raw_timeout) if raw_timeout else Defaults.TIMEOUT
    except ValueError:
        raise ConfigurationError(f"{EnvVars.TIMEOUT} must be a number, got {raw_timeout!r}")
    if timeout <= 0:
        raise ConfigurationError(f"{EnvVars.TIMEOUT} must be greater than 0")

    config = ApiConfig(
        base_url=base_url.rstrip("/"),
        api_key=api_key,
        api_key_header=os.getenv(EnvVars.API_KEY_HEADER) or Defaults.API_KEY_HEADER,
        timeout=timeout,
    )
    logger.info(f"Loaded API config for {config.base_url}")
    return config
