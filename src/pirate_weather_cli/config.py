import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pirate_weather_cli.errors import ConfigurationError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PIRATE_WEATHER_", env_file=".env", extra="ignore")

    api_key: str
    forecast_url: str = "https://api.pirateweather.net/forecast"
    timemachine_url: str = "https://timemachine.pirateweather.net/forecast"
    geocoding_url: str = "https://nominatim.openstreetmap.org"
    user_agent: str = "PirateWeather_CLI/0.1"
    timeout: float = 10.0
    log_level: str = "WARNING"
    log_file: Optional[Path] = None

    @field_validator("api_key")
    @classmethod
    def _require_api_key(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


def load_config(**overrides) -> Config:
    """Build the process configuration, failing fast when the API key is absent"""
    try:
        return Config(**overrides)
    except ValidationError as e:
        if any(err["loc"] == ("api_key",) for err in e.errors()):
            raise ConfigurationError("PIRATE_WEATHER_API_KEY environment variable is not set") from e
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def configure_logging(level: str = "WARNING", log_file: Optional[Path] = None) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
