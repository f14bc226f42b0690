import logging
from pathlib import Path

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP

from pirate_weather_cli.config import configure_logging, load_config
from pirate_weather_cli.errors import ConfigurationError, PirateWeatherError
from pirate_weather_cli.models import RequestMode, WeatherQuery
from pirate_weather_cli.orchestrator import open_orchestrator

load_dotenv()

logger = logging.getLogger("pirate_weather")

mcp = FastMCP(
    "Pirate Weather",
    instructions="Current and historical weather for any location via the Pirate Weather API",
)


def _lookup(query: WeatherQuery) -> str:
    logger.info(f"Starting {query.mode.value} weather request for {query.location}")
    try:
        config = load_config()
        with open_orchestrator(config) as orchestrator:
            lines = orchestrator.run(query)
        logger.info("Weather data retrieved successfully")
        return "\n".join(lines)
    except PirateWeatherError as e:
        logger.error(f"Error getting weather for {query.location}: {str(e)}")
        return f"Error: Unable to get weather data for {query.location}. {str(e)}"


# Tools
@mcp.tool()
def get_forecast(location: str, units: str = "si") -> str:
    """
    Get the current weather and forecast summary for a location

    Args:
        location: Address, city name or "latitude,longitude"
        units: Unit system, one of si, us, uk, ca
    """
    return _lookup(WeatherQuery(location=location, units=units, mode=RequestMode.CURRENT))


@mcp.tool()
def get_historical_weather(location: str, date: str, units: str = "si") -> str:
    """
    Get the weather for a location on a past day

    Args:
        location: Address, city name or "latitude,longitude"
        date: Calendar date in YYYY-MM-DD format
        units: Unit system, one of si, us, uk, ca
    """
    return _lookup(WeatherQuery(location=location, units=units, mode=RequestMode.HISTORICAL, time=date))


def main() -> None:
    try:
        config = load_config()
    except ConfigurationError as e:
        raise SystemExit(f"Error: {e}") from e
    configure_logging(config.log_level, config.log_file or Path("logs") / "pirate_weather.log")
    mcp.run()


if __name__ == "__main__":
    main()
