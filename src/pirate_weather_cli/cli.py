"""Command-line interface for the Pirate Weather API."""

import argparse
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv

from pirate_weather_cli import __version__
from pirate_weather_cli.config import Config, configure_logging, load_config
from pirate_weather_cli.errors import ConfigurationError, PirateWeatherError
from pirate_weather_cli.models import RequestMode, WeatherQuery
from pirate_weather_cli.orchestrator import open_orchestrator

logger = logging.getLogger("pirate_weather.cli")

UNIT_HELP = "Units to use (si, us, uk, ca)"
LOCATION_HELP = "Location (address or coordinates)"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pirateweather",
        description="PirateWeather CLI provides a command-line interface to fetch weather data "
        "using the Pirate Weather API. Run without a command for interactive mode.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command")

    forecast_parser = subparsers.add_parser("forecast", help="Get weather forecast for a location")
    forecast_parser.add_argument("--location", "-l", required=True, help=LOCATION_HELP)
    forecast_parser.add_argument("--units", "-u", default="si", help=UNIT_HELP)

    timemachine_parser = subparsers.add_parser("timemachine", help="Get historical weather data for a location")
    timemachine_parser.add_argument("--location", "-l", required=True, help=LOCATION_HELP)
    timemachine_parser.add_argument("--units", "-u", default="si", help=UNIT_HELP)
    timemachine_parser.add_argument(
        "--time", "-t", required=True, help="Time for historical data (format: YYYY-MM-DD)"
    )

    return parser


def _prompt(message: str) -> str:
    try:
        return input(message).strip()
    except EOFError:
        return ""


def prompt_query(mode: RequestMode) -> WeatherQuery:
    """Ask for location, units and, for historical lookups, a date"""
    location = _prompt("Enter location (address, city, or latitude,longitude): ")
    units = _prompt("Enter units (si, us, uk, ca) [default: si]: ") or "si"
    time = None
    if mode is RequestMode.HISTORICAL:
        time = _prompt("Enter date for historical data (YYYY-MM-DD): ")
    return WeatherQuery(location=location, units=units, mode=mode, time=time, fallback_to_today=True)


def run_query(config: Config, query: WeatherQuery) -> None:
    with open_orchestrator(config) as orchestrator:
        for line in orchestrator.run(query):
            print(line)


def run_interactive(config: Config) -> int:
    print("Welcome to the PirateWeather CLI!")
    print("What would you like to do?")
    print("1. Get current forecast")
    print("2. Get historical weather data")

    choice = _prompt("Enter your choice (1 or 2): ")
    modes = {"1": RequestMode.CURRENT, "2": RequestMode.HISTORICAL}
    if choice not in modes:
        print("Invalid choice. Exiting.")
        return 0

    query = prompt_query(modes[choice])
    try:
        run_query(config, query)
    except PirateWeatherError as e:
        logger.error(f"Interactive lookup failed: {type(e).__name__}")
        print(f"Error: {e}")
    return 0


def run_command(config: Config, args: argparse.Namespace) -> int:
    if args.command == "timemachine":
        query = WeatherQuery(location=args.location, units=args.units, mode=RequestMode.HISTORICAL, time=args.time)
    else:
        query = WeatherQuery(location=args.location, units=args.units, mode=RequestMode.CURRENT)

    try:
        run_query(config, query)
    except PirateWeatherError as e:
        logger.error(f"{args.command} failed: {type(e).__name__}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    load_dotenv()
    try:
        config = load_config()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    configure_logging("DEBUG" if args.verbose else config.log_level, config.log_file)

    if args.command is None:
        return run_interactive(config)
    return run_command(config, args)


if __name__ == "__main__":
    sys.exit(main())
