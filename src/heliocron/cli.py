"""Command line interface for heliocron."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import timedelta

from heliocron.config import CONFIG_ENV_VAR, DEFAULT_DATE_FORMAT, Config, build_config
from heliocron.errors import ConfigError, HeliocronError
from heliocron.runtime import (
    WaitRunner,
    WallClockSleeper,
    install_signal_cancellation,
    restore_signal_handlers,
)
from heliocron.solar import build_report
from heliocron.utils.config import parse_tolerance_seconds

EXIT_RUNTIME_ERROR = 1
EXIT_CONFIG_ERROR = 2


def _configure_logging(verbose: bool) -> None:
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _tolerance_seconds(value: str) -> timedelta:
    try:
        return parse_tolerance_seconds(float(value), field_name="--tolerance")
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="heliocron",
        description="Wait until a solar event occurs, or report the day's solar events",
    )
    parser.add_argument("--date", help="Date to use (default: today)")
    parser.add_argument(
        "--date-format",
        default=DEFAULT_DATE_FORMAT,
        help=f"strftime format of --date (default: {DEFAULT_DATE_FORMAT.replace('%', '%%')})",
    )
    parser.add_argument(
        "--time-zone",
        help="UTC offset such as +01:00, or a zone name such as Europe/London (default: system)",
    )
    parser.add_argument("--latitude", help="Latitude, e.g. 51.4769N or -33.86")
    parser.add_argument("--longitude", help="Longitude, e.g. 0.0005W or 151.21")
    parser.add_argument(
        "--config",
        help=f"Path to TOML config (default: ${CONFIG_ENV_VAR} or ~/.config/heliocron.toml)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log progress to stderr")

    commands = parser.add_subparsers(dest="command", required=True)

    report = commands.add_parser("report", help="Show all solar events for the day")
    report.add_argument("--json", action="store_true", help="Print the report as JSON")

    wait = commands.add_parser("wait", help="Sleep until the chosen event occurs")
    wait.add_argument("--event", "-e", required=True, help="Event name, e.g. sunrise or civil_dusk")
    wait.add_argument("--offset", "-o", help="Shift the event by [-]HH:MM[:SS]")
    wait.add_argument("--altitude", "-a", help="Sun altitude in degrees for custom_am/custom_pm")
    wait.add_argument(
        "--tolerance",
        type=_tolerance_seconds,
        help="Seconds the wake may drift from the event before it counts as missed",
    )
    wait.add_argument(
        "--run-missed-task",
        action="store_const",
        const=True,
        default=None,
        help="Exit successfully even if the event was missed",
    )
    wait.add_argument("--json", action="store_true", help="Print the wait outcome as JSON")
    return parser


def _load_config(args: argparse.Namespace) -> Config:
    wait_args = {}
    if args.command == "wait":
        wait_args = {
            "event": args.event,
            "offset": args.offset,
            "altitude": args.altitude,
            "tolerance": args.tolerance,
            "run_missed_task": args.run_missed_task,
            "require_event": True,
        }
    return build_config(
        date=args.date,
        date_format=args.date_format,
        time_zone=args.time_zone,
        latitude=args.latitude,
        longitude=args.longitude,
        config_path=args.config,
        **wait_args,
    )


def _run_report(config: Config, as_json: bool) -> None:
    report = build_report(config)
    print(report.to_json() if as_json else report.to_text())


def _run_wait(config: Config, as_json: bool) -> None:
    sleeper = WallClockSleeper()
    previous = install_signal_cancellation(sleeper)
    try:
        outcome = WaitRunner(backend=sleeper).run(config)
    finally:
        restore_signal_handlers(previous)
    if as_json:
        print(json.dumps(outcome.to_dict(), indent=2, ensure_ascii=False))


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    try:
        config = _load_config(args)
        if args.command == "report":
            _run_report(config, args.json)
        else:
            _run_wait(config, args.json)
    except HeliocronError as exc:
        print(exc.render(), file=sys.stderr)
        code = EXIT_CONFIG_ERROR if isinstance(exc, ConfigError) else EXIT_RUNTIME_ERROR
        raise SystemExit(code) from exc


if __name__ == "__main__":
    main()
