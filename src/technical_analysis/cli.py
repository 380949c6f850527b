"""Command-line interface for running one indicator over a CSV history."""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from typing import TextIO

from technical_analysis.config import OUTPUT_FORMATS, Settings
from technical_analysis.data.bars import bars_to_frame
from technical_analysis.data.csv_data import CsvBarLoader
from technical_analysis.domain.models import ResultRecord
from technical_analysis.errors import TechnicalAnalysisError
from technical_analysis.indicators.registry import (
    available_indicator_symbols,
    describe,
    get_indicator,
)
from technical_analysis.logging_utils import setup_logger


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser."""
    parser = argparse.ArgumentParser(description="Compute technical indicators from CSV bars")
    parser.add_argument("--symbol", type=str, help="Symbol whose CSV file to load")
    parser.add_argument("--indicator", type=str, help="Indicator symbol, e.g. bb or ichimoku")
    parser.add_argument("--data-dir", type=str, help="CSV historical data directory")
    parser.add_argument(
        "--option",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Indicator option; repeat for several options",
    )
    parser.add_argument("--format", choices=list(OUTPUT_FORMATS), help="Output format")
    parser.add_argument("--log-level", type=str, help="Logging level")
    parser.add_argument("--log-file", type=str, help="Also append log lines to this file")
    parser.add_argument(
        "--list",
        action="store_true",
        help="Describe every available indicator, then exit",
    )
    return parser


def parse_option_value(text: str) -> object:
    """Parse an option value as int, then float, then plain string."""
    value = text.strip()
    for parser in (int, float):
        try:
            return parser(value)
        except ValueError:
            continue
    return value


def parse_options(pairs: Sequence[str]) -> dict[str, object]:
    """Parse repeated KEY=VALUE arguments."""
    options: dict[str, object] = {}
    for pair in pairs:
        key, separator, value = pair.partition("=")
        if not separator or not key.strip():
            raise ValueError(f"Option '{pair}' must look like KEY=VALUE")
        options[key.strip()] = parse_option_value(value)
    return options


def apply_cli_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Apply CLI values onto environment-derived settings."""
    overrides: dict[str, object] = {}
    if args.indicator:
        overrides["indicator"] = args.indicator.strip().lower()
    if args.data_dir:
        overrides["data_dir"] = args.data_dir
    if args.format:
        overrides["output_format"] = args.format
    if args.log_level:
        overrides["log_level"] = args.log_level.strip().upper()
    if args.log_file:
        overrides["log_file"] = args.log_file
    return settings.with_overrides(**overrides)


def _json_default(value: object) -> str:
    isoformat = getattr(value, "isoformat", None)
    if callable(isoformat):
        return isoformat()
    return str(value)


def write_records(records: Sequence[ResultRecord], output_format: str, stream: TextIO) -> None:
    if output_format == "json":
        payload = [record.to_record() for record in records]
        stream.write(json.dumps(payload, default=_json_default, indent=2))
        stream.write("\n")
        return
    bars_to_frame(records).to_csv(stream)


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = apply_cli_overrides(Settings.from_env(), args)
        options = parse_options(args.option)
    except (TechnicalAnalysisError, ValueError) as exc:
        print(f"Configuration error: {exc}")
        return 2

    logger = setup_logger(settings.log_level, settings.log_file)
    if args.list:
        descriptions = [describe(symbol) for symbol in available_indicator_symbols()]
        sys.stdout.write(json.dumps(descriptions, indent=2))
        sys.stdout.write("\n")
        return 0
    if not args.symbol:
        print("Configuration error: --symbol is required")
        return 2

    try:
        indicator = get_indicator(settings.indicator)
        bars = CsvBarLoader(settings.data_dir).load(args.symbol)
        records = indicator.calculate(bars, **options)
    except TechnicalAnalysisError as exc:
        logger.error("%s | %s", args.symbol, exc)
        print(f"Error: {exc}")
        return 2

    logger.info(
        "%s | %s | %s bars -> %s records",
        args.symbol,
        indicator.indicator_symbol,
        len(bars),
        len(records),
    )
    write_records(records, settings.output_format, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
