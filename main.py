#!/usr/bin/env python3
"""
Options Strategy Calculator - Main Entry Point

Loads a quote table and strike selections from configuration, prices the
configured option strategies and prints cost/credit, max risk, max profit
and breakevens for each.
"""

import sys
import argparse
from pathlib import Path
from dotenv import load_dotenv

from options_calculator import __version__
from options_calculator.config.config_manager import ConfigManager
from options_calculator.editor.quote_editor import QuoteEditor
from options_calculator.logging.calc_logger import CalcLogger
from options_calculator.market_data.finmind_client import FinMindClient, MarketDataError
from options_calculator.render.result_renderer import render_summary
from options_calculator.strategy.strategy_calculator import STRATEGY_NAMES, StrategyCalculator

# Load environment variables from .env file
load_dotenv()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Options Strategy Calculator for multi-leg option strategies'
    )
    parser.add_argument(
        '--config',
        type=str,
        default='config/config.json',
        help='Path to configuration file (default: config/config.json)'
    )
    parser.add_argument(
        '--strategy',
        type=str,
        default='all',
        choices=['all'] + STRATEGY_NAMES,
        help='Strategy to calculate (default: all configured strategies)'
    )
    parser.add_argument(
        '--fetch-market-data',
        action='store_true',
        help='Fetch the configured FinMind dataset and report the record count'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'Options Strategy Calculator v{__version__}'
    )
    return parser


def fetch_market_data(config, logger: CalcLogger) -> int:
    """Fetch raw market data and report how many records were returned."""
    if not config.finmind_credentials:
        print("Error: No 'finmind' section in configuration")
        return 1

    client = FinMindClient.from_credentials(config.finmind_credentials, logger=logger)
    try:
        records = client.fetch_dataset()
    except MarketDataError as e:
        print(f"ERROR: Market data fetch failed: {str(e)}")
        return 1

    print(f"Fetched {len(records)} records from dataset {config.finmind_credentials.dataset}")
    return 0


def main(argv=None) -> int:
    """Main entry point for the calculator."""
    args = build_parser().parse_args(argv)

    # Verify config file exists
    config_path = Path(args.config)
    if not config_path.exists():
        print(f"Error: Configuration file not found at {args.config}")
        print("Please create a configuration file or use --config to specify a different path")
        return 1

    try:
        config = ConfigManager().load_config(str(config_path))
    except ValueError as e:
        print(f"ERROR: {str(e)}")
        return 1

    logger = CalcLogger(config.logging_config)
    logger.log_info("Options calculator starting", {"config": str(config_path)})

    if args.fetch_market_data:
        return fetch_market_data(config, logger)

    if args.strategy != 'all':
        names = [args.strategy]
    else:
        names = config.strategies or STRATEGY_NAMES

    quotes = QuoteEditor(config.quotes).to_quote_table()
    calculator = StrategyCalculator(logger=logger)
    summary = calculator.calculate_all(config.strategy_inputs, quotes, names)

    print(render_summary(summary))

    if summary.successful == 0:
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
