#!/usr/bin/env python3
"""
Backtest Viewer Launcher

This script launches the backtest viewer, optionally preloaded with a saved
backend payload or the built-in sample data.
"""

import sys
import json
import argparse
import logging
from pathlib import Path

from backtest_viewer.config import ViewerConfig, setup_logging


def parse_arguments(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description="Launch the Backtest Viewer"
    )

    parser.add_argument(
        '--debug', '-d',
        action='store_true',
        help='Enable debug logging'
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        '--payload', '-p',
        type=Path,
        help='Load a saved backend JSON payload on startup'
    )
    source.add_argument(
        '--sample',
        action='store_true',
        help='Load the built-in sample payload on startup'
    )

    parser.add_argument(
        '--maximize', '-m',
        action='store_true',
        help='Start with maximized window'
    )

    return parser.parse_args(argv)


def load_initial_payload(args):
    """Raw payload dict for --payload / --sample, or None"""
    if args.sample:
        from backtest_viewer.data.sample_data import sample_payload
        return sample_payload()
    if args.payload:
        with open(args.payload, encoding='utf-8') as f:
            return json.load(f)
    return None


def main():
    """Main launcher function"""
    args = parse_arguments()
    config = ViewerConfig()

    log_file = setup_logging(debug=args.debug, log_dir=config.log_dir, level=config.log_level)
    logger = logging.getLogger(__name__)

    logger.info("=" * 50)
    logger.info("Backtest Viewer Starting")
    logger.info("=" * 50)
    logger.info(f"Python Version: {sys.version}")
    logger.info(f"Backtest Endpoint: {config.backtest_endpoint}")
    logger.info(f"Log File: {log_file}")
    logger.info(f"Arguments: {vars(args)}")
    logger.info("=" * 50)

    try:
        from PyQt6.QtWidgets import QApplication
        from PyQt6.QtCore import QT_VERSION_STR
        from backtest_viewer.data.payload import parse_backtest_response
        from backtest_viewer.dashboard import BacktestViewerWindow

        logger.info(f"PyQt6 Version: {QT_VERSION_STR}")

        app = QApplication(sys.argv)
        app.setApplicationName("Backtest Viewer")

        window = BacktestViewerWindow(config)

        raw = load_initial_payload(args)
        if raw is not None:
            window.load_result(parse_backtest_response(raw))

        if args.maximize:
            window.showMaximized()
        else:
            window.show()

        logger.info("Viewer launched successfully")

        exit_code = app.exec()

        logger.info(f"Application exited with code: {exit_code}")
        sys.exit(exit_code)

    except Exception as e:
        logger.error(f"Failed to start viewer: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
