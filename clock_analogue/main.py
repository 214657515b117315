#!/usr/bin/env python3
# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""
clock-analogue - Main Application.
Loads configuration and shows the clock in a pygame window or over the web.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Initialize logging early
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)
logger = logging.getLogger(__name__)


def setup_file_logging(log_dir: str) -> None:
    """Set up file logging in addition to console."""
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(log_path / 'clock-analogue.log')
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    ))
    logging.getLogger().addHandler(file_handler)


def parse_overrides(pairs: Optional[List[str]]) -> dict:
    """Parse KEY=VALUE command-line overrides."""
    overrides = {}
    for pair in pairs or []:
        key, sep, value = pair.partition('=')
        if not sep or not key.strip():
            logger.warning(f"Ignoring malformed override '{pair}' (expected KEY=VALUE)")
            continue
        overrides[key.strip()] = value
    return overrides


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='clock-analogue',
        description='Analogue clock widget'
    )
    parser.add_argument('-c', '--config', help='Path to config file')
    parser.add_argument('--web', action='store_true', help='Serve the clock over HTTP')
    parser.add_argument('--windowed', action='store_true', help='Force windowed mode')
    parser.add_argument('--fullscreen', action='store_true', help='Force fullscreen mode')
    parser.add_argument(
        '-s', '--set', action='append', metavar='KEY=VALUE', dest='overrides',
        help='Clock attribute override, e.g. --set hourMarkers=roman (repeatable)'
    )
    parser.add_argument(
        '--save-config', metavar='PATH',
        help='Write the effective configuration (with overrides) to PATH and exit'
    )
    parser.add_argument('--log-dir', help='Directory for log files')
    parser.add_argument('-d', '--debug', action='store_true', help='Enable debug logging')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)
    if args.log_dir:
        setup_file_logging(args.log_dir)

    from .config import load_config, save_config, validate_config

    config = load_config(args.config)
    config.clock.update(parse_overrides(args.overrides))

    for error in validate_config(config):
        logger.warning(f"Config: {error}")

    if args.windowed:
        config.display.windowed = True
    elif args.fullscreen:
        config.display.windowed = False

    if args.save_config:
        save_config(config, args.save_config)
        return 0

    try:
        if args.web or config.web.enabled:
            from .web.app import run_web_server
            run_web_server(config)
        else:
            from .hosts.pygame_host import run_window
            run_window(
                config.clock,
                width=config.display.width,
                height=config.display.height,
                windowed=config.display.windowed,
                background_color=config.display.background_color,
            )
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")

    return 0


if __name__ == "__main__":
    sys.exit(main())
