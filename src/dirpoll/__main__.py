"""Command-line entry point for the directory monitor."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from .config import AppConfig, ConfigError, MonitorConfig, load_config, parse_poll_interval
from .hooks import HookError, resolve_hooks
from .monitor import DirectoryMonitor

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Report entries added to or deleted from a directory")
    parser.add_argument(
        "directory",
        nargs="?",
        type=Path,
        help="Directory to watch (overrides monitor.path from the configuration file)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a YAML configuration file",
    )
    parser.add_argument(
        "--interval",
        "-n",
        help="Polling interval in seconds (overrides monitor.poll_interval)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> AppConfig:
    """Merge the optional configuration file with command-line overrides."""

    if args.config is not None:
        app_config = load_config(args.config)
    elif args.directory is None:
        raise ConfigError("A directory argument or --config file is required")
    else:
        app_config = AppConfig(monitor=MonitorConfig(path=args.directory))

    if args.directory is not None:
        app_config.monitor.path = args.directory
    if args.interval is not None:
        app_config.monitor.poll_interval = parse_poll_interval(args.interval, field_name="--interval")
    return app_config


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )

    try:
        app_config = build_config(args)
        on_add, on_delete = resolve_hooks(app_config.hooks)
    except (ConfigError, HookError) as exc:
        logger.error("%s", exc)
        return 2

    monitor = DirectoryMonitor(poll_interval=app_config.monitor.poll_interval)
    try:
        monitor.watch(app_config.monitor.path, on_add, on_delete)
    except KeyboardInterrupt:
        logger.info("Monitor interrupted by user")
    except OSError as exc:
        logger.error("Monitoring %s failed: %s", app_config.monitor.path, exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
