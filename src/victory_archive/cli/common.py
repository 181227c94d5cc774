"""Shared CLI utilities and argument parsers."""

import argparse
import logging

from ..__logger__ import create_logger
from ..config import Config, ConfigError, find_config_file, load_config

logger = logging.getLogger(__name__)


def create_global_parser() -> argparse.ArgumentParser:
    """Create a parser with global options that can be used as a parent."""
    parser = argparse.ArgumentParser(add_help=False)
    add_verbosity_args(parser)
    return parser


def add_verbosity_args(parser: argparse.ArgumentParser) -> None:
    """Add verbosity-related arguments to a parser."""
    group = parser.add_argument_group("Output options")
    group.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    group.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-essential output",
    )
    group.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output",
    )
    group.add_argument(
        "--log-file",
        metavar="FILE",
        help="Also write log records to FILE",
    )


def get_log_level(args: argparse.Namespace) -> str:
    """Determine log level from parsed arguments.

    Args:
        args: Parsed command line arguments

    Returns:
        Log level string (DEBUG, INFO, WARNING, ERROR)
    """
    if getattr(args, "debug", False):
        return "DEBUG"
    elif getattr(args, "quiet", False):
        return "WARNING"
    elif getattr(args, "verbose", False):
        return "DEBUG"
    else:
        return "INFO"


def setup_logging(args: argparse.Namespace, config: Config | None = None) -> None:
    """Configure the process logger from parsed arguments.

    Command line flags win over the [global] settings of ``config``.
    """
    level = get_log_level(args)
    log_file = getattr(args, "log_file", None)
    if config is not None:
        settings = config.global_config
        if level == "INFO" and settings.verbose:
            level = "DEBUG"
        elif level == "INFO" and settings.quiet:
            level = "WARNING"
        log_file = log_file or settings.log_file
    create_logger(level=level, log_file=log_file)


def load_cli_config(args: argparse.Namespace) -> Config:
    """Load the configuration named by ``--config`` or found on the search path.

    Falls back to defaults when no file exists.

    Raises:
        ConfigError: The configuration file is invalid.
    """
    config_path = find_config_file(getattr(args, "config", None))
    if config_path is None:
        return Config()

    logger.info("Loading configuration from: %s", config_path)
    config, warnings = load_config(config_path)
    for warning in warnings:
        logger.warning("Config: %s", warning)
    return config


def prepare_command(args: argparse.Namespace) -> Config | None:
    """Load configuration and set up logging for a command handler.

    Returns:
        The configuration, or None after reporting a configuration error
    """
    try:
        config = load_cli_config(args)
    except ConfigError as e:
        print(f"Configuration error: {e}")
        return None
    setup_logging(args, config)
    return config
