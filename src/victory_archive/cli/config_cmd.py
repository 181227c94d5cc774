"""Config command: Configuration management."""

import argparse
import logging
from pathlib import Path

from ..config import ConfigError, find_config_file, load_config
from ..config.loader import generate_example_config
from .common import setup_logging

logger = logging.getLogger(__name__)


def execute_config(args: argparse.Namespace) -> int:
    """Execute the config command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    setup_logging(args)

    action = getattr(args, "config_action", None)

    if action == "validate":
        return _validate_config(args)
    elif action == "init":
        return _init_config(args)
    else:
        print("Usage: victory-archive config <validate|init>")
        return 1


def _validate_config(args: argparse.Namespace) -> int:
    """Validate configuration file."""
    try:
        config_path = find_config_file(getattr(args, "config", None))
        if config_path is None:
            print("No configuration file found.")
            print("Searched locations:")
            print("  ~/.config/victory-archive/config.toml")
            print("  /etc/victory-archive/config.toml")
            return 1

        print(f"Validating: {config_path}")
        config, warnings = load_config(config_path)

        if warnings:
            print("")
            print("Warnings:")
            for warning in warnings:
                print(f"  - {warning}")

        print("")
        print("Configuration is valid.")
        print(f"  Plans: {len(config.plans)}")
        print(f"  Default batch size: {config.global_config.batch_size}")

        return 0

    except ConfigError as e:
        print(f"Configuration error: {e}")
        return 1


def _init_config(args: argparse.Namespace) -> int:
    """Generate example configuration."""
    content = generate_example_config()

    output = getattr(args, "output", None)
    if output:
        output_path = Path(output)
        if output_path.exists():
            print(f"Refusing to overwrite existing file: {output_path}")
            return 1
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(content)
        except OSError as e:
            logger.error("Could not write %s: %s", output_path, e)
            return 1
        print(f"Example configuration written to: {output_path}")
    else:
        print(content)

    return 0
