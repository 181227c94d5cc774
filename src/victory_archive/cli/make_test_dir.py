"""make-test-dir command: generate pattern files for trial runs."""

import argparse
import logging

from ..core import file_generates_folder
from .common import prepare_command

logger = logging.getLogger(__name__)


def execute_make_test_dir(args: argparse.Namespace) -> int:
    """Execute the make-test-dir command."""
    config = prepare_command(args)
    if config is None:
        return 1

    if args.count < 0 or args.size < 0:
        logger.error("--count and --size must not be negative")
        return 1

    try:
        path = file_generates_folder(args.directory, args.size, args.count)
    except OSError as e:
        logger.error("Could not generate test files: %s", e)
        return 1

    logger.info("Generated %d files of %d bytes in %s", args.count, args.size, path)
    return 0
