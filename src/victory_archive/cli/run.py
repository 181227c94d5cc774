"""Run command: copy every discovered batch to the destination."""

import argparse
import logging
import time

from .. import __util__
from ..core import Executor
from ..plan import BackupPlan
from .common import prepare_command

logger = logging.getLogger(__name__)


def execute_run(args: argparse.Namespace) -> int:
    """Execute the run command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    config = prepare_command(args)
    if config is None:
        return 1

    try:
        plan = BackupPlan.load(args.manifest)
    except __util__.PlanError as e:
        logger.error("%s", e)
        return 1

    if not plan.batches:
        logger.warning("Plan %s has no batches; run 'discover' first", plan.name)
        return 0
    if len(plan.sources) > 1 or len(plan.destinations) > 1:
        logger.warning("Only the first source and destination are copied")

    logger.info(__util__.log_heading(f"Started at {time.ctime()}"))
    try:
        results = Executor.run(plan)
    except __util__.AbortError as e:
        logger.error("Plan failed to execute: %s", e)
        return 1
    logger.info(__util__.log_heading(f"Finished at {time.ctime()}"))

    if results.skipped:
        logger.warning(
            "Completed with errors: %d written, %d skipped",
            results.files,
            results.skipped,
        )
        return 1
    logger.info(
        "All %d batch(es) completed successfully: %s files written",
        results.batches,
        f"{results.files:,}",
    )
    return 0
