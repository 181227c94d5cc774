"""Discover command: enumerate plan sources into batches."""

import argparse
import logging
import time

from .. import __util__
from ..core import Executor
from ..plan import BackupPlan
from .common import prepare_command

logger = logging.getLogger(__name__)


def execute_discover(args: argparse.Namespace) -> int:
    """Execute the discover command.

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

    batch_size = getattr(args, "batch_size", None)
    if batch_size is None:
        plan_config = config.get_plan(plan.name)
        if plan_config is not None:
            batch_size = config.get_effective_batch_size(plan_config)
        else:
            batch_size = config.global_config.batch_size
    if batch_size <= 0:
        logger.error("Batch size must be positive, got %d", batch_size)
        return 1

    logger.info(__util__.log_heading(f"Discovery started at {time.ctime()}"))
    results = Executor.discover(plan, batch_size)

    try:
        plan.save_plan(plan.path)
    except __util__.PlanError as e:
        logger.error("Could not update plan: %s", e)
        return 1

    logger.info(__util__.log_heading(f"Finished at {time.ctime()}"))
    logger.info(
        "Discovered %s files in %d batches (%.2fs)",
        f"{results.files:,}",
        results.batches,
        results.total_time,
    )
    return 0
