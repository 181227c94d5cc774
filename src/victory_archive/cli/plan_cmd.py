"""Plan commands: create a plan manifest and display one."""

import argparse
import logging

from .. import __util__
from ..endpoint import choose_endpoint
from ..plan import BackupPlan
from .common import prepare_command

logger = logging.getLogger(__name__)


def execute_new(args: argparse.Namespace) -> int:
    """Execute the new command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    config = prepare_command(args)
    if config is None:
        return 1

    sources = list(args.sources)
    destinations = list(args.destinations)
    plan_dir = args.plan_dir

    if args.from_config:
        plan_config = config.get_plan(args.name)
        if plan_config is None:
            logger.error("No plan named %r in configuration", args.name)
            return 1
        sources = sources or plan_config.sources
        destinations = destinations or plan_config.destinations
        plan_dir = plan_dir or config.get_effective_plan_dir(plan_config)

    if not sources:
        logger.error("A plan needs at least one source")
        return 1
    plan_dir = plan_dir or config.global_config.plan_dir

    plan = BackupPlan(args.name)
    try:
        for spec in sources:
            plan.add_source(choose_endpoint(spec))
        for spec in destinations:
            destination = choose_endpoint(spec)
            destination.prepare()
            plan.add_destination(destination)
        manifest = plan.save_plan(plan_dir)
    except ValueError as e:
        logger.error("Invalid endpoint: %s", e)
        return 1
    except __util__.AbortError as e:
        logger.error("Could not create plan: %s", e)
        return 1

    if len(plan.sources) > 1 or len(plan.destinations) > 1:
        logger.warning("Only the first source and destination are used by 'run'")
    logger.info("Plan %s saved to %s", plan.name, manifest)
    return 0


def execute_show(args: argparse.Namespace) -> int:
    """Execute the show command."""
    config = prepare_command(args)
    if config is None:
        return 1

    try:
        saved = BackupPlan.load_saved(args.manifest)
    except __util__.PlanError as e:
        logger.error("%s", e)
        return 1

    print(f"Plan: {saved.name}")
    print(f"  Root: {saved.path}")
    print("  Sources:")
    for spec in saved.sources:
        print(f"    - {spec}")
    print("  Destinations:")
    for spec in saved.destinations:
        print(f"    - {spec}")
    print(f"  Batches: {len(saved.batches)}")
    for name in saved.batches:
        print(f"    - {name}")
    return 0
