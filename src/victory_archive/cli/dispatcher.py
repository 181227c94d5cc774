"""CLI dispatcher: argument parsing and routing to subcommands."""

import argparse
import sys
from typing import Callable

from .. import __version__
from .common import add_verbosity_args


def create_subcommand_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="victory-archive",
        description="Batched file backups with persisted discovery ledgers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    add_verbosity_args(parser)

    parser.add_argument(
        "-V",
        "--version",
        action="store_true",
        help="Show version and exit",
    )

    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        help="Path to configuration file",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        description="Available commands (use 'command --help' for details)",
    )

    # new command
    new_parser = subparsers.add_parser(
        "new",
        help="Create a plan manifest",
        description="Create a plan from endpoints or from a configured plan",
    )
    new_parser.add_argument("name", help="Plan name")
    new_parser.add_argument(
        "--source",
        dest="sources",
        action="append",
        default=[],
        metavar="PATH",
        help="Source directory (repeatable)",
    )
    new_parser.add_argument(
        "--dest",
        dest="destinations",
        action="append",
        default=[],
        metavar="PATH",
        help="Destination directory (repeatable)",
    )
    new_parser.add_argument(
        "--plan-dir",
        metavar="DIR",
        help="Directory receiving the manifest and batches",
    )
    new_parser.add_argument(
        "--from-config",
        action="store_true",
        help="Take endpoints and plan directory from the configured plan NAME",
    )

    # discover command
    discover_parser = subparsers.add_parser(
        "discover",
        help="Enumerate sources into batches",
        description="List every source file into persisted batches and update the plan",
    )
    discover_parser.add_argument("manifest", help="Plan manifest (.yaml)")
    discover_parser.add_argument(
        "--batch-size",
        type=int,
        metavar="N",
        help="Files per batch (overrides config)",
    )

    # show command
    show_parser = subparsers.add_parser(
        "show",
        help="Display a plan",
        description="Print the content of a plan manifest",
    )
    show_parser.add_argument("manifest", help="Plan manifest (.yaml)")

    # run command
    run_parser = subparsers.add_parser(
        "run",
        help="Copy all discovered batches",
        description="Replay the plan ledger, copying files to the destination",
    )
    run_parser.add_argument("manifest", help="Plan manifest (.yaml)")

    # make-test-dir command
    testdir_parser = subparsers.add_parser(
        "make-test-dir",
        help="Generate a directory of test files",
        description="Write COUNT pattern files of SIZE bytes into DIR",
    )
    testdir_parser.add_argument("directory", help="Target directory")
    testdir_parser.add_argument(
        "--count", type=int, default=2500, metavar="N", help="Number of files"
    )
    testdir_parser.add_argument(
        "--size", type=int, default=1_000_000, metavar="BYTES", help="File size"
    )

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="Configuration management",
        description="Validate or generate configuration files",
    )
    config_subs = config_parser.add_subparsers(dest="config_action")
    config_subs.add_parser("validate", help="Validate configuration file")
    init_parser = config_subs.add_parser("init", help="Generate example configuration")
    init_parser.add_argument(
        "-o", "--output", metavar="FILE", help="Write to FILE instead of stdout"
    )

    return parser


def run_subcommand(args: argparse.Namespace) -> int:
    """Route parsed arguments to a command handler.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    if getattr(args, "version", False):
        print(f"victory-archive {__version__}")
        return 0

    if not args.command:
        create_subcommand_parser().print_help()
        return 1

    handlers: dict[str, Callable] = {
        "new": cmd_new,
        "discover": cmd_discover,
        "show": cmd_show,
        "run": cmd_run,
        "make-test-dir": cmd_make_test_dir,
        "config": cmd_config,
    }

    handler = handlers.get(args.command)
    if handler:
        return handler(args)
    else:
        print(f"Unknown command: {args.command}")
        return 1


def cmd_new(args: argparse.Namespace) -> int:
    """Execute new command."""
    from .plan_cmd import execute_new

    return execute_new(args)


def cmd_discover(args: argparse.Namespace) -> int:
    """Execute discover command."""
    from .discover import execute_discover

    return execute_discover(args)


def cmd_show(args: argparse.Namespace) -> int:
    """Execute show command."""
    from .plan_cmd import execute_show

    return execute_show(args)


def cmd_run(args: argparse.Namespace) -> int:
    """Execute run command."""
    from .run import execute_run

    return execute_run(args)


def cmd_make_test_dir(args: argparse.Namespace) -> int:
    """Execute make-test-dir command."""
    from .make_test_dir import execute_make_test_dir

    return execute_make_test_dir(args)


def cmd_config(args: argparse.Namespace) -> int:
    """Execute config command."""
    from .config_cmd import execute_config

    return execute_config(args)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for victory-archive CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = create_subcommand_parser()
    args = parser.parse_args(argv)

    return run_subcommand(args)
