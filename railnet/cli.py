"""Command-line interface for railnet."""

import argparse
import logging
import sys

from railnet.api import RailNetwork
from railnet.network.models import NetworkConfig
from railnet.script import ScriptRunner
from railnet.version import VERSION


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def cmd_run(args: argparse.Namespace) -> int:
    """Execute run command."""
    setup_logging(args.verbose)

    config = NetworkConfig(
        prevent_region_cycles=not args.allow_region_cycles,
        require_ordered_times=not args.lenient_times,
        closest_limit=args.closest_limit,
    )
    runner = ScriptRunner(RailNetwork(config))

    try:
        runner.run_file(args.script)
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        logging.exception("Script failed")
        return 1


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="railnet",
        description="Build a railway network from a command script and query routes",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    run_parser = subparsers.add_parser("run", help="Run a network command script")
    run_parser.add_argument("script", help="Path to the command script")
    run_parser.add_argument(
        "--allow-region-cycles",
        action="store_true",
        help="Only reject subregions that already have a parent (default: reject cycles too)",
    )
    run_parser.add_argument(
        "--lenient-times",
        action="store_true",
        help="Accept trains whose stop times decrease (default: reject)",
    )
    run_parser.add_argument(
        "--closest-limit",
        type=int,
        default=3,
        help="Number of stations returned by 'closest' (default: 3)",
    )
    run_parser.set_defaults(func=cmd_run)

    # Parse and execute
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
