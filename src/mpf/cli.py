"""Simple process picker for MongoDB development.

Usage:
    mpf                          # JSON summary of every mongod, mongos and shell
    mpf --port 20021             # pids of servers and routers on a port
    mpf --server-type config     # pids of config servers
    mpf -t mongos                # pids of every mongos
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from . import __version__
from .config import get_finder_settings
from .exceptions import ApplicationError
from .logging_config import setup_logging
from .output_utils import build_summary, format_pid_list, format_summary
from .process_classifier import classify_processes
from .process_filter import FilterCriteria, select_pids, validate_criteria
from .process_lister import get_procs
from .process_models import MongoDType, MongoProcess

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mpf", description="MongoDB specific process finder")
    parser.add_argument(
        "-t",
        "--type",
        dest="process_type",
        choices=[p.value for p in MongoProcess],
        help="Process type",
    )
    parser.add_argument(
        "--server-type",
        choices=[t.cli_name for t in MongoDType],
        help="Server type of mongod to search for",
    )
    parser.add_argument("-p", "--port", type=int, help="Port of mongo daemon to search for")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def criteria_from_args(args: argparse.Namespace) -> FilterCriteria:
    return FilterCriteria(
        process_type=MongoProcess(args.process_type) if args.process_type else None,
        server_type=MongoDType.from_cli_name(args.server_type) if args.server_type else None,
        port=args.port,
    )


def run(criteria: FilterCriteria, *, verbose: bool = False) -> str:
    """Enumerate, classify and filter; return the text destined for stdout."""
    procs = get_procs()
    classified = classify_processes(procs, verbose=verbose)

    pids = select_pids(classified, criteria)
    if pids is not None:
        return format_pid_list(pids)

    # No filter: dump all the process info as json
    return format_summary(build_summary(classified)) + "\n"


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        criteria = criteria_from_args(args)
        validate_criteria(criteria)

        verbose = args.verbose or get_finder_settings().verbose
        setup_logging(verbose=verbose)
        output = run(criteria, verbose=verbose)
    except ApplicationError as exc:
        logger.debug("Aborting", exc_info=True)
        print(f"ERROR: {exc}", file=sys.stderr)
        return exc.exit_code

    sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
