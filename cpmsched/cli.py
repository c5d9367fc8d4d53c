"""
Command line interface for the CPM scheduler.

Usage:
    python -m cpmsched [tasks.csv] [options]

Reads a task file, computes the CPM schedule and writes:
    output.csv      task, duration, ES, EF, LS, LF, slack
    timeline.csv    one column per time unit; C = critical task active,
                    X = task active, O = task inactive

Options:
    --output PATH       Task table destination
    --timeline PATH     Timeline destination
    --separator CHAR    Dependency separator inside the dependencies column
    --check             Validate the task network only, write nothing
    --report            Print a critical path report
    --json              Print the schedule as JSON
    --verbose           Debug logging
"""

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from .analysis.critical_path import print_critical_path_report, summarize_critical_path
from .config.settings import Settings, settings
from .cpm.engine import CPMEngine
from .cpm.errors import SchedulingError
from .cpm.network import TaskNetwork
from .data_loader import load_tasks
from .exporters import write_task_table, write_timeline
from .utils.logger import configure_logging

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    configure_logging('cpmsched', 'DEBUG' if verbose else None)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cpmsched",
        description="Critical Path Method scheduler",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "tasks_file",
        nargs="?",
        default=settings.TASKS_FILE,
        help=f"Task CSV file (default: {settings.TASKS_FILE})",
    )
    parser.add_argument(
        "--output", "-o",
        default=settings.OUTPUT_FILE,
        metavar="PATH",
        help=f"Task table destination (default: {settings.OUTPUT_FILE})",
    )
    parser.add_argument(
        "--timeline", "-t",
        default=settings.TIMELINE_FILE,
        metavar="PATH",
        help=f"Timeline destination (default: {settings.TIMELINE_FILE})",
    )
    parser.add_argument(
        "--separator",
        default=settings.DEPENDENCY_SEPARATOR,
        metavar="CHAR",
        help=f"Dependency separator (default: {settings.DEPENDENCY_SEPARATOR!r})",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Validate the task network and exit",
    )
    parser.add_argument(
        "--report",
        action="store_true",
        help="Print a critical path report",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the schedule as JSON",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )
    return parser


def cmd_check(network: TaskNetwork) -> int:
    """Validate the network and print its statistics."""
    network.validate_acyclic()
    print(f"Network OK: {network!r}")
    for key, value in network.get_statistics().items():
        print(f"  {key}: {value}")
    return 0


def cmd_run(args, records) -> int:
    """Compute the schedule and write output files."""
    network = TaskNetwork.from_records(records)
    if args.check:
        return cmd_check(network)

    schedule = CPMEngine(network).run()

    write_task_table(schedule, settings.resolve(args.output))
    write_timeline(schedule, settings.resolve(args.timeline))

    if args.json:
        print(json.dumps(schedule.to_dict(), indent=2))

    if args.report:
        print_critical_path_report(summarize_critical_path(network, schedule))

    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Checked before logging is configured: LOG_LEVEL must be valid first
    problems = settings.validate_required_settings()
    if problems:
        print("ERROR: Invalid settings:", file=sys.stderr)
        for problem in problems:
            print(f"  - {problem}", file=sys.stderr)
        return 1

    problems = Settings.check_separator(args.separator, name='--separator')
    if problems:
        for problem in problems:
            print(f"ERROR: {problem}", file=sys.stderr)
        return 1

    setup_logging(args.verbose)

    try:
        records = load_tasks(settings.resolve(args.tasks_file), separator=args.separator)
        return cmd_run(args, records)
    except OSError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except SchedulingError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
