"""
Command line entry point.

Usage:
    python -m onboarding onboard --first-name Ana --last-name Lopez \\
        --department engineering --role "Backend Engineer" --start-date 2025-03-03
    python -m onboarding classify --first-name Ana --last-name Lopez --role "VP Sales" --json
"""

import argparse
import asyncio
import json
import sys
from typing import Any, Dict, List, Optional

from rich.console import Console

from .agents.validation import InvalidEmployeeInput
from .dashboard import render_classification, render_plan
from .engine import create_engine

# (flag, input key)
PROFILE_ARGUMENTS = (
    ("--first-name", "firstName"),
    ("--last-name", "lastName"),
    ("--email", "email"),
    ("--department", "department"),
    ("--role", "role"),
    ("--start-date", "startDate"),
    ("--manager", "manager"),
    ("--location", "location"),
)


def _add_profile_arguments(parser: argparse.ArgumentParser):
    for flag, key in PROFILE_ARGUMENTS:
        parser.add_argument(flag, dest=key, type=str, default=None)
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON instead of tables"
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="onboarding",
        description="Multi-agent employee onboarding",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    _add_profile_arguments(
        subparsers.add_parser("onboard", help="Run all onboarding agents for a new employee")
    )
    _add_profile_arguments(
        subparsers.add_parser("classify", help="Preview tier, risk and focus areas")
    )

    return parser.parse_args(argv)


def _profile(args: argparse.Namespace) -> Dict[str, Any]:
    data = {}
    for _, key in PROFILE_ARGUMENTS:
        value = getattr(args, key)
        if value is not None:
            data[key] = value
    return data


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    engine = create_engine()
    console = Console()
    data = _profile(args)

    if args.command == "classify":
        result = engine.classify(data)
        if args.json:
            print(json.dumps(result.to_dict(), indent=2))
        else:
            render_classification(result, console)
        return 0

    try:
        employee_id, plan = asyncio.run(engine.onboard(data))
    except InvalidEmployeeInput as e:
        for error in e.errors:
            console.print(f"[red]✗[/red] {error}")
        return 2

    if args.json:
        print(json.dumps({"employee_id": employee_id, "plan": plan.to_dict()}, indent=2))
    else:
        render_plan(plan, console)
    return 0


if __name__ == "__main__":
    sys.exit(main())
