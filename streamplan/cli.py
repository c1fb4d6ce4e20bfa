"""Command-line interface for streamplan."""

import argparse
import json
import logging
import sys

from pydantic import ValidationError

from streamplan import __version__
from streamplan.config import get_settings
from streamplan.exceptions import PlanError
from streamplan.loader import load_plan_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    settings = get_settings()

    parser = argparse.ArgumentParser(
        prog="streamplan",
        description="Assemble and validate a stream-processing execution plan",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=f"Logging level (default: {settings.log_level})",
    )
    parser.add_argument(
        "plan_file",
        help="JSON plan document to validate",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        plan = load_plan_file(args.plan_file)
    except (PlanError, ValidationError) as e:
        print(f"Error: invalid plan: {e}", file=sys.stderr)
        return 1
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: cannot read {args.plan_file}: {e}", file=sys.stderr)
        return 1

    print(json.dumps(plan.summary(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
