"""Command-line entry point for the philosophers simulation."""

from __future__ import annotations

import sys
from typing import Sequence

from philosim.config import UsageError, parse_args, usage_message
from philosim.simulation import Simulation


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, run the simulation and return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        config = parse_args(args)
    except UsageError as err:
        sys.stdout.write(usage_message(err.msg))
        sys.stdout.flush()
        return 1
    try:
        Simulation(config, sys.stdout).run()
    except RuntimeError:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())