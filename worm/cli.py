from __future__ import annotations

import argparse
import sys
import time

from worm.config import DEFAULT_CHAINS, DEFAULT_DEPTH, DEFAULT_SLEEP, parse_seconds
from worm.log import logger


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="worm",
        description="worm -- spawn detached process chains for process-tree killers to find",
    )
    parser.add_argument(
        "seconds", nargs="?", default=str(DEFAULT_SLEEP),
        help=f"How long the processes stay alive (default: {DEFAULT_SLEEP})",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)
    sleep_for = parse_seconds(args.seconds)

    from worm.core.spawn import spawn_chains

    leaders = spawn_chains(chains=DEFAULT_CHAINS, depth=DEFAULT_DEPTH, sleep_for=sleep_for)
    logger.debug("started %d chain(s), sleeping %ds", len(leaders), sleep_for)
    time.sleep(sleep_for)


def pstree_main(argv: list[str] | None = None) -> None:
    """Print a PID and its direct children, one "|-<pid>" line each."""
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print("usage: worm-pstree <pid>", file=sys.stderr)
        sys.exit(1)

    try:
        pid = int(argv[0])
    except ValueError:
        print(f"worm-pstree: invalid pid: {argv[0]!r}", file=sys.stderr)
        sys.exit(1)

    import psutil
    from worm.core.process import children

    if not psutil.pid_exists(pid):
        print(f"worm-pstree: no such process: {pid}", file=sys.stderr)
        sys.exit(1)

    kids = children(pid)
    if not kids:
        return

    print(pid)
    for child in kids:
        print(f"|-{child}")


if __name__ == "__main__":
    main()
