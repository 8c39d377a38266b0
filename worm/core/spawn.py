"""Recursive detaching fork tree.

Each call to worm() hangs one chain of detached processes off the caller:

    caller
     `- leader        setsid(), waits for its child, then exits
         `- member    runs the next detach step, sleeps, exits
             `- leader
                 `- member ...

The members end up reparented to init (or the nearest subreaper) once
their leader exits, outside the caller's session and process group. That
is the shape a process-tree killer has to find.
"""

from __future__ import annotations

import os
import time

from worm.config import DEFAULT_CHAINS, DEFAULT_DEPTH, DEFAULT_SLEEP
from worm.log import logger


def worm(depth: int, sleep_for: int = DEFAULT_SLEEP) -> int | None:
    """Start one detached chain below the calling process.

    Returns the PID of the forked session leader, or None when depth is
    exhausted. Only the calling process returns; every forked process
    exits through os._exit() and never unwinds into the caller's stack.
    """
    depth -= 1
    if depth <= 0:
        return None

    pid = os.fork()
    if pid != 0:
        logger.debug("%d: forked session leader %d (depth %d)", os.getpid(), pid, depth)
        return pid

    try:
        _detach(depth, sleep_for)
    except Exception:
        logger.exception("%d: detach step failed", os.getpid())
    finally:
        os._exit(0)


def _detach(depth: int, sleep_for: int) -> None:
    """Body of a freshly forked child: new session, then double fork."""
    try:
        os.setsid()
    except OSError as e:
        logger.warning("setsid: %s", e.strerror)

    pid = os.fork()
    if pid != 0:
        # Session leader: hold the session until the member is gone.
        logger.debug("%d: session %d leader, waiting on %d", os.getpid(), os.getsid(0), pid)
        os.waitpid(pid, 0)
        return

    logger.debug("%d: member of session %d (depth %d)", os.getpid(), os.getsid(0), depth)
    worm(depth, sleep_for)
    time.sleep(sleep_for)


def spawn_chains(
    chains: int = DEFAULT_CHAINS,
    depth: int = DEFAULT_DEPTH,
    sleep_for: int = DEFAULT_SLEEP,
) -> list[int]:
    """Start `chains` independent chains from the calling process.

    Returns the PIDs of the first session leader of each chain. A failed
    fork is logged and the remaining chains are still attempted.
    """
    leaders = []
    for _ in range(chains):
        try:
            pid = worm(depth, sleep_for)
        except OSError as e:
            logger.error("fork: %s", e.strerror)
            continue
        if pid is not None:
            leaders.append(pid)
    return leaders
