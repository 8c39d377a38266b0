"""Process-table inspection for harnesses driving the fixture.

Detached members are reparented away from whoever launched them, so a
harness cannot walk its own children to find them. find_by_environ()
locates them by an inherited environment marker instead; children() and
descendants() cover the processes that are still attached.
"""

from __future__ import annotations

import os
import time
from typing import Callable, NamedTuple

import psutil

from worm.log import logger


class ProcInfo(NamedTuple):
    pid: int
    ppid: int
    pgid: int
    sid: int
    status: str


def children(pid: int) -> list[int]:
    """Direct child PIDs of `pid`, sorted. Empty if the process is gone."""
    try:
        return sorted(p.pid for p in psutil.Process(pid).children())
    except (psutil.NoSuchProcess, psutil.AccessDenied):
        return []


def descendants(pid: int) -> list[int]:
    """All PIDs below `pid` in the process tree, sorted."""
    try:
        return sorted(p.pid for p in psutil.Process(pid).children(recursive=True))
    except (psutil.NoSuchProcess, psutil.AccessDenied):
        return []


def snapshot(pids: list[int]) -> list[ProcInfo]:
    """Parent, group, session and status of each live PID.

    PIDs that exited (or were reaped) between discovery and inspection are
    skipped, as are zombies, whose session can no longer be read.
    """
    result = []
    for pid in pids:
        try:
            proc = psutil.Process(pid)
            status = proc.status()
            if status == psutil.STATUS_ZOMBIE:
                continue
            result.append(ProcInfo(
                pid=pid,
                ppid=proc.ppid(),
                pgid=os.getpgid(pid),
                sid=os.getsid(pid),
                status=status,
            ))
        except (psutil.NoSuchProcess, psutil.AccessDenied, ProcessLookupError):
            continue
    return result


def find_by_environ(key: str, value: str) -> list[int]:
    """PIDs of live processes whose environment contains key=value."""
    found = []
    for proc in psutil.process_iter(["pid", "status"]):
        try:
            if proc.info["status"] == psutil.STATUS_ZOMBIE:
                continue
            if proc.environ().get(key) == value:
                found.append(proc.info["pid"])
        except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
            continue
    logger.debug("%s=%s matched %d process(es)", key, value, len(found))
    return sorted(found)


def wait_for(predicate: Callable[[], bool], timeout: float, interval: float = 0.1) -> bool:
    """Poll `predicate` until it returns True or `timeout` seconds pass."""
    deadline = time.monotonic() + timeout
    while True:
        ok = predicate()
        if ok or time.monotonic() >= deadline:
            return ok
        time.sleep(interval)
