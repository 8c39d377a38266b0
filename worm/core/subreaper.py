"""Mark the calling process as the reaper for orphaned descendants (Linux).

With PR_SET_CHILD_SUBREAPER set, members detached by the fixture are
reparented to this process instead of init, so a supervisor can still see
and wait on them.
"""

from __future__ import annotations

import ctypes
import ctypes.util
import os
import sys

from worm.log import logger

PR_SET_CHILD_SUBREAPER = 36
PR_GET_CHILD_SUBREAPER = 37


class SubreaperError(OSError):
    pass


def _libc() -> ctypes.CDLL:
    return ctypes.CDLL(ctypes.util.find_library("c") or "libc.so.6", use_errno=True)


def set_subreaper() -> None:
    """Configure the process as a subreaper. Raises SubreaperError on failure."""
    if not sys.platform.startswith("linux"):
        raise SubreaperError(0, f"subreaper not supported on {sys.platform}")

    libc = _libc()
    if libc.prctl(PR_SET_CHILD_SUBREAPER, 1, 0, 0, 0) != 0:
        errno = ctypes.get_errno()
        raise SubreaperError(errno, f"prctl(PR_SET_CHILD_SUBREAPER): {os.strerror(errno)}")
    logger.debug("%d: set as child subreaper", os.getpid())


def is_subreaper() -> bool:
    """True if the calling process is the reaper for its descendants."""
    if not sys.platform.startswith("linux"):
        return False

    flag = ctypes.c_int(0)
    libc = _libc()
    if libc.prctl(PR_GET_CHILD_SUBREAPER, ctypes.byref(flag), 0, 0, 0) != 0:
        logger.debug("prctl(PR_GET_CHILD_SUBREAPER): %s", os.strerror(ctypes.get_errno()))
        return False
    return flag.value == 1
