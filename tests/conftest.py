"""Shared fixtures for the worm test suite."""

from __future__ import annotations

import os
import signal
import subprocess
import sys
import uuid

import pytest

MARKER_KEY = "WORM_TEST_MARKER"


@pytest.fixture
def marker_env(tmp_path):
    """Environment tagging every process started with it, logs kept in tmp."""
    env = dict(os.environ)
    env[MARKER_KEY] = uuid.uuid4().hex
    env["HOME"] = str(tmp_path)
    return env


@pytest.fixture
def launch(marker_env):
    """Start `python -m worm` with a marker; kill anything left at teardown."""
    from worm.core.process import find_by_environ

    started = []

    def _launch(*args: str) -> subprocess.Popen:
        proc = subprocess.Popen(
            [sys.executable, "-m", "worm", *args],
            env=marker_env,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
        started.append(proc)
        return proc

    yield _launch

    for pid in find_by_environ(MARKER_KEY, marker_env[MARKER_KEY]):
        try:
            os.kill(pid, signal.SIGKILL)
        except ProcessLookupError:
            pass
    for proc in started:
        if proc.poll() is None:
            proc.kill()
        proc.communicate()


@pytest.fixture
def sleeper(marker_env):
    """A plain child process that sleeps, tagged with the marker."""
    proc = subprocess.Popen(
        [sys.executable, "-c", "import time; time.sleep(30)"],
        env=marker_env,
    )
    yield proc
    proc.kill()
    proc.wait()
