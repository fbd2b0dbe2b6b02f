"""
Named file locks for read-modify-write cycles on the JSON stores.

Keys look like lock:collection:tasks. Locks are plain O_EXCL lock files, so
they hold across worker processes sharing one data directory. A lock file
left behind by a dead process (or older than the stale age) is broken and
re-acquired.
"""

from __future__ import annotations

import os
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

import psutil

from ..utils.logger import get_logger

logger = get_logger(__name__)

LOCK_TIMEOUT_SECONDS = 30
LOCK_STALE_SECONDS = 30
LOCK_POLL_INTERVAL = 0.05


def _lock_path(locks_dir: Path, key: str) -> Path:
    safe = "".join(c if c.isalnum() or c in "-_" else "_" for c in key)
    locks_dir.mkdir(parents=True, exist_ok=True)
    return locks_dir / f"{safe}.lock"


def _holder_pid(path: Path) -> Optional[int]:
    try:
        return int(path.read_text(encoding="utf-8").strip())
    except (OSError, ValueError):
        return None


def _is_stale(path: Path, stale_after_seconds: float) -> bool:
    """True when the holder process is gone or the lock is too old."""
    pid = _holder_pid(path)
    if pid is not None and not psutil.pid_exists(pid):
        return True
    try:
        age = time.time() - path.stat().st_mtime
    except FileNotFoundError:
        return False
    return age > stale_after_seconds


@contextmanager
def acquire_lock(
    locks_dir: Path,
    key: str,
    timeout_seconds: float = LOCK_TIMEOUT_SECONDS,
    stale_after_seconds: float = LOCK_STALE_SECONDS,
) -> Generator[None, None, None]:
    """
    Acquire a named lock under ``locks_dir``.
    Blocks until acquired or raises TimeoutError.
    """
    path = _lock_path(locks_dir, key)
    deadline = time.monotonic() + timeout_seconds
    while True:
        try:
            fd = os.open(str(path), os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
        except FileExistsError:
            if _is_stale(path, stale_after_seconds):
                logger.warning("Breaking stale lock", key=key, holder_pid=_holder_pid(path))
                try:
                    path.unlink()
                except FileNotFoundError:
                    pass
                continue
            if time.monotonic() >= deadline:
                raise TimeoutError(f"Could not acquire lock {key} within {timeout_seconds}s")
            time.sleep(LOCK_POLL_INTERVAL)
            continue
        try:
            os.write(fd, str(os.getpid()).encode())
        finally:
            os.close(fd)
        break

    try:
        yield
    finally:
        try:
            path.unlink()
        except FileNotFoundError:
            pass


def lock_key_collection(name: str) -> str:
    return f"lock:collection:{name}"
