"""Creating output directories and waiting for them to become visible."""

from __future__ import annotations

import os
import time
from pathlib import Path


def make_dir(dirname: str | os.PathLike) -> Path:
    """Create a directory; an existing one is accepted, any other error is raised."""
    path = Path(dirname)
    try:
        path.mkdir(mode=0o777)
    except FileExistsError:
        pass
    return path


def wait_for_dir(dirname: str | os.PathLike, retries: int = 50, interval: float = 0.2) -> Path:
    """Wait until a directory exists, checking after each pause of ``interval`` seconds.

    Raises TimeoutError if it is still missing after ``retries`` further checks.
    """
    path = Path(dirname)
    attempt = 0
    while True:
        time.sleep(interval)
        if path.exists():
            return path
        if attempt >= retries:
            raise TimeoutError(f"timeout waiting for directory {path}")
        attempt += 1