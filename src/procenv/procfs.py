"""Readers for the /proc process-information filesystem."""

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from procenv.models import Classification

logger = logging.getLogger(__name__)

DEFAULT_PROC_ROOT = Path("/proc")

# Process ids are unsigned 32-bit values on every platform with a /proc.
MAX_PID = 2**32 - 1


class EnumerationError(RuntimeError):
    """The process directory could not be listed."""


def _parse_pid(name: str) -> int | None:
    """Return the pid named by a directory entry, or None for other entries."""
    if not name.isascii() or not name.isdigit():
        return None
    pid = int(name)
    if pid > MAX_PID:
        return None
    return pid


def iter_pids(proc_root: Path = DEFAULT_PROC_ROOT) -> Iterator[int]:
    """
    Yield the pids listed in the process directory.

    Entries that are not process directories (``self``, ``meminfo``, ...)
    are skipped.

    Raises:
        EnumerationError: If the directory cannot be listed.
    """
    try:
        names = os.listdir(proc_root)
    except OSError as exc:
        raise EnumerationError(f"cannot list {proc_root}: {exc.strerror or exc}") from exc

    for name in names:
        pid = _parse_pid(name)
        if pid is not None:
            yield pid


def find_environ_value(raw: bytes, name: str) -> str | None:
    """
    Find a variable in a NUL-separated ``KEY=VALUE`` environment record.

    Only the first matching entry counts. The value is everything after the
    first ``=`` and is decoded leniently, since the record is not guaranteed
    to be valid text.

    Returns:
        The decoded value, or None when the variable is not present.
    """
    prefix = os.fsencode(name) + b"="
    for entry in raw.split(b"\x00"):
        if entry.startswith(prefix):
            return entry[len(prefix):].decode("utf-8", errors="replace")
    return None


def read_environ_value(proc_root: Path, pid: int, name: str) -> Classification:
    """Classify process ``pid`` by the value of environment variable ``name``."""
    path = proc_root / str(pid) / "environ"
    try:
        raw = path.read_bytes()
    except OSError as exc:
        # Process exited or belongs to another user
        logger.debug("cannot read %s: %s", path, exc)
        return Classification.fail()

    value = find_environ_value(raw, name)
    if value is None:
        return Classification.absent()
    return Classification.of(value)


def normalize_cmdline(raw: bytes) -> str:
    """Render a NUL-separated argument record as a single line."""
    if raw.endswith(b"\x00"):
        raw = raw[:-1]
    return raw.replace(b"\x00", b" ").decode("utf-8", errors="replace")


def read_cmdline(proc_root: Path, pid: int) -> str:
    """Read the command line of process ``pid``, or "" if it is unavailable."""
    path = proc_root / str(pid) / "cmdline"
    try:
        raw = path.read_bytes()
    except OSError as exc:
        logger.debug("cannot read %s: %s", path, exc)
        return ""
    return normalize_cmdline(raw)
