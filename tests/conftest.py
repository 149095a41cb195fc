"""Shared fixtures for procenv tests."""

from pathlib import Path

import pytest


class FakeProc:
    """Builds a /proc-like directory tree under a temporary path."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def add(self, pid: int, environ: bytes | None = b"", cmdline: bytes | None = b"") -> Path:
        """Add a process directory. None leaves the record missing."""
        proc_dir = self.root / str(pid)
        proc_dir.mkdir()
        if environ is not None:
            (proc_dir / "environ").write_bytes(environ)
        if cmdline is not None:
            (proc_dir / "cmdline").write_bytes(cmdline)
        return proc_dir


@pytest.fixture
def fake_proc(tmp_path: Path) -> FakeProc:
    """An empty fake process directory with a few non-process entries."""
    root = tmp_path / "proc"
    root.mkdir()
    (root / "self").mkdir()
    (root / "meminfo").write_text("MemTotal: 1 kB\n")
    return FakeProc(root)
