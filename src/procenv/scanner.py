"""Process scanning engine for procenv."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

import psutil

from procenv.models import Kind, ResultRecord
from procenv.procfs import DEFAULT_PROC_ROOT, iter_pids, read_cmdline, read_environ_value

logger = logging.getLogger(__name__)


def default_workers() -> int:
    """Number of worker threads to use when none is configured."""
    return psutil.cpu_count() or 1


@dataclass(slots=True)
class ScanConfig:
    """Settings for one scan of the process table."""

    proc_root: Path = DEFAULT_PROC_ROOT
    workers: int = field(default_factory=default_workers)
    detail: bool = False  # Also read each process's command line


class ProcessScanner:
    """
    Classifies every process by the value of one environment variable.

    Each pid is inspected independently on a bounded thread pool; results are
    collected in full before being returned, so callers aggregate them from a
    single thread. Processes that vanish or cannot be read are reported with
    a Fail classification rather than raising.
    """

    def __init__(self, config: ScanConfig | None = None) -> None:
        """
        Initialize the ProcessScanner.

        Args:
            config: Scan settings. Defaults to /proc with one worker per CPU.
        """
        config = config or ScanConfig()
        self._proc_root = config.proc_root
        self._detail = config.detail
        self._workers = 1
        self.workers = config.workers

    @property
    def workers(self) -> int:
        """Get the worker thread count."""
        return self._workers

    @workers.setter
    def workers(self, value: int) -> None:
        """Set the worker thread count."""
        self._workers = max(1, value)  # Minimum one worker

    @property
    def detail(self) -> bool:
        """Whether command lines are collected."""
        return self._detail

    def scan(self, name: str) -> list[ResultRecord]:
        """
        Classify all processes by environment variable ``name``.

        Raises:
            EnumerationError: If the process directory cannot be listed.
        """
        if "=" in name:
            logger.warning("variable name %r contains '='; matching it literally", name)

        pids = list(iter_pids(self._proc_root))
        logger.info("scanning %d processes in %s with %d workers", len(pids), self._proc_root, self._workers)

        if self._workers == 1:
            records = [self._inspect(pid, name) for pid in pids]
        else:
            with ThreadPoolExecutor(max_workers=self._workers, thread_name_prefix="ProcessScanner") as pool:
                records = list(pool.map(lambda pid: self._inspect(pid, name), pids))

        failed = sum(1 for record in records if record.classification.kind is Kind.FAIL)
        logger.info("scanned %d processes, %d unreadable", len(records), failed)
        return records

    def _inspect(self, pid: int, name: str) -> ResultRecord:
        """Build the result record for a single process."""
        classification = read_environ_value(self._proc_root, pid, name)
        command_line = read_cmdline(self._proc_root, pid) if self._detail else None
        return ResultRecord(classification, pid, command_line)
