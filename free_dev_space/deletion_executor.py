#!/usr/bin/env python3
"""
Deletion executor for free-dev-space

Removes matched directories one at a time, tallies the bytes freed and
records per-item failures without aborting the rest of the batch.
"""

import os
import shutil
import stat
import sys
from dataclasses import dataclass, field
from typing import Callable, Optional

from .tree_walker import MatchRecord


@dataclass
class DeletionFailure:
    """A directory that could not be removed"""

    name: str
    path: str
    message: str


@dataclass
class DeletionOutcome:
    """Result of removing a single match record"""

    record: MatchRecord
    success: bool
    freed_bytes: int = 0
    error_message: Optional[str] = None


@dataclass
class DeletionReport:
    """Aggregated outcome of a deletion batch"""

    freed_bytes: int = 0
    deleted: list[str] = field(default_factory=list)
    failures: list[DeletionFailure] = field(default_factory=list)

    @property
    def failure_count(self) -> int:
        return len(self.failures)


def _make_writable_and_retry(func, path, exc):
    """Clear the read-only bit on *path* and retry the failed removal once.

    Only unlink/rmdir failures on entries that are actually read-only are
    retried; everything else is re-raised unchanged. If the retry fails the
    original mode is put back.
    """
    error = exc if isinstance(exc, BaseException) else exc[1]
    if func not in (os.unlink, os.remove, os.rmdir):
        raise error

    try:
        mode = os.lstat(path).st_mode
    except OSError:
        mode = None
    if mode is None or stat.S_ISLNK(mode) or mode & stat.S_IWUSR:
        raise error

    os.chmod(path, stat.S_IMODE(mode) | stat.S_IWUSR)
    try:
        func(path)
    except OSError:
        os.chmod(path, stat.S_IMODE(mode))
        raise


def force_remove_tree(path: str):
    """Recursively remove *path*, handling read-only entries."""
    if sys.version_info >= (3, 12):
        shutil.rmtree(path, onexc=_make_writable_and_retry)
    else:
        shutil.rmtree(path, onerror=_make_writable_and_retry)


class DeletionExecutor:
    """Sequential remover for match records"""

    def __init__(
        self,
        remover: Optional[Callable[[str], None]] = None,
        progress_callback: Optional[Callable[[str], None]] = None,
    ):
        self.remover = remover or force_remove_tree
        self.progress_callback = progress_callback

    def delete_one(self, record: MatchRecord) -> DeletionOutcome:
        try:
            self.remover(record.path)
        except OSError as e:
            return DeletionOutcome(record=record, success=False, error_message=e.strerror or str(e))
        return DeletionOutcome(record=record, success=True, freed_bytes=record.size)

    def delete_all(self, records: list[MatchRecord]) -> DeletionReport:
        """Remove every record; one failure never stops the batch"""
        report = DeletionReport()

        for i, record in enumerate(records):
            if self.progress_callback:
                self.progress_callback(f"Deleting {record.name} ({i + 1}/{len(records)})")

            outcome = self.delete_one(record)
            if outcome.success:
                report.freed_bytes += outcome.freed_bytes
                report.deleted.append(record.path)
            else:
                report.failures.append(DeletionFailure(record.name, record.path, outcome.error_message))

        return report


def delete_all(
    records: list[MatchRecord],
    remover: Optional[Callable[[str], None]] = None,
    progress_callback: Optional[Callable[[str], None]] = None,
) -> DeletionReport:
    return DeletionExecutor(remover, progress_callback).delete_all(records)
