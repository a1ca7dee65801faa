#!/usr/bin/env python3
"""
Size accountant for free-dev-space

Computes the on-disk size of matched directories. The fast path asks the
OS `du` tool for a summary; if that times out, fails or prints something
unexpected, a manual os.scandir walk is used instead. Sizing never fails
outward: the worst case is 0 bytes.
"""

import os
import subprocess
from typing import Callable, Optional, Protocol

from .tree_walker import MatchRecord

DU_TIMEOUT = 30  # seconds


class SizeComputationError(Exception):
    """Raised by a size strategy that cannot produce a value"""


class SizeStrategy(Protocol):
    def size_of(self, path: str) -> int: ...


class DuSizeStrategy:
    """Fast native aggregate using `du -sk`"""

    def __init__(self, timeout: float = DU_TIMEOUT):
        self.timeout = timeout

    def size_of(self, path: str) -> int:
        try:
            result = subprocess.run(
                ["du", "-sk", path],  # -s = summarize, -k = KiB
                capture_output=True,
                text=True,
                check=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise SizeComputationError(f"du timed out after {self.timeout}s") from e
        except subprocess.CalledProcessError as e:
            raise SizeComputationError(f"du exited with status {e.returncode}") from e
        except OSError as e:
            # du not installed (e.g. Windows)
            raise SizeComputationError(f"du unavailable: {e}") from e

        try:
            kib = int(result.stdout.split()[0])
        except (IndexError, ValueError) as e:
            raise SizeComputationError(f"Unparseable du output: {result.stdout!r}") from e
        return kib * 1024


class WalkSizeStrategy:
    """Manual recursive sum of regular file sizes; symlinks are skipped"""

    def size_of(self, path: str) -> int:
        total = 0
        stack = [path]
        while stack:
            current = stack.pop()
            try:
                with os.scandir(current) as entries:
                    for entry in entries:
                        try:
                            if entry.is_symlink():
                                continue
                            if entry.is_dir(follow_symlinks=False):
                                stack.append(entry.path)
                            elif entry.is_file(follow_symlinks=False):
                                total += entry.stat(follow_symlinks=False).st_size
                        except OSError:
                            continue
            except OSError:
                continue
        return total


class SizeAccountant:
    """Applies the fast strategy and falls back to the manual walk"""

    def __init__(self, primary: Optional[SizeStrategy] = None, fallback: Optional[SizeStrategy] = None):
        self.primary = primary if primary is not None else DuSizeStrategy()
        self.fallback = fallback if fallback is not None else WalkSizeStrategy()

    def size_of(self, path: str) -> int:
        try:
            return self.primary.size_of(path)
        except SizeComputationError:
            pass

        try:
            return self.fallback.size_of(path)
        except (SizeComputationError, OSError):
            return 0


def compute_sizes(
    records: list[MatchRecord],
    accountant: Optional[SizeAccountant] = None,
    progress_callback: Optional[Callable[[str], None]] = None,
) -> list[MatchRecord]:
    """Annotate each match record with its size in place and return the list."""
    accountant = accountant or SizeAccountant()
    for i, record in enumerate(records):
        if progress_callback:
            progress_callback(f"Measuring {record.name} ({i + 1}/{len(records)})")
        record.size = accountant.size_of(record.path)
    return records
