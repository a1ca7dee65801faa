#!/usr/bin/env python3
"""
Tree walker for free-dev-space

Walks a directory tree depth-first and collects every directory that
satisfies a target rule. Matched directories and known target names that
fail their safety check are both treated as opaque: their contents are
never visited.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from .matcher import find_match
from .target_rules import DEFAULT_REGISTRY, RuleRegistry, TargetRule


@dataclass
class MatchRecord:
    """A directory found to be a regenerable artifact"""

    name: str
    path: str
    rule: TargetRule
    size: int = 0


def _list_subdirectories(directory: str) -> list[os.DirEntry]:
    """Return the real (non-symlink) subdirectories of *directory*, sorted by name."""
    with os.scandir(directory) as it:
        entries = [e for e in it if e.is_dir(follow_symlinks=False)]
    entries.sort(key=lambda e: e.name)
    return entries


def scan(
    root_path: str,
    registry: RuleRegistry = DEFAULT_REGISTRY,
    on_skip: Optional[Callable[[str, OSError], None]] = None,
) -> list[MatchRecord]:
    """Collect match records for every target directory below *root_path*.

    Unreadable directories are skipped; *on_skip* is called with the path
    and the error if provided.
    """
    root = str(Path(root_path).resolve())
    records: list[MatchRecord] = []
    stack = [root]

    while stack:
        current = stack.pop()
        try:
            subdirs = _list_subdirectories(current)
        except OSError as e:
            if on_skip:
                on_skip(current, e)
            continue

        to_visit = []
        for entry in subdirs:
            if entry.name in registry.skip_dirs:
                continue

            rule = find_match(registry, entry.name, entry.path)
            if rule is not None:
                records.append(MatchRecord(name=entry.name, path=entry.path, rule=rule))
                continue

            # Known name without its corroborating context: leave it alone entirely
            if registry.is_known_target_name(entry.name):
                continue

            to_visit.append(entry.path)

        # Reversed so the stack pops children in name order
        stack.extend(reversed(to_visit))

    return records
