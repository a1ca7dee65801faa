#!/usr/bin/env python3
"""
Auxiliary formatting helpers for free-dev-space

Byte and path formatting shared by the CLI and its help text.
"""

import os
import pathlib
from typing import Optional

from .target_rules import RuleRegistry, Strategy


def format_bytes(size_bytes: int) -> str:
    """Format byte size into human-readable string

    Args:
        size_bytes: Size in bytes to format

    Returns:
        Formatted string like "1.2 GiB", "345.0 MiB", "12.0 KiB", or "789 B"
    """
    if size_bytes >= 1024**3:
        return f"{size_bytes / (1024**3):.1f} GiB"
    if size_bytes >= 1024**2:
        return f"{size_bytes / (1024**2):.1f} MiB"
    if size_bytes >= 1024:
        return f"{size_bytes / 1024:.1f} KiB"
    return f"{size_bytes} B"


def format_path_for_display(path: str, root: Optional[str] = None, home_path: Optional[str] = None) -> str:
    """Format a match path for display

    Paths below *root* are shown relative to it; anything else has the
    home directory replaced by ~.
    """
    if root:
        try:
            relative = os.path.relpath(path, root)
        except ValueError:
            # Different drives on Windows
            relative = None
        if relative and relative != os.pardir and not relative.startswith(os.pardir + os.sep):
            return relative

    if home_path is None:
        home_path = str(pathlib.Path.home())
    if path == home_path or path.startswith(home_path + os.sep):
        return "~" + path[len(home_path) :]
    return path


def describe_rule_context(rule) -> str:
    """Short note on what confirms a rule, e.g. "(ios)" or "(Cargo.toml)"."""
    if rule.strategy is Strategy.PARENT_NAME:
        return f"({rule.parent})"
    if rule.strategy is Strategy.PARENT_PATH:
        return f"({'/'.join(rule.parent_path)})"
    if rule.strategy is Strategy.SIBLING_FILE:
        return f"({rule.sibling})"
    return ""


def describe_targets(registry: RuleRegistry) -> str:
    """Comma-separated list of target names with their confirming context"""
    parts = []
    for rule in registry.rules:
        context = describe_rule_context(rule)
        parts.append(f"{rule.name} {context}" if context else rule.name)
    return ", ".join(parts)
