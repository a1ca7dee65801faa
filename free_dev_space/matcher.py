#!/usr/bin/env python3
"""
Matcher for free-dev-space

Decides whether a candidate directory satisfies a target rule. Short,
ambiguous names (build, target, vendor) only match with corroborating
context around them; unambiguous names match anywhere.
"""

import os
from pathlib import PurePath
from typing import Optional

from .target_rules import RuleRegistry, Strategy, TargetRule


def matches(rule: TargetRule, directory_path: str) -> bool:
    """Return True if the directory at *directory_path* satisfies *rule*.

    *directory_path* is the candidate directory itself, not its parent.
    """
    if rule.strategy is Strategy.DIRECT:
        return True

    if rule.strategy is Strategy.PARENT_NAME:
        return PurePath(directory_path).parent.name == rule.parent

    if rule.strategy is Strategy.PARENT_PATH:
        parts = PurePath(directory_path).parts
        if len(parts) < 3:
            return False
        return tuple(parts[-3:-1]) == tuple(rule.parent_path)

    if rule.strategy is Strategy.SIBLING_FILE:
        # Existence only; os.path.exists reports False for any OSError
        sibling = os.path.join(os.path.dirname(directory_path), rule.sibling)
        return os.path.exists(sibling)

    raise ValueError(f"Unhandled strategy: {rule.strategy}")


def find_match(registry: RuleRegistry, name: str, directory_path: str) -> Optional[TargetRule]:
    """Return the first rule for *name* that *directory_path* satisfies, if any."""
    for rule in registry.rules_for(name):
        if matches(rule, directory_path):
            return rule
    return None
