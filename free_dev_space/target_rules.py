#!/usr/bin/env python3
"""
Target rule registry for free-dev-space

Defines which directory names are regenerable build/dependency artifacts
and how each one has to be confirmed before it counts as a target.
Rules are loaded once from target_rules.toml and never change afterwards.
"""

from dataclasses import dataclass
from importlib import resources
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Optional

import tomllib

RULES_FILE = resources.files(__package__) / "target_rules.toml"

DEFAULT_SKIP_DIRS = frozenset({".git", ".svn", ".hg"})


class RuleConfigError(ValueError):
    """Raised when the rule table is malformed"""


class Strategy(Enum):
    DIRECT = "direct"
    PARENT_NAME = "parent_name"
    PARENT_PATH = "parent_path"
    SIBLING_FILE = "sibling_file"


@dataclass(frozen=True)
class TargetRule:
    name: str
    strategy: Strategy
    parent: Optional[str] = None
    parent_path: Optional[tuple[str, str]] = None
    sibling: Optional[str] = None
    description: str = ""

    def __post_init__(self):
        required = {
            Strategy.DIRECT: None,
            Strategy.PARENT_NAME: "parent",
            Strategy.PARENT_PATH: "parent_path",
            Strategy.SIBLING_FILE: "sibling",
        }[self.strategy]

        for param in ("parent", "parent_path", "sibling"):
            present = getattr(self, param) is not None
            if param == required and not present:
                raise RuleConfigError(f"Rule '{self.name}' ({self.strategy.value}) requires '{param}'")
            if param != required and present:
                raise RuleConfigError(f"Rule '{self.name}' ({self.strategy.value}) does not take '{param}'")

        if self.parent_path is not None and len(self.parent_path) != 2:
            raise RuleConfigError(f"Rule '{self.name}': parent_path must be [grandparent, parent]")


class RuleRegistry:
    """Immutable lookup table of target rules keyed by directory name"""

    def __init__(self, rules: list[TargetRule], skip_dirs: frozenset[str] = DEFAULT_SKIP_DIRS):
        index: dict[str, set[TargetRule]] = {}
        for rule in rules:
            if rule.name in index:
                raise RuleConfigError(f"Duplicate rule for '{rule.name}'")
            index.setdefault(rule.name, set()).add(rule)

        self._rules = tuple(rules)
        self._index = MappingProxyType({name: frozenset(group) for name, group in index.items()})
        self.skip_dirs = frozenset(skip_dirs)

    @property
    def rules(self) -> tuple[TargetRule, ...]:
        return self._rules

    def rules_for(self, name: str) -> frozenset[TargetRule]:
        """Return all rules whose name equals *name* (empty if none)."""
        return self._index.get(name, frozenset())

    def is_known_target_name(self, name: str) -> bool:
        return name in self._index

    def __len__(self) -> int:
        return len(self._rules)


def _rule_from_entry(entry: dict) -> TargetRule:
    try:
        name = entry["name"]
        strategy = Strategy(entry.get("strategy", "direct"))
    except KeyError as e:
        raise RuleConfigError(f"Rule entry is missing {e}") from e
    except ValueError as e:
        raise RuleConfigError(f"Rule '{entry.get('name')}': {e}") from e

    parent_path = entry.get("parent_path")
    return TargetRule(
        name=name,
        strategy=strategy,
        parent=entry.get("parent"),
        parent_path=tuple(parent_path) if parent_path is not None else None,
        sibling=entry.get("sibling"),
        description=entry.get("description", ""),
    )


def load_rules(path: Path = RULES_FILE) -> RuleRegistry:
    """Load target rules and the skip list from a TOML file."""
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise RuleConfigError(f"Cannot parse {path}: {e}") from e

    rules = [_rule_from_entry(entry) for entry in data.get("rules", [])]
    skip_dirs = frozenset(data.get("skip_dirs", DEFAULT_SKIP_DIRS))
    return RuleRegistry(rules, skip_dirs)


# Load once at import time
DEFAULT_REGISTRY = load_rules()
