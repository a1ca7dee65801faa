#!/usr/bin/env python3
"""
free-dev-space run configuration

Collects the settings for a single run from the parsed command line and
the environment. Nothing is persisted between runs.
"""

import argparse
import os
import pathlib
from dataclasses import asdict, dataclass, field
from typing import Mapping

from .size_accountant import DU_TIMEOUT
from .target_rules import RULES_FILE


@dataclass
class DevSpaceConfig:
    """Settings for one free-dev-space invocation"""

    root_path: pathlib.Path = field(default_factory=lambda: pathlib.Path(".").resolve())
    dry_run: bool = False
    assume_yes: bool = False
    verbose: bool = False
    use_color: bool = True
    du_timeout: float = DU_TIMEOUT
    rules_file: pathlib.Path = RULES_FILE

    def to_dict(self) -> dict:
        """Convert to a display mapping"""
        data = asdict(self)
        data["root_path"] = str(self.root_path)
        data["rules_file"] = str(self.rules_file)
        return data

    @classmethod
    def from_args(cls, args: argparse.Namespace, environ: Mapping[str, str] = os.environ) -> "DevSpaceConfig":
        """Create from parsed arguments; NO_COLOR in *environ* disables color"""
        return cls(
            root_path=pathlib.Path(getattr(args, "path", None) or ".").resolve(),
            dry_run=getattr(args, "dry_run", False),
            assume_yes=getattr(args, "yes", False),
            verbose=getattr(args, "verbose", False),
            use_color="NO_COLOR" not in environ,
            du_timeout=getattr(args, "du_timeout", None) or DU_TIMEOUT,
            rules_file=getattr(args, "rules", None) or RULES_FILE,
        )
