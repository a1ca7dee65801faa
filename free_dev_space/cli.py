#!/usr/bin/env python3
"""
free-dev-space — clean regenerable dev artifacts and reclaim disk space

Scans a directory tree for build and dependency directories that can be
regenerated (node_modules, Pods, Rust target/, Android build/, .venv, ...),
reports their sizes and deletes them after confirmation.

Ambiguous names are only matched with corroborating context: `build` must
sit in android/app, `target` needs a Cargo.toml next to it and `vendor`
needs a Gemfile. Such directories without their context are left alone
and not scanned.

Usage:
    free-dev-space ~/dev               # Scan, confirm and delete
    free-dev-space . --dry-run         # Only report what would be deleted
    free-dev-space ~/projects -y       # Delete without asking
"""

import argparse
import pathlib
import sys
from typing import Optional

from rich.markup import escape

from . import __version__
from .auxiliary import describe_targets, format_bytes
from .console_ui import ConsoleUI
from .deletion_executor import DeletionExecutor
from .dev_space_config import DevSpaceConfig
from .size_accountant import DuSizeStrategy, SizeAccountant, compute_sizes
from .target_rules import DEFAULT_REGISTRY, RULES_FILE, RuleRegistry, load_rules
from .tree_walker import MatchRecord, scan


EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INTERRUPTED = 130


class FreeDevSpace:
    """Main application class for free-dev-space"""

    def __init__(self, config: DevSpaceConfig, ui: Optional[ConsoleUI] = None):
        self.config = config
        self.ui = ui or ConsoleUI(use_color=config.use_color)
        if config.rules_file == RULES_FILE:
            self.registry: RuleRegistry = DEFAULT_REGISTRY
        else:
            self.registry = load_rules(config.rules_file)

    # -- validation ----------------------------------------------------------

    def validate_root(self) -> bool:
        root = self.config.root_path
        if not root.exists():
            self.ui.print_error(f"✗ Path not found: {escape(str(root))}")
            return False
        if not root.is_dir():
            self.ui.print_error(f"✗ Not a directory: {escape(str(root))}")
            return False
        return True

    # -- pipeline steps ------------------------------------------------------

    def _report_skipped(self, path: str, error: OSError):
        if self.config.verbose:
            self.ui.print_progress(f"  skipped unreadable {escape(path)}: {escape(str(error.strerror or error))}")

    def scan(self) -> list[MatchRecord]:
        root = str(self.config.root_path)
        with self.ui.create_activity_progress() as progress:
            progress.add_task("Scanning...", total=None)
            records = scan(root, self.registry, on_skip=self._report_skipped)
        return records

    def measure(self, records: list[MatchRecord]) -> list[MatchRecord]:
        accountant = SizeAccountant(primary=DuSizeStrategy(timeout=self.config.du_timeout))
        with self.ui.create_progress() as progress:
            task = progress.add_task("Calculating sizes...", total=len(records))

            def progress_update(message):
                progress.update(task, description=escape(message), advance=1)

            compute_sizes(records, accountant, progress_update)
        return records

    def delete(self, records: list[MatchRecord]):
        with self.ui.create_progress() as progress:
            task = progress.add_task("Deleting...", total=len(records))

            def progress_update(message):
                progress.update(task, description=escape(message), advance=1)

            report = DeletionExecutor(progress_callback=progress_update).delete_all(records)
        return report

    # -- main entry point ----------------------------------------------------

    def run(self) -> int:
        self.ui.print_header(
            f"free-dev-space v{__version__}", "Clean regenerable dev artifacts and reclaim disk space"
        )

        if not self.validate_root():
            return EXIT_ERROR

        if self.config.verbose:
            self.ui.show_configuration(self.config.to_dict())

        root = str(self.config.root_path)
        self.ui.print_progress(f"Scanning {escape(root)}")

        records = self.scan()
        if not records:
            self.ui.print_success("Nothing to clean, no regenerable artifacts found.")
            return EXIT_OK

        self.measure(records)
        self.ui.show_matches(records, root)

        if self.config.dry_run:
            self.ui.print_warning("Dry run, nothing was deleted.")
            return EXIT_OK

        if not self.config.assume_yes:
            total = format_bytes(sum(r.size for r in records))
            if not self.ui.confirm(f"Delete {len(records)} directories ({total})?", default=False):
                self.ui.print_info("No changes made.")
                return EXIT_OK

        report = self.delete(records)
        self.ui.show_deletion_summary(report, root)
        return EXIT_OK


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="free-dev-space",
        description="Clean regenerable dev artifacts and reclaim disk space",
        epilog=f"What it cleans: {describe_targets(DEFAULT_REGISTRY)}",
    )
    parser.add_argument("path", nargs="?", default=".", help="Directory to scan (default: current directory)")
    parser.add_argument("-d", "--dry-run", action="store_true", help="Preview what would be deleted")
    parser.add_argument("-y", "--yes", action="store_true", help="Skip confirmation prompt")
    parser.add_argument("-v", "--version", action="version", version=__version__)
    parser.add_argument("--verbose", action="store_true", help="Show configuration and skipped directories")
    parser.add_argument(
        "--rules", type=pathlib.Path, default=None, metavar="FILE", help="Load target rules from a TOML file"
    )
    parser.add_argument(
        "--du-timeout", type=float, default=None, metavar="SECONDS", help="Time limit for the fast du size check"
    )
    return parser


def main(argv: Optional[list[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)
    config = DevSpaceConfig.from_args(args)
    ui = ConsoleUI(use_color=config.use_color)

    try:
        app = FreeDevSpace(config, ui)
        exit_code = app.run()
    except KeyboardInterrupt:
        ui.print_warning("\nInterrupted.")
        exit_code = EXIT_INTERRUPTED
    except Exception as e:
        ui.print_error(f"Error: {escape(str(e))}")
        exit_code = EXIT_ERROR

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
