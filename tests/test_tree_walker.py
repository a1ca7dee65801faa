from __future__ import annotations

import os
from pathlib import Path

import pytest

from free_dev_space.tree_walker import scan


def _relative(records, root: Path) -> set[str]:
    return {os.path.relpath(r.path, root.resolve()).replace(os.sep, "/") for r in records}


def test_end_to_end_scenario(make_tree) -> None:
    root = make_tree(
        "proj/node_modules/left-pad/index.js",
        "proj/ios/Pods/Alamofire/Source.swift",
        "proj/ios/NotPods/keep.txt",
        "proj/backend/target/classes/App.class",
        "proj/rustcrate/Cargo.toml",
        "proj/rustcrate/target/debug/app",
    )

    records = scan(str(root))

    assert _relative(records, root) == {"proj/node_modules", "proj/ios/Pods", "proj/rustcrate/target"}


def test_records_hold_absolute_paths_and_rules(make_tree) -> None:
    root = make_tree("web/node_modules/")

    (record,) = scan(str(root))

    assert os.path.isabs(record.path)
    assert record.name == "node_modules"
    assert record.rule.name == "node_modules"
    assert record.size == 0


def test_matched_directory_is_not_traversed(make_tree) -> None:
    root = make_tree("app/node_modules/pkg/node_modules/dep/index.js")

    assert _relative(scan(str(root)), root) == {"app/node_modules"}


def test_unconfirmed_known_name_is_opaque(make_tree) -> None:
    root = make_tree(
        "java/target/deep/nested/node_modules/x.js",
        "java/target/__pycache__/mod.pyc",
    )

    assert scan(str(root)) == []


def test_version_control_dirs_are_skipped(make_tree) -> None:
    root = make_tree(".git/node_modules/", "repo/.hg/dist/", "repo/.svn/")

    assert scan(str(root)) == []


def test_build_outside_android_app_is_not_matched_but_pruned(make_tree) -> None:
    root = make_tree(
        "mobile/android/app/build/outputs/app.apk",
        "backend/build/node_modules/",
    )

    assert _relative(scan(str(root)), root) == {"mobile/android/app/build"}


def test_files_are_never_matched(make_tree) -> None:
    root = make_tree("project/dist", "project/node_modules")

    assert scan(str(root)) == []


def test_scan_is_repeatable(make_tree) -> None:
    root = make_tree(
        "a/node_modules/",
        "b/ios/Pods/",
        "c/Gemfile",
        "c/vendor/bundle/",
        "d/.venv/",
        "e/android/app/.cxx/",
    )

    first = [(r.name, r.path) for r in scan(str(root))]
    second = [(r.name, r.path) for r in scan(str(root))]

    assert first == second
    assert len(first) == 5


def test_symlinked_directories_are_not_followed(make_tree) -> None:
    root = make_tree("real/node_modules/", "project/")
    try:
        os.symlink(root / "real", root / "project" / "link", target_is_directory=True)
        os.symlink(root / "real" / "node_modules", root / "project" / "node_modules", target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported")

    assert _relative(scan(str(root)), root) == {"real/node_modules"}


@pytest.mark.skipif(not hasattr(os, "geteuid") or os.geteuid() == 0, reason="needs a non-root POSIX user")
def test_unreadable_directory_is_skipped(make_tree) -> None:
    root = make_tree("locked/inner/node_modules/", "open/node_modules/")
    locked = root / "locked"
    locked.chmod(0o000)
    skipped = []
    try:
        records = scan(str(root), on_skip=lambda path, error: skipped.append(path))
    finally:
        locked.chmod(0o755)

    assert _relative(records, root) == {"open/node_modules"}
    assert skipped == [str(locked.resolve())]


def test_unreadable_root_yields_nothing(tmp_path: Path) -> None:
    missing = tmp_path / "gone"
    skipped = []

    assert scan(str(missing), on_skip=lambda path, error: skipped.append(path)) == []
    assert skipped == [str(missing.resolve())]
