"""Tests for compile/fingerprint.py."""

import hashlib
import sys
from pathlib import Path

import pytest

from rs_import.compile import fingerprint_file, fingerprint_tree, fingerprint_unit, resolve
from rs_import.errors import NotFoundError


def _make_crate(root: Path, write_files) -> Path:
    crate = root / "crate"
    write_files(
        crate,
        {
            "Cargo.toml": '[package]\nname = "mylib"\nversion = "0.1.0"\n',
            "src/lib.rs": "pub fn one() -> i32 { 1 }\n",
            "src/nested/deep/mod.rs": "pub fn two() -> i32 { 2 }\n",
            "target/release/libmylib.so": "binary",
        },
    )
    return crate


def test_fingerprint_file(tmp_path: Path):
    path = tmp_path / "hello.rs"
    path.write_bytes(b"fn main() {}")

    fingerprint = fingerprint_file(path)

    assert fingerprint == [hashlib.sha256(b"fn main() {}").hexdigest()]


def test_fingerprint_file_missing(tmp_path: Path):
    with pytest.raises(NotFoundError):
        fingerprint_file(tmp_path / "missing.rs")


def test_fingerprint_file_changes_with_one_byte(tmp_path: Path):
    path = tmp_path / "hello.rs"
    path.write_bytes(b"fn main() {}")
    before = fingerprint_file(path)
    path.write_bytes(b"fn main() {};")
    assert fingerprint_file(path) != before


def test_fingerprint_tree_idempotent(tmp_path: Path, write_files):
    crate = _make_crate(tmp_path, write_files)
    assert fingerprint_tree(crate, [crate / "target"]) == fingerprint_tree(
        crate, [crate / "target"]
    )


def test_fingerprint_tree_tracks_every_file(tmp_path: Path, write_files):
    crate = _make_crate(tmp_path, write_files)

    fingerprint = fingerprint_tree(crate, [crate / "target"])

    # Cargo.toml, src/lib.rs, src/nested/deep/mod.rs
    assert len(fingerprint) == 3
    assert fingerprint_file(crate / "src" / "nested" / "deep" / "mod.rs")[0] in fingerprint


def test_fingerprint_tree_detects_tracked_change(tmp_path: Path, write_files):
    crate = _make_crate(tmp_path, write_files)
    before = fingerprint_tree(crate, [crate / "target"])

    (crate / "src" / "nested" / "deep" / "mod.rs").write_text("pub fn two() -> i32 { 3 }\n")

    assert fingerprint_tree(crate, [crate / "target"]) != before


def test_fingerprint_tree_ignores_excluded_change(tmp_path: Path, write_files):
    crate = _make_crate(tmp_path, write_files)
    before = fingerprint_tree(crate, [crate / "target"])

    (crate / "target" / "release" / "libmylib.so").write_text("rebuilt binary")
    (crate / "target" / "debug").mkdir()
    (crate / "target" / "debug" / "new.o").write_text("object")

    assert fingerprint_tree(crate, [crate / "target"]) == before


def test_fingerprint_tree_excluded_root(tmp_path: Path, write_files):
    crate = _make_crate(tmp_path, write_files)
    assert fingerprint_tree(crate, [crate]) == []


def test_fingerprint_tree_excludes_nested_paths(tmp_path: Path, write_files):
    crate = _make_crate(tmp_path, write_files)
    nested = crate / "src" / "nested"
    before = fingerprint_tree(crate, [crate / "target", nested])

    (nested / "deep" / "mod.rs").write_text("changed")

    assert fingerprint_tree(crate, [crate / "target", nested]) == before
    assert len(before) == 2


def test_fingerprint_tree_without_recursion(tmp_path: Path, write_files):
    crate = _make_crate(tmp_path, write_files)
    shallow = fingerprint_tree(crate, recurse=False)

    assert shallow == fingerprint_file(crate / "Cargo.toml")

    (crate / "src" / "lib.rs").write_text("changed")
    assert fingerprint_tree(crate, recurse=False) == shallow


def test_fingerprint_tree_recursion_is_unbounded(tmp_path: Path, write_files):
    """Once the top level recurses, every level below does too."""
    write_files(tmp_path / "tree", {"a/b/c/d/e.rs": "deep"})
    tree = tmp_path / "tree"

    before = fingerprint_tree(tree, recurse=True)
    assert len(before) == 1
    assert fingerprint_tree(tree, recurse=False) == []

    (tree / "a" / "b" / "c" / "d" / "e.rs").write_text("deeper")
    assert fingerprint_tree(tree, recurse=True) != before


def test_fingerprint_tree_missing(tmp_path: Path):
    with pytest.raises(NotFoundError):
        fingerprint_tree(tmp_path / "missing")


def test_fingerprint_unit_rustc(project_root: Path, write_files):
    write_files(project_root, {"hello.rs": "fn main() {}"})
    unit = resolve(project_root, "build", "hello.rs")
    assert fingerprint_unit(unit) == fingerprint_file(project_root / "hello.rs")


def test_fingerprint_unit_cargo_excludes_target(project_root: Path, write_files):
    crate = _make_crate(project_root, write_files)
    unit = resolve(project_root, "build", "crate/Cargo.toml")

    before = fingerprint_unit(unit)
    assert before == fingerprint_tree(crate, [crate / "target"])

    (crate / "target" / "release" / "libmylib.so").write_text("rebuilt")
    assert fingerprint_unit(unit) == before


def test_fingerprint_unit_root_crate_excludes_output_dir(project_root: Path, write_files):
    write_files(
        project_root,
        {
            "Cargo.toml": '[package]\nname = "rootlib"\n',
            "src/lib.rs": "pub fn one() -> i32 { 1 }\n",
            "out/hash/cargo/rootlib.hash": "[]",
        },
    )
    unit = resolve(project_root, "out", "Cargo.toml")

    before = fingerprint_unit(unit)
    assert len(before) == 2

    write_files(project_root, {"out/__rsconfig.hash": "{}", "out/libs/cargo/librootlib.so": "x"})
    assert fingerprint_unit(unit) == before


if __name__ == "__main__":
    pytest.main(sys.argv)
