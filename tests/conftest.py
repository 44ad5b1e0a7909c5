import logging
import shutil
import subprocess
import tomllib
from pathlib import Path
from typing import Dict, List, Optional, Set

import pytest

import rs_import.logging as rs_logging
from rs_import.env import get_dynlib_prefix, get_dynlib_suffix


def _toolchain_available(name: str) -> bool:
    """Check if a toolchain executable is on PATH.

    Returns
    -------
    bool
        True if the executable can be found, False otherwise.
    """
    return shutil.which(name) is not None


def pytest_collection_modifyitems(config: pytest.Config, items: List[pytest.Item]) -> None:
    """Modify pytest collection to skip tests that need a Rust toolchain that is not
    installed."""
    for marker, toolchain in (("requires_rustc", "rustc"), ("requires_cargo", "cargo")):
        if _toolchain_available(toolchain):
            continue
        skip = pytest.mark.skip(reason=f"{toolchain} not available on PATH, skip test")
        for item in items:
            if any(item.iter_markers(name=marker)):
                item.add_marker(skip)


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Use an isolated temporary directory as the project root.

    This fixture sets RS_IMPORT_ROOT to a fresh directory for each test, so hash records
    and artifacts never leak between tests.
    """
    root = tmp_path / "project"
    root.mkdir()
    monkeypatch.setenv("RS_IMPORT_ROOT", str(root))
    return root


def _write_files(root: Path, files: Dict[str, str]) -> None:
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)


@pytest.fixture
def write_files():
    """Helper writing text files below a root directory, creating directories as needed."""
    return _write_files


def _option(cmd: List[str], name: str) -> str:
    prefix = f"--{name}="
    return next(arg[len(prefix) :] for arg in cmd if arg.startswith(prefix))


class FakeToolchain:
    """Stand-in for rustc and cargo that records invocations and writes fake libraries
    where the real tools would."""

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.returncode = 0
        self.emit_outputs = True
        self.missing: Set[str] = set()
        self.rustc_prefix = get_dynlib_prefix()

    def which(self, name: str, *args, **kwargs) -> Optional[str]:
        if name in self.missing:
            return None
        return f"/fake/bin/{name}"

    def run(self, cmd, *args, **kwargs) -> subprocess.CompletedProcess:
        cmd = [str(c) for c in cmd]
        self.calls.append(cmd)
        if self.returncode == 0 and self.emit_outputs:
            self._emit(cmd)
        return subprocess.CompletedProcess(cmd, self.returncode)

    def tools_called(self) -> List[str]:
        return [Path(cmd[0]).name for cmd in self.calls]

    def _emit(self, cmd: List[str]) -> None:
        tool = Path(cmd[0]).name
        if tool == "rustc":
            out_dir = Path(_option(cmd, "out-dir"))
            name = _option(cmd, "crate-name")
            file_name = f"{self.rustc_prefix}{name}.{get_dynlib_suffix()}"
            (out_dir / file_name).write_bytes(b"fake rustc output")
        elif tool == "cargo":
            manifest = Path(_option(cmd, "manifest-path"))
            with open(manifest, "rb") as f:
                data = tomllib.load(f)
            lib_name = data.get("lib", {}).get("name") or data["package"]["name"].replace("-", "_")
            release = manifest.parent / "target" / "release"
            release.mkdir(parents=True, exist_ok=True)
            file_name = f"{get_dynlib_prefix()}{lib_name}.{get_dynlib_suffix()}"
            (release / file_name).write_bytes(b"fake cargo output")


@pytest.fixture
def fake_toolchain(monkeypatch: pytest.MonkeyPatch) -> FakeToolchain:
    """Replace toolchain lookup and process spawning with a FakeToolchain."""
    fake = FakeToolchain()
    monkeypatch.setattr(shutil, "which", fake.which)
    monkeypatch.setattr(subprocess, "run", fake.run)
    return fake


@pytest.fixture(autouse=True)
def _isolated_logging(monkeypatch: pytest.MonkeyPatch):
    """Drop handlers installed by configure_logging, which would otherwise keep writing to
    the stream captured by a finished test."""
    monkeypatch.setattr(rs_logging, "_handler", None)
    logger = logging.getLogger("rs_import")
    level = logger.level
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(level)
