"""Tests for compile/registry.py."""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from rs_import.compile import Builder, BuilderRegistry, UnitKind, resolve
from rs_import.compile import registry as registry_module
from rs_import.compile.builders import CargoBuilder, RustcBuilder
from rs_import.data import RsConfig
from rs_import.errors import BuildError


def _create_mock_builder(kind: UnitKind) -> MagicMock:
    """Create a mock builder for testing dispatch logic."""
    builder = MagicMock(spec=Builder)
    builder.kind = kind
    return builder


def test_dispatch_by_kind(tmp_path: Path):
    rustc = _create_mock_builder(UnitKind.RUSTC)
    cargo = _create_mock_builder(UnitKind.CARGO)
    registry = BuilderRegistry([rustc, cargo])
    unit = resolve(tmp_path, "build", "a.rs")
    config = RsConfig()

    registry.build(unit, config)

    rustc.build.assert_called_once_with(unit, config)
    cargo.build.assert_not_called()


def test_missing_builder(tmp_path: Path):
    registry = BuilderRegistry([_create_mock_builder(UnitKind.CARGO)])
    with pytest.raises(BuildError):
        registry.build(resolve(tmp_path, "build", "a.rs"), RsConfig())


def test_later_builder_replaces_earlier():
    first = _create_mock_builder(UnitKind.RUSTC)
    second = _create_mock_builder(UnitKind.RUSTC)
    assert BuilderRegistry([first, second]).get_builder(UnitKind.RUSTC) is second


def test_empty_registry():
    with pytest.raises(ValueError):
        BuilderRegistry([])


def test_get_instance(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(registry_module.BuilderRegistry, "_instance", None)

    registry = BuilderRegistry.get_instance()

    assert registry is BuilderRegistry.get_instance()
    assert isinstance(registry.get_builder(UnitKind.RUSTC), RustcBuilder)
    assert isinstance(registry.get_builder(UnitKind.CARGO), CargoBuilder)


if __name__ == "__main__":
    pytest.main(sys.argv)
