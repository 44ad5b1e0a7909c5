"""Concrete builder implementations for each kind of import unit."""

from .cargo_builder import CargoBuilder
from .rustc_builder import RustcBuilder

__all__ = ["CargoBuilder", "RustcBuilder"]
