"""Symbol manifest: the native functions exposed by each imported unit."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

from pydantic import Field, RootModel, field_validator

from .utils import BaseModelWithDocstrings

_TYPE_ALIASES = {"int": "i32", "float": "f32", "double": "f64", "pointer": "ptr"}


class FFIType(str, Enum):
    """Type tags usable in a native function signature."""

    VOID = "void"
    BOOL = "bool"
    CHAR = "char"
    I8 = "i8"
    U8 = "u8"
    I16 = "i16"
    U16 = "u16"
    I32 = "i32"
    U32 = "u32"
    I64 = "i64"
    U64 = "u64"
    F32 = "f32"
    F64 = "f64"
    ISIZE = "isize"
    USIZE = "usize"
    PTR = "ptr"
    CSTRING = "cstring"


def _normalize_type(value: Any) -> Any:
    if isinstance(value, str):
        return _TYPE_ALIASES.get(value, value)
    return value


class FunctionSignature(BaseModelWithDocstrings):
    """Argument and return types of one exported native function."""

    args: List[FFIType] = Field(default_factory=list)
    """Argument types, in call order."""
    returns: FFIType = FFIType.VOID
    """Return type. ``void`` for functions returning nothing."""

    @field_validator("args", mode="before")
    @classmethod
    def _normalize_args(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [_normalize_type(v) for v in value]
        return value

    @field_validator("returns", mode="before")
    @classmethod
    def _normalize_returns(cls, value: Any) -> Any:
        return _normalize_type(value)

    @field_validator("args")
    @classmethod
    def _reject_void_args(cls, value: List[FFIType]) -> List[FFIType]:
        if FFIType.VOID in value:
            raise ValueError("'void' is only valid as a return type")
        return value


SymbolTable = Dict[str, FunctionSignature]
"""Mapping from exported symbol name to its signature."""


class SymbolManifest(RootModel[Dict[str, SymbolTable]]):
    """Mapping from a project-relative source path (``src/hello.rs``, ``crate/Cargo.toml``)
    to the symbols that unit exposes."""

    root: Dict[str, SymbolTable] = Field(default_factory=dict)

    def get(self, key: str) -> Optional[SymbolTable]:
        return self.root.get(key)

    def keys(self) -> List[str]:
        return list(self.root.keys())

    def __iter__(self) -> Iterator[str]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __contains__(self, key: object) -> bool:
        return key in self.root
