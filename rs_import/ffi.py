"""Binding of native symbols with ctypes."""

from __future__ import annotations

import ctypes
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Type, Union

from rs_import.compile.library import Library
from rs_import.data import FFIType, FunctionSignature
from rs_import.errors import LoadError, NotFoundError
from rs_import.logging import get_logger

logger = get_logger(__name__)

_CTYPES: Dict[FFIType, Optional[Type[Any]]] = {
    FFIType.VOID: None,
    FFIType.BOOL: ctypes.c_bool,
    FFIType.CHAR: ctypes.c_char,
    FFIType.I8: ctypes.c_int8,
    FFIType.U8: ctypes.c_uint8,
    FFIType.I16: ctypes.c_int16,
    FFIType.U16: ctypes.c_uint16,
    FFIType.I32: ctypes.c_int32,
    FFIType.U32: ctypes.c_uint32,
    FFIType.I64: ctypes.c_int64,
    FFIType.U64: ctypes.c_uint64,
    FFIType.F32: ctypes.c_float,
    FFIType.F64: ctypes.c_double,
    FFIType.ISIZE: ctypes.c_ssize_t,
    FFIType.USIZE: ctypes.c_size_t,
    FFIType.PTR: ctypes.c_void_p,
    FFIType.CSTRING: ctypes.c_char_p,
}


def to_ctype(tag: FFIType) -> Optional[Type[Any]]:
    """Map a signature type tag to its ctypes type (None for ``void``)."""
    return _CTYPES[FFIType(tag)]


def bind_symbol(
    handle: ctypes.CDLL, name: str, signature: FunctionSignature
) -> Callable[..., Any]:
    """Look up a symbol in an opened library and give it the declared signature.

    Raises
    ------
    LoadError
        If the library does not export the symbol.
    """
    try:
        fn = getattr(handle, name)
    except AttributeError as e:
        raise LoadError(f"Symbol '{name}' not found: {e}") from e
    fn.argtypes = [to_ctype(arg) for arg in signature.args]
    fn.restype = to_ctype(signature.returns)
    return fn


def dlopen(path: Union[str, Path], signatures: Mapping[str, FunctionSignature]) -> Library:
    """Open a dynamic library and bind every declared symbol.

    Parameters
    ----------
    path : Union[str, Path]
        The compiled library.
    signatures : Mapping[str, FunctionSignature]
        Symbols to bind and their signatures.

    Returns
    -------
    Library
        The bound symbols.

    Raises
    ------
    NotFoundError
        If the library file does not exist.
    LoadError
        If the library cannot be opened or a symbol is missing.
    """
    path = Path(path)
    if not path.is_file():
        raise NotFoundError(f"The library could not be found: {path}")

    try:
        handle = ctypes.CDLL(str(path))
    except OSError as e:
        raise LoadError(f"Failed to load library '{path}': {e}") from e

    symbols = {name: bind_symbol(handle, name, sig) for name, sig in signatures.items()}
    logger.debug(f"Loaded {len(symbols)} symbol(s) from {path}")
    return Library(path, symbols)
