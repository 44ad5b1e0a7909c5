"""Handle on a loaded native library."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Iterator, Optional


class Library:
    """The callable symbols bound from one compiled library.

    A Library is what an import of a unit evaluates to: one typed callable per symbol
    declared in the symbol manifest.
    """

    path: Path
    """The dynamic library the symbols were bound from."""

    symbols: Dict[str, Callable[..., Any]]
    """Bound callables keyed by exported symbol name."""

    _closer: Optional[Callable[[], None]]
    """Optional function releasing the underlying library handle."""

    def __init__(
        self,
        path: Path,
        symbols: Dict[str, Callable[..., Any]],
        closer: Optional[Callable[[], None]] = None,
    ) -> None:
        self.path = Path(path)
        self.symbols = dict(symbols)
        self._closer = closer

    def __getitem__(self, name: str) -> Callable[..., Any]:
        return self.symbols[name]

    def __contains__(self, name: object) -> bool:
        return name in self.symbols

    def __iter__(self) -> Iterator[str]:
        return iter(self.symbols)

    def __len__(self) -> int:
        return len(self.symbols)

    def __repr__(self) -> str:
        return f"Library(path={str(self.path)!r}, symbols={sorted(self.symbols)!r})"

    def exports(self) -> Dict[str, Any]:
        """Module exports of the library: every symbol by name, plus ``default`` mapping to
        all of them."""
        return {"default": dict(self.symbols), **self.symbols}

    def close(self) -> None:
        """Release the library. Calling it more than once has no additional effect."""
        self.symbols = {}
        if self._closer:
            try:
                self._closer()
            finally:
                self._closer = None
