"""
Process-wide symbol table backing the `atom` cast targets.

Python has no atoms, so a symbol is an interned identifier string. The
safe `atom` type only accepts symbols already present in this table; the
`unsafe_atom` type mints new ones.
"""

import sys
import threading
from typing import Iterable


class SymbolTable:
    """Thread-safe set of known symbols."""

    def __init__(self, symbols: Iterable[str] = ()):
        self._lock = threading.Lock()
        self._symbols = frozenset(sys.intern(s) for s in symbols)

    def __contains__(self, name: str) -> bool:
        return name in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)

    def register(self, *names: str) -> None:
        """Add symbols to the table."""
        for name in names:
            if not isinstance(name, str) or not name.isidentifier():
                raise ValueError(f"Invalid symbol: {name!r}")
        with self._lock:
            # Copy-on-write keeps membership checks lock free
            self._symbols = self._symbols | {sys.intern(n) for n in names}

    def lookup(self, name: str) -> str | None:
        """Return the interned symbol when known."""
        if name in self._symbols:
            return sys.intern(name)
        return None

    def mint(self, name: str) -> str:
        """Return the symbol for `name`, adding it when unknown."""
        known = self.lookup(name)
        if known is not None:
            return known
        self.register(name)
        return sys.intern(name)


symbols = SymbolTable()


def register_symbols(*names: str) -> None:
    """Declare symbols the safe `atom` type is allowed to produce."""
    symbols.register(*names)
