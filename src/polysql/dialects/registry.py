"""
Process-wide lookup of dialect descriptors by driver name.
"""

from __future__ import annotations

from threading import RLock
from typing import Dict, Iterable, List

from ..errors import ConfigurationError, UnsupportedDriver
from ..utils.logging import get_logger
from .base import Dialect
from .firebird import FIREBIRD
from .mysql import MYSQL
from .oracle import ORACLE
from .postgres import POSTGRES
from .sqlite import SQLITE
from .sqlsrv import SQLSRV

BUILTIN_DIALECTS = (MYSQL, POSTGRES, SQLITE, SQLSRV, ORACLE, FIREBIRD)


class DialectRegistry:
    """
    Maps canonical names and aliases to :class:`Dialect` descriptors.

    Lookups are safe from any thread. Registration is meant to happen once at
    startup.
    """

    def __init__(self, dialects: Iterable[Dialect] = ()) -> None:
        self._lock = RLock()
        self._dialects: Dict[str, Dialect] = {}
        self._names: Dict[str, str] = {}
        self.logger = get_logger("dialects")
        for dialect in dialects:
            self.register(dialect)

    def register(self, dialect: Dialect, *, replace: bool = False) -> None:
        with self._lock:
            for name in dialect.names:
                key = name.lower()
                owner = self._names.get(key)
                if owner is not None and owner != dialect.name and not replace:
                    raise ConfigurationError(
                        f"Driver name '{name}' is already registered to '{owner}'"
                    )
            if dialect.name in self._dialects and not replace:
                raise ConfigurationError(f"Dialect '{dialect.name}' is already registered")
            self._dialects[dialect.name] = dialect
            for name in dialect.names:
                self._names[name.lower()] = dialect.name
        self.logger.debug("Registered dialect %s (aliases: %s)", dialect.name, dialect.aliases)

    def get(self, name: str) -> Dialect:
        key = name.lower() if isinstance(name, str) else name
        with self._lock:
            canonical = self._names.get(key)
            if canonical is None:
                raise UnsupportedDriver(str(name), self._dialects)
            return self._dialects[canonical]

    def resolve(self, dialect: Dialect | str) -> Dialect:
        if isinstance(dialect, Dialect):
            return dialect
        return self.get(dialect)

    def available(self) -> List[str]:
        with self._lock:
            return sorted(self._dialects)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        with self._lock:
            return name.lower() in self._names


registry = DialectRegistry(BUILTIN_DIALECTS)


def get_dialect(name: str) -> Dialect:
    return registry.get(name)


def resolve_dialect(dialect: Dialect | str) -> Dialect:
    return registry.resolve(dialect)


def register_dialect(dialect: Dialect, *, replace: bool = False) -> None:
    registry.register(dialect, replace=replace)


def available_dialects() -> List[str]:
    return registry.available()


def quote(name: str, dialect: Dialect | str) -> str:
    return resolve_dialect(dialect).quote_identifier(name)
