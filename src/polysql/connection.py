"""
Connection boundary for polysql.

polysql never opens connections itself. Callers hand in any object that
satisfies :class:`Connection`; the configuration helpers here only decide
which dialect a named connection speaks.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from threading import RLock
from typing import Any, Dict, List, Optional, Protocol, Sequence
from urllib.parse import parse_qs, urlencode, urlparse

from .dialects import Dialect, get_dialect
from .errors import ConfigurationError, UnsupportedDriver
from .utils.logging import get_logger


class Cursor(Protocol):
    rowcount: int
    lastrowid: Any
    description: Any

    def fetchall(self) -> Sequence[Any]: ...

    def fetchone(self) -> Any: ...


class Connection(Protocol):
    """
    Anything able to run one parameterized statement.

    ``dialect`` is the driver name the connection speaks (``"mysql"``,
    ``"pgsql"``...). Statements use ``?`` placeholders.
    """

    @property
    def dialect(self) -> str: ...

    def execute(self, sql: str, params: Sequence[Any] = ()) -> Cursor: ...


@dataclass
class DSN:
    scheme: str
    username: Optional[str]
    password: Optional[str]
    host: Optional[str]
    port: Optional[int]
    database: Optional[str]
    path: str
    query: dict[str, str] = field(default_factory=dict)

    @property
    def driver(self) -> str:
        return self.scheme.split("+", 1)[0]

    def redacted(self) -> str:
        netloc = ""
        if self.username:
            netloc += self.username
            if self.password:
                netloc += ":***"
            netloc += "@"
        if self.host:
            netloc += self.host
        if self.port:
            netloc += f":{self.port}"
        result = f"{self.scheme}://{netloc}{self.path or ''}"
        if self.query:
            result += f"?{urlencode(self.query)}"
        return result


def parse_dsn(dsn: str) -> DSN:
    parsed = urlparse(dsn)
    if not parsed.scheme:
        raise ConfigurationError(f"DSN is missing a scheme: {dsn!r}")
    try:
        port = parsed.port
    except ValueError as exc:
        raise ConfigurationError(f"Invalid port in DSN for scheme '{parsed.scheme}'") from exc
    return DSN(
        scheme=parsed.scheme,
        username=parsed.username,
        password=parsed.password,
        host=parsed.hostname,
        port=port,
        database=parsed.path.lstrip("/") or None,
        path=parsed.path or "",
        query={key: values[0] for key, values in parse_qs(parsed.query).items()},
    )


@dataclass
class ConnectionConfig:
    """
    Normalized description of one named connection.
    """

    url: str
    dialect: str
    dsn: DSN | None = None
    options: dict[str, str] = field(default_factory=dict)
    source: str | None = None

    @classmethod
    def from_dsn(cls, dsn: str, **kwargs: Any) -> "ConnectionConfig":
        parsed = parse_dsn(dsn)
        try:
            dialect = get_dialect(parsed.driver)
        except UnsupportedDriver as exc:
            raise ConfigurationError(str(exc)) from exc
        options = dict(parsed.query)
        options.update(kwargs.pop("options", None) or {})
        return cls(url=dsn, dialect=dialect.name, dsn=parsed, options=options, **kwargs)

    @classmethod
    def from_env(cls, env_var: str, **kwargs: Any) -> "ConnectionConfig":
        value = os.getenv(env_var)
        if not value:
            raise ConfigurationError(f"Environment variable {env_var} is not set")
        return cls.from_dsn(value, source=env_var, **kwargs)

    def redacted_dsn(self) -> str:
        if self.dsn:
            return self.dsn.redacted()
        return self.url

    def descriptive_label(self) -> str:
        redacted = self.redacted_dsn()
        if self.source:
            return f"{self.source} ({redacted})"
        return redacted


class ConnectionRegistry:
    """
    Named connection configurations.

    Compilers never consult this registry; callers resolve a dialect name here
    and pass it in explicitly.
    """

    def __init__(self) -> None:
        self._configs: Dict[str, ConnectionConfig] = {}
        self._lock = RLock()
        self.logger = get_logger("connection")

    def add(self, config: ConnectionConfig | str, name: str = "default") -> ConnectionConfig:
        if isinstance(config, str):
            config = ConnectionConfig.from_dsn(config)
        with self._lock:
            if name in self._configs:
                raise ConfigurationError(f"Connection '{name}' is already registered")
            self._configs[name] = config
        self.logger.info("Registered connection %s -> %s", name, config.descriptive_label())
        return config

    def get(self, name: str = "default") -> ConnectionConfig:
        with self._lock:
            try:
                return self._configs[name]
            except KeyError:
                raise ConfigurationError(f"Connection '{name}' is not registered") from None

    def has(self, name: str) -> bool:
        with self._lock:
            return name in self._configs

    def dialect_name(self, name: str = "default") -> str:
        return self.get(name).dialect

    def dialect_for(self, name: str = "default") -> Dialect:
        return get_dialect(self.dialect_name(name))

    def names(self) -> List[str]:
        with self._lock:
            return sorted(self._configs)

    def remove(self, name: str) -> None:
        with self._lock:
            self._configs.pop(name, None)
