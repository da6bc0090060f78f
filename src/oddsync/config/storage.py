"""Database configuration helpers.

Resolution order:

1. ``DATABASE_URI`` is used verbatim.
2. Any of the ``DB_*`` variables selects MySQL, over TCP when ``DB_HOST`` is set
   and over the Cloud SQL unix socket otherwise.
3. Without either, a SQLite file in the data directory is used.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final

from sqlalchemy.engine import URL

from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError

APP_DIR_NAME: Final[str] = "oddsync"
DEFAULT_DB_FILENAME: Final[str] = "oddsync.db"
DEFAULT_SOCKET_DIR: Final[str] = "/cloudsql"
MYSQL_DRIVER: Final[str] = "mysql+pymysql"
MYSQL_POOL_SIZE: Final[int] = 5
MYSQL_TIMEOUT_SECONDS: Final[int] = 10

_MYSQL_MARKER_VARS: Final[tuple[str, ...]] = (
    "DB_HOST",
    "DB_USER",
    "DB_PASS",
    "DB_DATABASE",
    "INSTANCE_CONNECTION_NAME",
)


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    database_filename: str = DEFAULT_DB_FILENAME

    def resolve_data_dir(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def ensure_data_dir(self) -> Path:
        data_dir = self.resolve_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def database_path(self, *, ensure: bool = True) -> Path:
        base = self.ensure_data_dir() if ensure else self.resolve_data_dir()
        return base / self.database_filename

    def database_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.database_path()}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str
    engine_options: dict[str, Any] = field(default_factory=dict)


def _default_data_dir() -> Path:
    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA")
        base_path = Path(base) if base else (Path.home() / "AppData" / "Local")
    else:
        base = os.getenv("XDG_DATA_HOME")
        base_path = Path(base) if base else (Path.home() / ".local" / "share")
    return (base_path / APP_DIR_NAME).expanduser().resolve()


def get_storage_config() -> StorageConfig:
    env_dir = optional_env_var("ODDSYNC_DATA_DIR")
    data_dir = Path(env_dir) if env_dir else _default_data_dir()
    return StorageConfig(data_dir=data_dir)


def _split_host(value: str) -> tuple[str, int | None]:
    host, _, port = value.partition(":")
    if not port:
        return host, None
    try:
        return host, int(port)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid port in DB_HOST: {value}") from exc


def _mysql_uri() -> str:
    values = require_env_vars(("DB_USER", "DB_PASS", "DB_DATABASE"))
    host_value = optional_env_var("DB_HOST")
    if host_value is not None:
        host, port = _split_host(host_value)
        url = URL.create(
            MYSQL_DRIVER,
            username=values["DB_USER"],
            password=values["DB_PASS"],
            host=host,
            port=port,
            database=values["DB_DATABASE"],
        )
    else:
        instance = require_env_vars(("INSTANCE_CONNECTION_NAME",))["INSTANCE_CONNECTION_NAME"]
        socket_dir = optional_env_var("DB_SOCKET_PATH") or DEFAULT_SOCKET_DIR
        url = URL.create(
            MYSQL_DRIVER,
            username=values["DB_USER"],
            password=values["DB_PASS"],
            database=values["DB_DATABASE"],
            query={"unix_socket": f"{socket_dir}/{instance}"},
        )
    return url.render_as_string(hide_password=False)


def _mysql_engine_options() -> dict[str, Any]:
    return {
        "pool_size": MYSQL_POOL_SIZE,
        "pool_timeout": MYSQL_TIMEOUT_SECONDS,
        "pool_pre_ping": True,
        "connect_args": {"connect_timeout": MYSQL_TIMEOUT_SECONDS},
    }


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    env_uri = optional_env_var("DATABASE_URI")
    if env_uri:
        return DatabaseConfig(uri=env_uri)
    if any(optional_env_var(name) for name in _MYSQL_MARKER_VARS):
        return DatabaseConfig(uri=_mysql_uri(), engine_options=_mysql_engine_options())
    storage_config = storage or get_storage_config()
    return DatabaseConfig(uri=storage_config.database_uri())
