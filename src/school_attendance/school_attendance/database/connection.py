from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import mysql.connector

# Value shipped in the settings templates until a real server is filled in.
PLACEHOLDER = "ISI_DISINI"


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host") or "").strip(),
            port=int(db_config.get("port") or 3306),
            user=str(db_config.get("user") or ""),
            password=str(db_config.get("password") or ""),
            database=str(db_config.get("database") or "").strip(),
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.host and self.database) and PLACEHOLDER not in (self.host, self.database)


def is_store_configured(db_config: Optional[dict]) -> bool:
    """True when the settings name a store: host and database set, no placeholder left."""
    if not db_config:
        return False
    return DBConfig.from_dict(db_config).is_configured


class DatabaseConnection:
    """Connection factory, one per server settings.

    Every store operation opens its own short-lived connection.
    """

    _instances: dict[DBConfig, "DatabaseConnection"] = {}

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if config not in cls._instances:
            cls._instances[config] = DatabaseConnection(config)
        return cls._instances[config]

    @property
    def config(self) -> DBConfig:
        return self._config

    def connect(self, *, with_database: bool = True):
        kwargs = dict(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            charset="utf8mb4",
            use_pure=True,
        )
        if with_database:
            kwargs["database"] = self._config.database
        return mysql.connector.connect(**kwargs)
