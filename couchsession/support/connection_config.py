"""
Connection Configuration
Immutable CouchDB connection settings, built once at process start
"""
from dataclasses import dataclass
from typing import Any, Optional

from couchsession.defaults import (
    DEFAULT_COUCHDB_HOSTNAME,
    DEFAULT_COUCHDB_PORT,
    DEFAULT_COUCHDB_DATABASE,
    DEFAULT_SESSION_LIFETIME,
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_WRITE_MAX_ATTEMPTS,
)
from couchsession.support.config import Config
from couchsession.support.env_helper import EnvHelper


@dataclass(frozen=True)
class ConnectionConfig:
    """CouchDB connection and session lifetime settings"""

    hostname: str = DEFAULT_COUCHDB_HOSTNAME
    port: int = DEFAULT_COUCHDB_PORT
    username: Optional[str] = None
    password: Optional[str] = None
    database_name: str = DEFAULT_COUCHDB_DATABASE
    max_lifetime: int = DEFAULT_SESSION_LIFETIME
    timeout: float = DEFAULT_HTTP_TIMEOUT
    max_write_attempts: int = DEFAULT_WRITE_MAX_ATTEMPTS

    def __post_init__(self):
        if not self.database_name:
            raise ValueError("database_name must not be empty")
        if self.max_write_attempts < 1:
            raise ValueError("max_write_attempts must be at least 1")

    @property
    def has_credentials(self) -> bool:
        return bool(self.username) or bool(self.password)

    @classmethod
    def from_config(cls) -> 'ConnectionConfig':
        """
        Build the configuration from the host config store

        Each setting is read from session.<KEY> first, then from the
        environment variable of the same name, then from the package defaults.
        Blank values count as unset.

        Returns:
            ConnectionConfig
        """
        return cls(
            hostname=_setting('COUCHDB_HOSTNAME', DEFAULT_COUCHDB_HOSTNAME),
            port=int(_setting('COUCHDB_PORT', DEFAULT_COUCHDB_PORT)),
            username=_setting('COUCHDB_USERNAME'),
            password=_setting('COUCHDB_PASSWORD'),
            database_name=_setting('COUCHDB_DATABASE', DEFAULT_COUCHDB_DATABASE),
            max_lifetime=int(_setting('LIFETIME', DEFAULT_SESSION_LIFETIME)),
            timeout=float(_setting('COUCHDB_TIMEOUT', DEFAULT_HTTP_TIMEOUT)),
            max_write_attempts=int(_setting('COUCHDB_MAX_WRITE_ATTEMPTS', DEFAULT_WRITE_MAX_ATTEMPTS)),
        )


def _setting(key: str, default: Any = None) -> Any:
    value = Config.get(f'session.{key}')
    if _is_blank(value):
        value = EnvHelper.get(key)
    if _is_blank(value):
        return default
    return value.strip() if isinstance(value, str) else value


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())
