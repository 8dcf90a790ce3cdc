"""
Client for the upstream SQL Server that hosts the sales-order view.

Credentials are passed in through an explicit ``SqlServerConfig`` built once
from the application config; nothing here reads the environment.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

import pymssql

from ordersync.errors import SourceConnectionError, SourceQueryError

log = logging.getLogger(__name__)

MASK = '***'


@dataclass(frozen=True)
class SqlServerConfig:
    """Connection settings for the upstream SQL Server."""

    host: Optional[str]
    username: Optional[str]
    password: Optional[str]
    database: Optional[str]
    port: int = 1433
    timeout: int = 30
    login_timeout: int = 30
    charset: str = 'UTF-8'

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> 'SqlServerConfig':
        """Build from the ``SQLSERVER_*`` keys of a Flask config."""
        return cls(
            host=config.get('SQLSERVER_HOST'),
            port=int(config.get('SQLSERVER_PORT') or 1433),
            username=config.get('SQLSERVER_USERNAME'),
            password=config.get('SQLSERVER_PASSWORD'),
            database=config.get('SQLSERVER_DATABASE'),
            timeout=int(config.get('SQLSERVER_TIMEOUT') or 30),
            login_timeout=int(config.get('SQLSERVER_LOGIN_TIMEOUT') or 30),
            charset=config.get('SQLSERVER_CHARSET') or 'UTF-8',
        )

    @property
    def display_name(self) -> str:
        """host/database, safe to show in logs."""
        return f"{self.host}/{self.database}"

    def __repr__(self):
        return (f"SqlServerConfig(host={self.host!r}, port={self.port}, "
                f"username={self.username!r}, password={MASK!r}, database={self.database!r})")


class SqlServerClient:
    """Thin pymssql wrapper holding at most one live connection."""

    def __init__(self, config: SqlServerConfig):
        """Initialize SqlServerClient.

        Args:
            config: Connection settings for the SQL Server
        """
        self.config = config
        self._connection = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def connect(self) -> None:
        """Open the connection.

        Raises:
            SourceConnectionError: If the server cannot be reached or the login fails
        """
        if not self.config.host:
            raise SourceConnectionError("SQL Server connection failed: no host configured")

        log.info(f"Connecting to SQL Server: {self.config.display_name}")
        try:
            self._connection = pymssql.connect(
                server=self.config.host,
                port=self.config.port,
                user=self.config.username,
                password=self.config.password,
                database=self.config.database,
                timeout=self.config.timeout,
                login_timeout=self.config.login_timeout,
                charset=self.config.charset,
            )
        except pymssql.Error as e:
            self._connection = None
            error_msg = self._mask(str(e))
            log.error(f"Connection failed: {error_msg}")
            # Chaining would carry the unmasked driver message
            raise SourceConnectionError(f"SQL Server connection failed: {error_msg}") from None

        log.info("Connection established successfully")

    def execute(self, query: str) -> List[Dict[str, Any]]:
        """Run a query and return every row as a column -> value dict.

        Connects first if there is no open connection. All rows are fetched
        before returning.

        Args:
            query: SQL to execute

        Returns:
            list: Rows as dictionaries keyed by column name

        Raises:
            SourceConnectionError: If the lazy connect fails
            SourceQueryError: If the query fails
        """
        if not self.connected():
            self.connect()

        log.info(f"Executing query: {self._mask(query)}")
        cursor = None
        try:
            cursor = self._connection.cursor(as_dict=True)
            cursor.execute(query)
            rows = cursor.fetchall()
        except pymssql.Error as e:
            error_msg = self._mask(str(e))
            log.error(f"Query error: {error_msg}")
            if isinstance(e, (pymssql.OperationalError, pymssql.InterfaceError)):
                # Link is gone; the next execute reconnects
                self.close()
            raise SourceQueryError(f"SQL Server query failed: {error_msg}") from None
        finally:
            if cursor is not None:
                cursor.close()

        log.info(f"Query returned {len(rows)} rows")
        return rows

    def close(self) -> None:
        """Close the connection. Safe to call more than once."""
        if self._connection is None:
            return

        connection, self._connection = self._connection, None
        try:
            connection.close()
        except pymssql.Error as e:
            log.warning(f"Error while closing connection: {self._mask(str(e))}")
        log.info("Connection closed")

    def connected(self) -> bool:
        """Whether an open connection is held.

        Set by connect, cleared by close and by a query that fails because the
        link to the server dropped. A connection that died while idle is only
        noticed on the next query.
        """
        return self._connection is not None

    def _mask(self, message: str) -> str:
        """Remove the password from a message before it is logged or raised."""
        password = self.config.password
        if password:
            return message.replace(password, MASK)
        return message
