"""Clients for external data sources."""

from ordersync.clients.sqlserver_client import SqlServerClient, SqlServerConfig
