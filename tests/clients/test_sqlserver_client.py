import pymssql
import pytest
from unittest.mock import MagicMock

from ordersync.clients.sqlserver_client import MASK, SqlServerClient, SqlServerConfig
from ordersync.errors import SourceConnectionError, SourceQueryError

PASSWORD = 'hunter2-secret'

@pytest.fixture
def config():
    return SqlServerConfig(
        host='sql.example.com',
        username='reader',
        password=PASSWORD,
        database='ProcessStatus',
    )

@pytest.fixture
def mock_connect(mocker):
    connection = MagicMock()
    cursor = MagicMock()
    connection.cursor.return_value = cursor
    connect = mocker.patch('ordersync.clients.sqlserver_client.pymssql.connect', return_value=connection)
    return connect

def test_config_from_mapping_uses_defaults():
    config = SqlServerConfig.from_mapping({
        'SQLSERVER_HOST': 'db1',
        'SQLSERVER_USERNAME': 'user',
        'SQLSERVER_PASSWORD': 'pw',
        'SQLSERVER_DATABASE': 'ProcessStatus',
    })

    assert config.port == 1433
    assert config.timeout == 30
    assert config.login_timeout == 30
    assert config.charset == 'UTF-8'
    assert config.display_name == 'db1/ProcessStatus'

def test_config_repr_masks_password(config):
    assert PASSWORD not in repr(config)
    assert MASK in repr(config)

def test_connect_passes_settings_to_pymssql(config, mock_connect):
    client = SqlServerClient(config)
    client.connect()

    mock_connect.assert_called_once_with(
        server='sql.example.com',
        port=1433,
        user='reader',
        password=PASSWORD,
        database='ProcessStatus',
        timeout=30,
        login_timeout=30,
        charset='UTF-8',
    )
    assert client.connected()

def test_connect_without_host_fails(config):
    client = SqlServerClient(SqlServerConfig(host=None, username='u', password='p', database='d'))

    with pytest.raises(SourceConnectionError) as exc_info:
        client.connect()

    assert 'no host configured' in exc_info.value.message

def test_connect_failure_masks_password(config, mocker):
    mocker.patch(
        'ordersync.clients.sqlserver_client.pymssql.connect',
        side_effect=pymssql.OperationalError(f"Login failed for user 'reader' with password {PASSWORD}")
    )
    client = SqlServerClient(config)

    with pytest.raises(SourceConnectionError) as exc_info:
        client.connect()

    assert exc_info.value.message.startswith('SQL Server connection failed:')
    assert PASSWORD not in exc_info.value.message
    assert MASK in exc_info.value.message
    assert exc_info.value.__cause__ is None
    assert not client.connected()

def test_execute_connects_lazily_and_returns_rows(config, mock_connect):
    rows = [{'salesDoc': '1'}, {'salesDoc': '2'}]
    cursor = mock_connect.return_value.cursor.return_value
    cursor.fetchall.return_value = rows

    client = SqlServerClient(config)
    result = client.execute('SELECT * FROM vwZSDOrder_Advanced WHERE plant=8800')

    assert result == rows
    mock_connect.assert_called_once()
    mock_connect.return_value.cursor.assert_called_once_with(as_dict=True)
    cursor.execute.assert_called_once_with('SELECT * FROM vwZSDOrder_Advanced WHERE plant=8800')
    cursor.close.assert_called_once()

def test_execute_failure_raises_query_error(config, mock_connect):
    cursor = mock_connect.return_value.cursor.return_value
    cursor.execute.side_effect = pymssql.ProgrammingError("Invalid object name 'vwMissing'")

    client = SqlServerClient(config)
    with pytest.raises(SourceQueryError) as exc_info:
        client.execute('SELECT * FROM vwMissing')

    assert exc_info.value.message == "SQL Server query failed: Invalid object name 'vwMissing'"
    cursor.close.assert_called_once()
    assert client.connected()

def test_lost_connection_is_dropped_and_reopened(config, mock_connect):
    cursor = mock_connect.return_value.cursor.return_value
    cursor.execute.side_effect = [pymssql.OperationalError('Write to the server failed'), None]
    cursor.fetchall.return_value = [{'salesDoc': '1'}]

    client = SqlServerClient(config)
    with pytest.raises(SourceQueryError):
        client.execute('SELECT 1')

    assert not client.connected()
    mock_connect.return_value.close.assert_called_once()

    assert client.execute('SELECT 1') == [{'salesDoc': '1'}]
    assert mock_connect.call_count == 2
    assert client.connected()

def test_close_is_idempotent(config, mock_connect):
    client = SqlServerClient(config)
    client.connect()

    client.close()
    client.close()

    mock_connect.return_value.close.assert_called_once()
    assert not client.connected()

def test_close_without_connection_is_noop(config):
    client = SqlServerClient(config)
    client.close()
    assert not client.connected()

def test_close_error_is_logged_not_raised(config, mock_connect):
    mock_connect.return_value.close.side_effect = pymssql.InterfaceError('already closed')
    client = SqlServerClient(config)
    client.connect()

    client.close()

    assert not client.connected()

def test_context_manager_closes(config, mock_connect):
    with SqlServerClient(config) as client:
        client.connect()

    mock_connect.return_value.close.assert_called_once()
