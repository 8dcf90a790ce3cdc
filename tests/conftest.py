import os
import tempfile
from base64 import b64encode
from datetime import date, datetime

import pytest

from ordersync import create_app
from ordersync.extensions import db as _db
from ordersync.models.job_log_repository import SqlAlchemyJobLogRepository
from ordersync.models.open_order import OpenOrder


@pytest.fixture
def app():
    """Create and configure a Flask app for testing."""
    # Create a temp file to isolate the database for each test
    db_fd, db_path = tempfile.mkstemp()

    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': f'sqlite:///{db_path}',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        'SECRET_KEY': 'test-key',
        'ADMIN_USERNAME': 'admin',
        'ADMIN_PASSWORD': 'secret',
        'SQLSERVER_HOST': 'sql.example.com',
        'SQLSERVER_USERNAME': 'reader',
        'SQLSERVER_PASSWORD': 's3cr3t-pw',
        'SQLSERVER_DATABASE': 'ProcessStatus',
        'SYNC_ENABLED': False,
        'SYNC_RETRY_ATTEMPTS': 3,
        'SYNC_RETRY_DELAY_SECONDS': 0,
    })

    # Create the database and tables
    with app.app_context():
        _db.create_all()

    yield app

    # Close and remove the temp database
    with app.app_context():
        _db.session.remove()
        _db.engine.dispose()
    os.close(db_fd)
    os.unlink(db_path)

@pytest.fixture
def db(app):
    """Create a database instance for testing."""
    with app.app_context():
        _db.drop_all()
        _db.create_all()
        yield _db
        _db.session.remove()

@pytest.fixture
def client(app):
    """A test client for the app."""
    return app.test_client()

@pytest.fixture
def runner(app):
    """A test CLI runner for the app."""
    return app.test_cli_runner()

@pytest.fixture
def auth_headers():
    """HTTP Basic credentials matching the test config."""
    token = b64encode(b'admin:secret').decode('ascii')
    return {'Authorization': f'Basic {token}'}

@pytest.fixture
def job_log_repository(db):
    return SqlAlchemyJobLogRepository(db)

def make_source_row(**overrides):
    """A vwZSDOrder_Advanced row as pymssql returns it (as_dict=True)."""
    row = {
        'soldTo': '100200',
        'shipTo': '100201',
        'custName': 'Acme Industrial',
        'country': 'US',
        'custPONum': 'PO-7781',
        'salesDoc': '5001234',
        'itemNumber': '10',
        'salesType': 'ZOR',
        'plant': 8800,
        'material': 'MAT-001',
        'materialDescription': 'Hydraulic pump',
        'orderDate': datetime(2025, 1, 15, 0, 0),
        'requestedDate': '2025-02-01',
        'orderQty': '150',
        'orderQty_UoM': 'EA',
        'openOrderQty': 120,
        'openOrderQty_UoM': 'EA',
        'orderStatus': 'Open',
        'shipStatus': 'Not shipped',
        'actionText': '  call customer  ',
        'CSR_actionDate': 'next week',
        'daysLate': '3',
    }
    row.update(overrides)
    return row

@pytest.fixture
def source_row():
    return make_source_row

@pytest.fixture
def create_open_order(db):
    """Insert an open order directly, bypassing the importer."""
    def _create(**attributes):
        defaults = {
            'sales_doc': '5000001',
            'item_number': 10,
            'cust_name': 'Default Customer',
            'material': 'MAT-000',
            'requested_date': date(2025, 1, 1),
        }
        defaults.update(attributes)
        order = OpenOrder(**defaults)
        db.session.add(order)
        db.session.commit()
        return order
    return _create
