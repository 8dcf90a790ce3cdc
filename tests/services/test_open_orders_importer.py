import pytest

from ordersync.errors import OrderImportError
from ordersync.models.open_order import OpenOrder
from ordersync.services.open_orders_importer import BATCH_SIZE, OpenOrdersImporter

@pytest.fixture
def importer(db):
    return OpenOrdersImporter(db)

def _rows(source_row, count):
    return [source_row(salesDoc=str(5000000 + i), itemNumber=str(10 * (i + 1))) for i in range(count)]

def test_import_replaces_existing_rows(db, importer, source_row, create_open_order):
    create_open_order(sales_doc='OLD-1')
    create_open_order(sales_doc='OLD-2')

    count = importer.import_rows(_rows(source_row, 3))

    assert count == 3
    assert OpenOrder.query.count() == 3
    assert OpenOrder.query.filter_by(sales_doc='OLD-1').first() is None

def test_import_maps_and_timestamps_rows(db, importer, source_row):
    importer.import_rows([source_row()])

    order = OpenOrder.query.one()
    assert order.sales_doc == '5001234'
    assert order.order_qty == 150
    assert order.csr_action_date == 'next week'
    assert order.created_at is not None
    assert order.created_at == order.updated_at

def test_empty_import_keeps_existing_rows(db, importer, create_open_order):
    create_open_order(sales_doc='KEEP-ME')

    assert importer.import_rows([]) == 0
    assert OpenOrder.query.count() == 1

def test_failed_batch_rolls_back_everything(db, importer, source_row, create_open_order, mocker):
    create_open_order(sales_doc='OLD-1')
    create_open_order(sales_doc='OLD-2')

    original_insert = importer.insert_batch
    calls = []

    def fail_on_second_batch(records):
        calls.append(len(records))
        if len(calls) == 2:
            raise RuntimeError('disk full')
        original_insert(records)

    mocker.patch.object(importer, 'insert_batch', side_effect=fail_on_second_batch)

    with pytest.raises(OrderImportError) as exc_info:
        importer.import_rows(_rows(source_row, BATCH_SIZE + 10))

    assert exc_info.value.message == 'Data import failed: disk full'
    assert isinstance(exc_info.value.__cause__, RuntimeError)
    assert sorted(o.sales_doc for o in OpenOrder.query.all()) == ['OLD-1', 'OLD-2']

def test_rows_are_inserted_in_batches(db, importer, source_row, mocker):
    spy = mocker.spy(importer, 'insert_batch')

    count = importer.import_rows(_rows(source_row, 1200))

    assert count == 1200
    assert [len(call.args[0]) for call in spy.call_args_list] == [500, 500, 200]
    assert OpenOrder.query.count() == 1200

def test_coercion_fallbacks_are_reported(db, importer, source_row):
    importer.import_rows([
        source_row(orderQty='lots', requestedDate='soon'),
        source_row(daysLate='??'),
    ])

    assert importer.last_stats.integer_fallbacks == 2
    assert importer.last_stats.date_fallbacks == 1
