"""CSV rendering of open orders."""

import csv
import io
from datetime import date, datetime

# (header, OpenOrder attribute) in export order
CSV_COLUMNS = [
    # Order and customer
    ('Sales Doc', 'sales_doc'),
    ('Item Number', 'item_number'),
    ('Customer Name', 'cust_name'),
    ('Sold To', 'sold_to'),
    ('Ship To', 'ship_to'),
    ('Country', 'country'),
    ('Customer PO', 'cust_po_num'),
    ('Plant', 'plant'),
    ('Sales Type', 'sales_type'),
    # Material
    ('Material', 'material'),
    ('Material Description', 'material_description'),
    # Dates
    ('Order Date', 'order_date'),
    ('Requested Date', 'requested_date'),
    ('Est Ship Date', 'est_ship_date'),
    ('PL GL Date', 'pl_gl_date'),
    # Quantities
    ('Order Qty', 'order_qty'),
    ('UOM', 'order_qty_uom'),
    ('Open Order Qty', 'open_order_qty'),
    ('Open Delivery Qty', 'open_del_qty'),
    ('Goods Issue Qty', 'gi_qty'),
    # Inventory
    ('In Stock', 'in_stock'),
    ('Needed Qty', 'needed_qty'),
    ('Order Shortfall', 'order_shortfall'),
    ('Total Shortfall', 'total_shortfall'),
    ('Unrestricted Stock', 'unrestricted_qty'),
    ('Safety Stock', 'safety_stock'),
    # Shipping
    ('Ship Status', 'ship_status'),
    ('Shipping Type', 'shipping_type'),
    ('Delivery Number', 'delivery_number'),
    ('Shipment Number', 'shipment_number'),
    # Status and CSR
    ('Order Status', 'order_status'),
    ('Action Date', 'action_date'),
    ('CSR Name', 'csr_name'),
    ('CSR Action Date', 'csr_action_date'),
    # Sales and logistics
    ('Sales Rep', 'sales_rep'),
    ('Days Late', 'days_late'),
]

CSV_HEADERS = [header for header, _ in CSV_COLUMNS]


def format_csv_value(value):
    """Dates as YYYY-MM-DD, None as an empty cell."""
    if value is None:
        return ''
    if isinstance(value, (date, datetime)):
        return value.strftime('%Y-%m-%d')
    return value


def generate_csv(open_orders):
    """Render open orders as CSV text with a header row.

    Args:
        open_orders: Iterable of OpenOrder instances

    Returns:
        str: CSV document
    """
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(CSV_HEADERS)

    for order in open_orders:
        writer.writerow([format_csv_value(getattr(order, attribute)) for _, attribute in CSV_COLUMNS])

    return output.getvalue()


def export_filename(now=None):
    return f"open_orders_{(now or datetime.now()).strftime('%Y%m%d_%H%M%S')}.csv"
