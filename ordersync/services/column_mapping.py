"""
Explicit mapping from vwZSDOrder_Advanced columns to OpenOrder attributes.

SQL Server columns use camelCase (``soldTo``, ``salesDoc``); OpenOrder
attributes use snake_case. This table documents the expected upstream schema:
a renamed or dropped source column shows up here as an attribute that is
always None, so any change to the view must be mirrored in COLUMN_MAPPING.

Conversion is lenient on purpose. A blank value is None whatever the type,
an unparseable date is None and a non-numeric integer is 0. Callers that care
can pass a ``CoercionStats`` to count those fallbacks.
"""

import enum
import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Mapping, Optional

from dateutil import parser as date_parser


class FieldType(enum.Enum):
    STRING = 'string'
    TEXT = 'text'
    INTEGER = 'integer'
    DATE = 'date'


S, T, I, D = FieldType.STRING, FieldType.TEXT, FieldType.INTEGER, FieldType.DATE

# SQL Server column -> (OpenOrder attribute, type). 68 fields.
COLUMN_MAPPING = {
    # Customer
    'soldTo': ('sold_to', I),
    'shipTo': ('ship_to', I),
    'custName': ('cust_name', S),
    'country': ('country', S),
    'custPONum': ('cust_po_num', S),

    # Order
    'salesDoc': ('sales_doc', S),
    'itemNumber': ('item_number', I),
    'salesType': ('sales_type', S),
    'plant': ('plant', I),
    'soStloc': ('so_stloc', S),

    # Material
    'material': ('material', S),
    'materialDescription': ('material_description', S),
    'bismt': ('bismt', S),

    # Dates
    'orderDate': ('order_date', D),
    'requestedDate': ('requested_date', D),
    'estShipDate': ('est_ship_date', D),
    'plGlDate': ('pl_gl_date', D),
    'actionDate': ('action_date', D),

    # Quantities
    'orderQty': ('order_qty', I),
    'orderQty_UoM': ('order_qty_uom', S),
    'openOrderQty': ('open_order_qty', I),
    'openOrderQty_UoM': ('open_order_qty_uom', S),
    'openDelQty': ('open_del_qty', I),
    'openDelQty_UoM': ('open_del_qty_uom', S),
    'giQty': ('gi_qty', I),
    'giQty_UoM': ('gi_qty_uom', S),

    # Inventory
    'inStock': ('in_stock', I),
    'neededQty': ('needed_qty', I),
    'orderShortfall': ('order_shortfall', I),
    'cumuShortfall': ('cumu_shortfall', I),
    'totalShortfall': ('total_shortfall', I),
    'unrestrictedQty': ('unrestricted_qty', I),
    'unrestrictedQty_UoM': ('unrestricted_qty_uom', S),
    'safetyStock': ('safety_stock', I),
    'baseUoM': ('base_uom', S),

    # Shipping
    'shipType': ('ship_type', I),
    'shipStatus': ('ship_status', S),
    'shipStatusID': ('ship_status_id', S),
    'shippingFrom': ('shipping_from', S),
    'shippingType': ('shipping_type', S),
    'deliveryNumber': ('delivery_number', S),
    'deliveryItemNumber': ('delivery_item_number', I),
    'shipmentNumber': ('shipment_number', S),

    # Status and actions
    'orderStatus': ('order_status', S),
    'actionText': ('action_text', T),
    'actionUser': ('action_user', S),
    'currentText': ('current_text', T),

    # CSR; the action date is free text upstream and kept as a string
    'csrName': ('csr_name', S),
    'CSR_actionText': ('csr_action_text', T),
    'CSR_actionDate': ('csr_action_date', S),
    'CSR_actionUser': ('csr_action_user', S),

    # Sales and service
    'salesRep': ('sales_rep', S),
    'serviceAgentNumber': ('service_agent_number', S),
    'serviceAgentName': ('service_agent_name', S),

    # Logistics
    'equipment': ('equipment', S),
    'iStloc': ('i_stloc', S),
    'sLoc': ('s_loc', S),
    'processOrderNum': ('process_order_num', S),
    'transitTime': ('transit_time', I),
    'daysLate': ('days_late', I),
    'leadtime': ('leadtime', I),
    'tempSensitive': ('temp_sensitive', I),

    # Additional
    'udCode': ('ud_code', S),
    'fertCode': ('fert_code', S),
    'fertDesc': ('fert_desc', S),
    'customerNote': ('customer_note', T),
    'NAME1': ('name1', S),
    'fullName': ('full_name', S),
}

_LEADING_INTEGER = re.compile(r'^\s*([+-]?\d+(?:_\d+)*)')

# Numeric dates are day first: 03/04/2025 is 3 April
_NUMERIC_DATE = re.compile(r'^\s*(\d{1,2})[/.-](\d{1,2})[/.-](\d{2}|\d{4})(?=\s|$)')


@dataclass
class CoercionStats:
    """Counts of values that were silently replaced during conversion."""

    date_fallbacks: int = 0
    integer_fallbacks: int = 0

    @property
    def total(self):
        return self.date_fallbacks + self.integer_fallbacks


def is_blank(value: Any) -> bool:
    """None, empty and whitespace-only strings are blank."""
    if value is None:
        return True
    if isinstance(value, (str, bytes)):
        return not value.strip()
    return False


def _numeric_date(day: str, month: str, year: str) -> Optional[date]:
    full_year = int(year)
    if len(year) == 2:
        full_year += 2000 if full_year < 69 else 1900
    try:
        return date(full_year, int(month), int(day))
    except ValueError:
        return None


def to_date(value: Any) -> Optional[date]:
    """Parse a date leniently; None when it cannot be parsed.

    All-numeric d/m/y dates are read day first and never swapped, so
    ``12/31/2025`` has no valid month and yields None. Year-first and
    worded dates go to dateutil.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value)
    match = _NUMERIC_DATE.match(text)
    if match:
        return _numeric_date(*match.groups())
    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError, TypeError):
        return None


def to_integer(value: Any) -> Optional[int]:
    """Best-effort integer: leading digits of a string, truncated numbers.

    Returns None only when nothing numeric can be found, so callers can tell
    a real zero from a fallback.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float, Decimal)):
        try:
            return int(value)
        except (ValueError, OverflowError, InvalidOperation):
            return None
    match = _LEADING_INTEGER.match(str(value))
    return int(match.group(1).replace('_', '')) if match else None


def convert_value(field_type: FieldType, value: Any, stats: Optional[CoercionStats] = None) -> Any:
    """Convert one raw SQL Server value to the attribute's Python type.

    Args:
        field_type: Declared type of the target attribute
        value: Raw value from the source row
        stats: Optional counters for lossy fallbacks

    Returns:
        Converted value, None for blank input
    """
    if is_blank(value):
        return None

    if field_type is FieldType.DATE:
        converted = to_date(value)
        if converted is None and stats is not None:
            stats.date_fallbacks += 1
        return converted

    if field_type is FieldType.INTEGER:
        converted = to_integer(value)
        if converted is None:
            if stats is not None:
                stats.integer_fallbacks += 1
            return 0
        return converted

    if field_type is FieldType.TEXT:
        return str(value)

    return str(value).strip()


def map_row(row: Mapping[str, Any], stats: Optional[CoercionStats] = None) -> Dict[str, Any]:
    """Translate one source row into OpenOrder attributes.

    Every mapped attribute is present in the result; columns missing from
    the row become None and columns not in COLUMN_MAPPING are ignored.
    """
    return {
        attribute: convert_value(field_type, row.get(column), stats)
        for column, (attribute, field_type) in COLUMN_MAPPING.items()
    }
