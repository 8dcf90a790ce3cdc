"""Utility functions for Jinja2 templates."""

import logging
from datetime import date, datetime

logger = logging.getLogger(__name__)

PLACEHOLDER = "—"

SYNCED_MINUTES = 10
STALE_MINUTES = 30

def format_order_date(value):
    """Format a date as YYYY-MM-DD.

    Args:
        value: date, datetime or None

    Returns:
        Formatted date, or a dash for None
    """
    if value is None:
        return PLACEHOLDER
    if isinstance(value, (date, datetime)):
        return value.strftime('%Y-%m-%d')
    return str(value)

def format_order_datetime(value):
    """Format a datetime as YYYY-MM-DD HH:MM:SS UTC."""
    if value is None:
        return PLACEHOLDER
    return value.strftime('%Y-%m-%d %H:%M:%S UTC')

def format_quantity_with_uom(quantity, uom=None):
    """Format a quantity with thousands separators and its unit of measure.

    Args:
        quantity: Integer quantity or None
        uom: Unit of measure, optional

    Returns:
        e.g. "1,250 EA", "1,250" without a unit, a dash without a quantity
    """
    if quantity is None:
        return PLACEHOLDER

    try:
        formatted = f"{int(quantity):,}"
    except (TypeError, ValueError):
        formatted = str(quantity)

    if uom and str(uom).strip():
        return f"{formatted} {uom}"
    return formatted

def display_value(value, placeholder=PLACEHOLDER):
    """Return the value, or a placeholder for None and blank strings."""
    if value is None:
        return placeholder
    if isinstance(value, str) and not value.strip():
        return placeholder
    return value

def order_status_class(status):
    """Bootstrap badge class for a free-text order status."""
    if not status:
        return 'bg-light text-dark'

    status = status.lower()
    if 'open' in status:
        return 'bg-success'
    if 'blocked' in status:
        return 'bg-danger'
    if 'partial' in status:
        return 'bg-warning text-dark'
    if 'closed' in status:
        return 'bg-secondary'
    return 'bg-primary'

def job_status_class(status):
    """Bootstrap badge class for a job log status."""
    return {
        'success': 'bg-success',
        'error': 'bg-danger',
        'processing': 'bg-warning text-dark',
        'pending': 'bg-secondary',
    }.get(status, 'bg-secondary')

def toggle_sort_direction(direction):
    return 'desc' if direction == 'asc' else 'asc'

def sort_link_params(column, current_sort, current_direction):
    """Query parameters for a sortable column header.

    Clicking the active column flips its direction, any other column starts
    ascending.
    """
    if current_sort == column:
        direction = toggle_sort_direction(current_direction)
    else:
        direction = 'asc'
    return {'sort': column, 'direction': direction}

def sort_indicator(column, current_sort, current_direction):
    """Arrow for the active sort column, empty otherwise."""
    if current_sort != column:
        return ''
    return '↑' if current_direction == 'asc' else '↓'

def sync_status(last_sync, now=None):
    """Freshness of the open orders snapshot.

    Args:
        last_sync: Time of the last import (UTC), or None
        now: Current time, defaults to utcnow

    Returns:
        dict: status ('synced', 'stale' or 'error'), text, icon and css_class
    """
    if last_sync is None:
        return {'status': 'error', 'text': 'Never synced', 'icon': '✗', 'css_class': 'text-danger'}

    minutes = int(((now or datetime.utcnow()) - last_sync).total_seconds() // 60)

    if minutes < SYNCED_MINUTES:
        return {'status': 'synced', 'text': 'Synced', 'icon': '✓', 'css_class': 'text-success'}
    if minutes < STALE_MINUTES:
        return {'status': 'stale', 'text': 'Stale', 'icon': '⚠', 'css_class': 'text-warning'}
    return {'status': 'error', 'text': 'Error', 'icon': '✗', 'css_class': 'text-danger'}

def register_template_helpers(app):
    """Register template helpers with the Flask app."""

    app.add_template_filter(format_order_date)
    app.add_template_filter(format_order_datetime)
    app.add_template_filter(display_value)
    app.add_template_filter(order_status_class)
    app.add_template_filter(job_status_class)

    app.add_template_global(format_quantity_with_uom)
    app.add_template_global(sort_link_params)
    app.add_template_global(sort_indicator)
    app.add_template_global(sync_status)
