import logging
from flask import Blueprint, Response, current_app, flash, redirect, render_template, request, url_for
from ordersync.extensions import db
from ordersync.models.open_order_repository import SqlAlchemyOpenOrderRepository
from ordersync.services.csv_export import export_filename, generate_csv
from ordersync.web.auth import require_basic_auth

open_orders_bp = Blueprint('open_orders', __name__)
log = logging.getLogger(__name__)
open_order_repo = SqlAlchemyOpenOrderRepository(db)

open_orders_bp.before_request(require_basic_auth)

def _list_params():
    search = request.args.get('search', '').strip() or None
    sort = request.args.get('sort') or None
    direction = 'desc' if request.args.get('direction') == 'desc' else 'asc'
    return search, sort, direction

@open_orders_bp.route('/')
def index():
    """Searchable, sortable list of open orders."""
    if request.args.get('format') == 'csv':
        return export_csv()

    search, sort, direction = _list_params()
    page = request.args.get('page', 1, type=int)
    per_page = current_app.config.get('OPEN_ORDERS_PER_PAGE', 50)

    pagination = open_order_repo.paginate(
        page=page, per_page=per_page, search=search, sort=sort, direction=direction
    )
    log.info(f"Displaying page {page} with {len(pagination.items)} records")

    return render_template(
        'open_orders/index.html',
        pagination=pagination,
        open_orders=pagination.items,
        search=search or '',
        sort=sort,
        direction=direction,
        last_sync=open_order_repo.last_synced_at()
    )

@open_orders_bp.route('/export.csv')
def export_csv():
    """CSV download of the first matching orders."""
    search, sort, direction = _list_params()
    limit = current_app.config.get('CSV_EXPORT_LIMIT', 1000)

    open_orders = open_order_repo.for_export(limit=limit, search=search, sort=sort, direction=direction)
    log.info(f"CSV export requested, exporting {len(open_orders)} records")

    return Response(
        generate_csv(open_orders),
        mimetype='text/csv',
        headers={'Content-Disposition': f'attachment; filename={export_filename()}'}
    )

@open_orders_bp.route('/<int:order_id>')
def show(order_id):
    """Every field of one open order."""
    open_order = open_order_repo.get(order_id)
    if open_order is None:
        log.warning(f"Order with ID {order_id} not found")
        flash('Open order not found.', 'warning')
        return redirect(url_for('open_orders.index'))

    log.info(f"Displaying order {open_order.sales_doc} (ID: {open_order.id})")
    return render_template('open_orders/show.html', open_order=open_order)
