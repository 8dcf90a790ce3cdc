"""Read-only queries over the replicated open_orders table."""

import logging
from sqlalchemy import func, or_
from ordersync.models.open_order import OpenOrder

log = logging.getLogger(__name__)

SEARCH_COLUMNS = ('cust_name', 'sales_doc', 'material')
DEFAULT_SORT = 'requested_date'

class SqlAlchemyOpenOrderRepository:
    """Search, sort and paginate open orders. Never writes."""

    def __init__(self, db_session):
        """Initialize repository with database session.

        Args:
            db_session: Flask-SQLAlchemy database instance
        """
        self.db = db_session

    def get(self, order_id):
        return self.db.session.get(OpenOrder, order_id)

    def count(self):
        return self.db.session.query(func.count(OpenOrder.id)).scalar() or 0

    def last_synced_at(self):
        """Import time of the snapshot currently in the table, or None."""
        return self.db.session.query(func.max(OpenOrder.updated_at)).scalar()

    def build_query(self, search=None, sort=None, direction=None):
        """Build a filtered and ordered query.

        Args:
            search: Substring matched against customer name, sales doc and material
            sort: Column to order by; unknown columns fall back to the default order
            direction: 'desc' for descending, anything else ascending

        Returns:
            Query: Unexecuted query
        """
        query = OpenOrder.query

        if search:
            term = f"%{search.strip()}%"
            query = query.filter(or_(
                *[getattr(OpenOrder, column).ilike(term) for column in SEARCH_COLUMNS]
            ))
            log.info(f"Search performed with term '{search}'")

        if sort and sort in OpenOrder.sortable_columns():
            column = getattr(OpenOrder, sort)
            ordering = column.desc() if direction == 'desc' else column.asc()
            query = query.order_by(ordering, OpenOrder.id.asc())
            log.info(f"Sorted by {sort} {'desc' if direction == 'desc' else 'asc'}")
        else:
            if sort:
                log.warning(f"Ignoring unknown sort column '{sort}'")
            query = query.order_by(getattr(OpenOrder, DEFAULT_SORT).desc(), OpenOrder.id.asc())

        return query

    def paginate(self, page=1, per_page=50, search=None, sort=None, direction=None):
        return self.build_query(search, sort, direction).paginate(
            page=page, per_page=per_page, error_out=False
        )

    def for_export(self, limit=1000, search=None, sort=None, direction=None):
        """First ``limit`` matching orders for CSV export."""
        return self.build_query(search, sort, direction).limit(limit).all()
