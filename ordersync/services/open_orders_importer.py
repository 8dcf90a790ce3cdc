"""Snapshot import of SQL Server rows into the open_orders table."""

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional

from sqlalchemy import delete, insert

from ordersync.errors import OrderImportError
from ordersync.extensions import db
from ordersync.models.open_order import OpenOrder
from ordersync.services.column_mapping import CoercionStats, map_row

log = logging.getLogger(__name__)

BATCH_SIZE = 500


class OpenOrdersImporter:
    """Replace open_orders with a fresh snapshot inside one transaction.

    The table is either left untouched or holds exactly the new snapshot;
    readers never see a half-written table.
    """

    def __init__(self, db_session=None, batch_size: int = BATCH_SIZE):
        """Initialize the importer.

        Args:
            db_session: Flask-SQLAlchemy database instance (default: app db)
            batch_size: Rows per bulk insert
        """
        self.db = db_session or db
        self.batch_size = batch_size
        self.last_stats = CoercionStats()

    def import_rows(self, rows: Iterable[Mapping[str, Any]]) -> int:
        """Import a full snapshot.

        An empty snapshot leaves the table as it is and returns 0. Otherwise
        every existing open order is deleted and the mapped rows are inserted
        in batches, all in a single transaction.

        Args:
            rows: Source rows keyed by SQL Server column name

        Returns:
            int: Number of records imported

        Raises:
            OrderImportError: If anything fails; the previous snapshot is kept
        """
        rows = list(rows)
        if not rows:
            log.info("No rows to import, keeping existing open_orders data")
            return 0

        stats = CoercionStats()
        imported_at = datetime.utcnow()
        record_count = 0

        try:
            log.info("Truncating open_orders table")
            self.db.session.execute(delete(OpenOrder))

            for start in range(0, len(rows), self.batch_size):
                batch = rows[start:start + self.batch_size]
                records = [self._build_record(row, imported_at, stats) for row in batch]
                self.insert_batch(records)
                record_count += len(records)
                log.info(f"Imported batch of {len(records)} records (total: {record_count})")

            self.db.session.commit()
        except Exception as e:
            self.db.session.rollback()
            log.error(f"Import failed: {e}")
            log.error("Transaction rolled back, old data preserved")
            raise OrderImportError(f"Data import failed: {e}") from e

        self.last_stats = stats
        if stats.total:
            log.warning(
                f"Import coerced {stats.date_fallbacks} unparseable dates to NULL "
                f"and {stats.integer_fallbacks} non-numeric integers to 0"
            )
        log.info(f"Import completed: {record_count} records")
        return record_count

    def insert_batch(self, records: List[Dict[str, Any]]) -> None:
        """Bulk insert one batch of mapped records (no generated keys returned)."""
        self.db.session.execute(insert(OpenOrder), records)

    @staticmethod
    def _build_record(row: Mapping[str, Any], imported_at: datetime,
                      stats: Optional[CoercionStats] = None) -> Dict[str, Any]:
        record = map_row(row, stats)
        record['created_at'] = imported_at
        record['updated_at'] = imported_at
        return record
