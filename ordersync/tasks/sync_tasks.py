"""Scheduled synchronization of open orders from SQL Server."""

import logging
import time
from dataclasses import dataclass
from typing import Optional

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from ordersync.clients import SqlServerClient, SqlServerConfig
from ordersync.errors import OrderImportError, SourceConnectionError, SourceQueryError
from ordersync.extensions import db, scheduler
from ordersync.models.job_log import JobStatus
from ordersync.models.job_log_repository import SqlAlchemyJobLogRepository
from ordersync.services.open_orders_importer import OpenOrdersImporter

log = logging.getLogger(__name__)

SOURCE_VIEW = 'vwZSDOrder_Advanced'
SOURCE_QUERY = f"SELECT * FROM {SOURCE_VIEW} WHERE plant=8800"
LOG_PREFIX = '[SyncOpenOrdersJob]'

RETRYABLE_ERRORS = (SourceConnectionError, SourceQueryError)


def _with_prefix(prefix, message):
    return message if message.startswith(prefix) else f"{prefix}: {message}"


class SyncOpenOrdersJob:
    """One sync run: fetch the view, replace the snapshot, record progress.

    Every step is written to a JobLog as a detail line so an operator can see
    how far a failed run got. Errors are recorded and re-raised.
    """

    def __init__(self, job_log_repository=None, importer=None, client=None):
        """Initialize the job.

        Args:
            job_log_repository: Run log repository (default: bound to the app db)
            importer: Snapshot importer (default: OpenOrdersImporter)
            client: SQL Server client (default: built from the app config)
        """
        self.job_logs = job_log_repository or SqlAlchemyJobLogRepository(db)
        self.importer = importer or OpenOrdersImporter(db)
        self.client = client or SqlServerClient(SqlServerConfig.from_mapping(current_app.config))
        self.job_log = None

    def perform(self) -> int:
        """Run the sync.

        Returns:
            int: Number of records imported

        Raises:
            SourceConnectionError: The SQL Server could not be reached
            SourceQueryError: The view could not be read
            OrderImportError: The snapshot could not be written
        """
        start_time = time.monotonic()

        try:
            self.job_log = self.job_logs.create_with_timestamp()
            self._detail("Job started - SyncOpenOrdersJob")
            self.job_logs.processing(self.job_log)

            self._detail(f"Connecting to SQL Server {self.client.config.display_name}...")
            self.client.connect()
            self._detail("Connected successfully")
            log.info(f"{LOG_PREFIX} Connected to SQL Server")

            self._detail(f"Fetching records from {SOURCE_VIEW}...")
            rows = self.client.execute(SOURCE_QUERY)
            self._detail(f"Fetched {len(rows)} records")
            log.info(f"{LOG_PREFIX} Fetched {len(rows)} records from SQL Server")

            self._detail("Replacing open_orders table contents...")
            record_count = self.importer.import_rows(rows)
            self._detail(self._import_summary(record_count))

            duration = round(time.monotonic() - start_time, 2)
            self._detail(
                f"Job completed successfully - Total: {record_count} records in {duration} seconds"
            )
            self.job_logs.success(self.job_log)
            log.info(
                f"{LOG_PREFIX} Sync completed successfully: "
                f"{record_count} records imported in {duration} seconds"
            )
            return record_count

        except SourceConnectionError as e:
            self._fail(_with_prefix("SQL Server connection failed", e.message),
                       "Old data preserved in open_orders table")
            raise
        except SourceQueryError as e:
            self._fail(_with_prefix("SQL Server query failed", e.message),
                       "Old data preserved in open_orders table")
            raise
        except OrderImportError as e:
            self._fail(f"Import failed: {e.message}",
                       "Transaction rolled back, old data preserved")
            raise
        except Exception as e:
            self._fail(f"Unexpected error: {type(e).__name__} - {e}", exc_info=True)
            raise
        finally:
            self.client.close()

    def _detail(self, message):
        self.job_logs.add_detail(self.job_log, message)

    def _import_summary(self, record_count):
        stats = self.importer.last_stats
        summary = f"Imported {record_count} records"
        if stats is not None and stats.total:
            summary += (
                f" ({stats.date_fallbacks} unparseable dates stored as empty, "
                f"{stats.integer_fallbacks} non-numeric quantities stored as 0)"
            )
        return summary

    def _fail(self, error_msg, note=None, exc_info=False):
        """Log the failure and record it on the job log when there is one."""
        log.error(f"{LOG_PREFIX} {error_msg}", exc_info=exc_info)
        if note:
            log.error(f"{LOG_PREFIX} {note}")

        if self.job_log is None:
            return

        try:
            self._detail(f"ERROR: {error_msg}")
            if self.job_log.can_transition_to(JobStatus.ERROR):
                self.job_logs.error(self.job_log)
        except SQLAlchemyError as e:
            # The original error is re-raised by the caller
            log.error(f"{LOG_PREFIX} Could not record failure on job log: {e}")


@dataclass
class SyncResult:
    """Outcome of one scheduled sync, after retries."""

    status: str
    record_count: int = 0
    error_kind: Optional[str] = None
    message: Optional[str] = None
    attempts: int = 1

    @property
    def succeeded(self):
        return self.status == JobStatus.SUCCESS.value


def classify_error(error):
    """Short name for the kind of failure."""
    if isinstance(error, SourceConnectionError):
        return 'connection'
    if isinstance(error, SourceQueryError):
        return 'query'
    if isinstance(error, OrderImportError):
        return 'import'
    return 'unexpected'


def run_sync(max_attempts=1, retry_delay=0):
    """Run SyncOpenOrdersJob, retrying connection and query failures.

    Must be called inside an application context. Never raises for a failed
    run; the failure is returned as a SyncResult.

    Args:
        max_attempts: Total attempts for retryable failures
        retry_delay: Seconds to wait between attempts

    Returns:
        SyncResult: Outcome of the last attempt
    """
    max_attempts = max(1, int(max_attempts))
    attempt = 0

    while True:
        attempt += 1
        try:
            record_count = SyncOpenOrdersJob().perform()
            return SyncResult(status=JobStatus.SUCCESS.value, record_count=record_count, attempts=attempt)
        except RETRYABLE_ERRORS as e:
            if attempt >= max_attempts:
                log.error(f"Sync failed after {attempt} attempts: {e}")
                return SyncResult(
                    status=JobStatus.ERROR.value,
                    error_kind=classify_error(e),
                    message=str(e),
                    attempts=attempt,
                )
            log.warning(f"Sync attempt {attempt}/{max_attempts} failed: {e}. Retrying in {retry_delay}s")
            if retry_delay:
                time.sleep(retry_delay)
        except Exception as e:
            log.error(f"Sync failed: {e}")
            return SyncResult(
                status=JobStatus.ERROR.value,
                error_kind=classify_error(e),
                message=str(e),
                attempts=attempt,
            )


def run_scheduled_sync(app=None):
    """Execute the scheduled sync of open orders."""
    app = app or scheduler.app

    with app.app_context():
        log.info("Running scheduled open orders synchronization")
        result = run_sync(
            max_attempts=app.config.get('SYNC_RETRY_ATTEMPTS', 3),
            retry_delay=app.config.get('SYNC_RETRY_DELAY_SECONDS', 30),
        )

        if result.succeeded:
            log.info(f"Scheduled sync completed successfully: {result.record_count} records")
        else:
            log.error(f"Scheduled sync failed ({result.error_kind}): {result.message}")
        return result


def setup_sync_jobs(app):
    """Register the synchronization job with the scheduler."""
    sync_schedule = app.config.get('SYNC_SCHEDULE', '*/5 * * * *')

    scheduler.add_job(
        id='sync_open_orders',
        func=run_scheduled_sync,
        trigger='cron',
        **parse_cron_expression(sync_schedule),
        max_instances=1,
        coalesce=True,
        replace_existing=True
    )

    app.logger.info(f"Scheduled sync job registered with cron: {sync_schedule}")


def parse_cron_expression(expression):
    """Parse cron expression into kwargs for APScheduler."""
    parts = (expression or '').split()
    if len(parts) != 5:
        log.warning(f"Invalid cron expression '{expression}', using every 5 minutes")
        return {'minute': '*/5'}

    minute, hour, day, month, day_of_week = parts
    return {
        'minute': minute,
        'hour': hour,
        'day': day,
        'month': month,
        'day_of_week': day_of_week
    }
