"""Tasks for cleaning up old job logs."""

import logging
from ordersync.extensions import db, scheduler
from ordersync.models.job_log_repository import SqlAlchemyJobLogRepository

log = logging.getLogger(__name__)

def prune_job_logs(app=None, days=None):
    """Delete job logs older than the retention period.

    Returns:
        int: Number of job logs deleted (0 when retention is disabled)
    """
    app = app or scheduler.app

    with app.app_context():
        if days is None:
            days = app.config.get('JOB_LOG_RETENTION_DAYS', 90)
        if not days:
            log.info("Job log retention disabled, nothing pruned")
            return 0

        count = SqlAlchemyJobLogRepository(db).prune_older_than(days)
        if count > 0:
            log.info(f"Cleaned up {count} job logs older than {days} days")
        return count

def setup_cleanup_jobs(app):
    """Register cleanup jobs with the scheduler."""
    # Daily at 03:17
    scheduler.add_job(
        id='prune_job_logs',
        func=prune_job_logs,
        trigger='cron',
        hour=3,
        minute=17,
        max_instances=1,
        coalesce=True,
        replace_existing=True
    )

    app.logger.info("Scheduled cleanup jobs registered")
