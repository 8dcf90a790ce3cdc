"""Scheduled background tasks."""

import logging

from ordersync.extensions import scheduler

log = logging.getLogger("tasks")

def init_tasks(app):
    """Register scheduled jobs and start the scheduler."""
    if app.config.get('TESTING') or not app.config.get('SYNC_ENABLED', True):
        log.info("Scheduler not started (testing or sync disabled)")
        return False

    with app.app_context():
        from ordersync.tasks.sync_tasks import setup_sync_jobs
        from ordersync.tasks.cleanup_tasks import setup_cleanup_jobs

        setup_sync_jobs(app)
        setup_cleanup_jobs(app)

    if not scheduler.running:
        scheduler.start()
        log.info("Scheduler started")
    return True
