"""
Repository for sync job log database operations.

This module provides a repository pattern implementation for creating job
logs, appending their detail lines and moving them through their lifecycle.
"""

import logging
from datetime import datetime, timedelta
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from ordersync.errors import InvalidStatusTransitionError, JobLogNameCollisionError
from ordersync.models.job_log import JobLog, JobLogDetail, JobStatus, MAX_MESSAGE_LENGTH

log = logging.getLogger(__name__)

MAX_NAME_ATTEMPTS = 100
TRUNCATION_MARKER = '...'

class SqlAlchemyJobLogRepository:
    """SQL Alchemy implementation of the job log repository."""

    def __init__(self, db_session):
        """Initialize repository with database session.

        Args:
            db_session: Flask-SQLAlchemy database instance
        """
        self.db = db_session

    def create_with_timestamp(self, timestamp=None):
        """Create a pending job log named after a timestamp.

        The name is ``YYYYMMDDhhmmss``. If it is taken, ``_1``, ``_2``, ...
        suffixes are tried until ``MAX_NAME_ATTEMPTS`` names have collided.

        Args:
            timestamp: Time to derive the name from (default: now)

        Returns:
            JobLog: The created log in ``pending`` status

        Raises:
            JobLogNameCollisionError: If every candidate name is taken
        """
        base_name = (timestamp or datetime.utcnow()).strftime('%Y%m%d%H%M%S')

        for attempt in range(MAX_NAME_ATTEMPTS):
            name = base_name if attempt == 0 else f"{base_name}_{attempt}"
            job_log = JobLog(name=name, status=JobStatus.PENDING.value)
            self.db.session.add(job_log)
            try:
                self.db.session.commit()
                return job_log
            except IntegrityError:
                self.db.session.rollback()
                log.debug(f"Job log name {name} already taken")

        log.error(f"Gave up creating a job log after {MAX_NAME_ATTEMPTS} collisions on {base_name}")
        raise JobLogNameCollisionError(
            f"Too many collisions creating job log {base_name} ({MAX_NAME_ATTEMPTS} attempts)"
        )

    def add_detail(self, job_log, message):
        """Append a detail line to a job log.

        Messages longer than the column limit are truncated.

        Args:
            job_log: Owning job log
            message: Free-text message

        Returns:
            JobLogDetail: Created detail
        """
        if message and len(message) > MAX_MESSAGE_LENGTH:
            message = message[:MAX_MESSAGE_LENGTH - len(TRUNCATION_MARKER)] + TRUNCATION_MARKER

        detail = JobLogDetail(message=message, job_log=job_log)
        try:
            self.db.session.add(detail)
            self.db.session.commit()
            return detail
        except SQLAlchemyError as e:
            log.error(f"Error adding detail to job log {job_log.name}: {e}")
            self.db.session.rollback()
            raise

    def transition(self, job_log, status):
        """Move a job log forward in its lifecycle.

        Args:
            job_log: Job log to update
            status: Target ``JobStatus`` or its string value

        Returns:
            JobLog: The updated log

        Raises:
            InvalidStatusTransitionError: If the move is not forward
        """
        target = JobStatus(status)
        if not job_log.can_transition_to(target):
            raise InvalidStatusTransitionError(
                f"Cannot move job log {job_log.name} from {job_log.status} to {target.value}"
            )

        job_log.status = target.value
        try:
            self.db.session.commit()
        except SQLAlchemyError as e:
            log.error(f"Error updating job log {job_log.name} to {target.value}: {e}")
            self.db.session.rollback()
            raise
        return job_log

    def processing(self, job_log):
        return self.transition(job_log, JobStatus.PROCESSING)

    def success(self, job_log):
        return self.transition(job_log, JobStatus.SUCCESS)

    def error(self, job_log):
        return self.transition(job_log, JobStatus.ERROR)

    def get(self, job_log_id):
        return self.db.session.get(JobLog, job_log_id)

    def get_details(self, job_log):
        """Details of a job log in creation order."""
        return JobLogDetail.query.filter_by(job_log_id=job_log.id).order_by(
            JobLogDetail.created_at.asc(), JobLogDetail.id.asc()
        ).all()

    def paginate(self, page=1, per_page=25):
        """Newest-first page of job logs."""
        return JobLog.query.order_by(
            JobLog.created_at.desc(), JobLog.id.desc()
        ).paginate(page=page, per_page=per_page, error_out=False)

    def latest(self):
        return JobLog.query.order_by(JobLog.created_at.desc(), JobLog.id.desc()).first()

    def delete(self, job_log):
        """Delete a job log together with its details."""
        try:
            self.db.session.delete(job_log)
            self.db.session.commit()
        except SQLAlchemyError as e:
            log.error(f"Error deleting job log {job_log.name}: {e}")
            self.db.session.rollback()
            raise

    def prune_older_than(self, days):
        """Remove job logs (and their details) older than ``days``.

        Args:
            days: Number of days of history to retain

        Returns:
            int: Number of job logs deleted
        """
        cutoff_date = datetime.utcnow() - timedelta(days=days)
        old_ids = select(JobLog.id).where(JobLog.created_at < cutoff_date)

        try:
            JobLogDetail.query.filter(JobLogDetail.job_log_id.in_(old_ids)).delete(
                synchronize_session=False
            )
            count = JobLog.query.filter(JobLog.created_at < cutoff_date).delete(synchronize_session=False)
            self.db.session.commit()
        except SQLAlchemyError as e:
            log.error(f"Error pruning job logs: {e}")
            self.db.session.rollback()
            raise

        log.info(f"Pruned {count} job logs older than {days} days")
        return count
