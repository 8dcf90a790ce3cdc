"""Database models for the application."""

from ordersync.models.open_order import OpenOrder
from ordersync.models.job_log import JobLog, JobLogDetail, JobStatus
