"""Run log of the open orders sync job."""

import enum
import re
from datetime import datetime
from sqlalchemy.orm import validates
from ordersync.extensions import db

NAME_PATTERN = re.compile(r'^\d{14}(_\d+)?$')
MAX_MESSAGE_LENGTH = 5000

class JobStatus(str, enum.Enum):
    """Lifecycle states of one sync run."""

    PENDING = 'pending'
    PROCESSING = 'processing'
    ERROR = 'error'
    SUCCESS = 'success'

# Forward-only moves; terminal states have no way out
ALLOWED_TRANSITIONS = {
    JobStatus.PENDING: {JobStatus.PROCESSING, JobStatus.ERROR},
    JobStatus.PROCESSING: {JobStatus.SUCCESS, JobStatus.ERROR},
    JobStatus.ERROR: set(),
    JobStatus.SUCCESS: set(),
}

class JobLog(db.Model):
    """One execution of the sync job."""

    __tablename__ = 'job_logs'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(32), nullable=False, unique=True, index=True)
    status = db.Column(db.String(20), nullable=False, default=JobStatus.PENDING.value, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    details = db.relationship(
        'JobLogDetail',
        back_populates='job_log',
        cascade='all, delete-orphan',
        order_by=lambda: [JobLogDetail.created_at, JobLogDetail.id],
        lazy='select',
    )

    def __repr__(self):
        return f'<JobLog {self.name}: {self.status}>'

    @validates('name')
    def validate_name(self, key, name):
        if not name or not NAME_PATTERN.match(name):
            raise ValueError(f"Job log name must be YYYYMMDDhhmmss format, got {name!r}")
        return name

    @property
    def job_status(self):
        return JobStatus(self.status)

    def can_transition_to(self, status):
        return JobStatus(status) in ALLOWED_TRANSITIONS[self.job_status]

class JobLogDetail(db.Model):
    """Free-text progress line belonging to a job log."""

    __tablename__ = 'job_log_details'

    id = db.Column(db.Integer, primary_key=True)
    job_log_id = db.Column(
        db.Integer,
        db.ForeignKey('job_logs.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )
    message = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)

    job_log = db.relationship('JobLog', back_populates='details')

    def __repr__(self):
        return f'<JobLogDetail {self.id} of {self.job_log_id}>'

    @validates('message')
    def validate_message(self, key, message):
        if message is None or not message.strip():
            raise ValueError("Job log detail message can't be blank")
        if len(message) > MAX_MESSAGE_LENGTH:
            raise ValueError(f"Job log detail message is too long (maximum is {MAX_MESSAGE_LENGTH} characters)")
        return message
