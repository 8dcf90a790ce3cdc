import logging
from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for
from ordersync.extensions import db
from ordersync.models.job_log_repository import SqlAlchemyJobLogRepository
from ordersync.web.auth import require_basic_auth

job_logs_bp = Blueprint('job_logs', __name__)
log = logging.getLogger(__name__)
job_log_repo = SqlAlchemyJobLogRepository(db)

job_logs_bp.before_request(require_basic_auth)

@job_logs_bp.route('/')
def index():
    """Sync runs, newest first."""
    page = request.args.get('page', 1, type=int)
    per_page = current_app.config.get('JOB_LOGS_PER_PAGE', 25)
    pagination = job_log_repo.paginate(page=page, per_page=per_page)

    return render_template('job_logs/index.html', pagination=pagination, job_logs=pagination.items)

@job_logs_bp.route('/<int:job_log_id>')
def show(job_log_id):
    """One sync run with its progress lines in order."""
    job_log = job_log_repo.get(job_log_id)
    if job_log is None:
        log.warning(f"Job log with ID {job_log_id} not found")
        flash('Job log not found.', 'warning')
        return redirect(url_for('job_logs.index'))

    return render_template(
        'job_logs/show.html',
        job_log=job_log,
        details=job_log_repo.get_details(job_log)
    )
