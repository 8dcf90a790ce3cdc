import logging
from datetime import datetime
from flask import Blueprint, current_app, jsonify
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql import text
from ordersync.extensions import db
from ordersync.models.job_log_repository import SqlAlchemyJobLogRepository
from ordersync.models.open_order_repository import SqlAlchemyOpenOrderRepository

health_bp = Blueprint('health', __name__)
log = logging.getLogger(__name__)
start_time = datetime.utcnow()

def _check_db_connection():
    """Check if the database connection is working."""
    try:
        db.session.execute(text('SELECT 1'))
        return True
    except SQLAlchemyError as e:
        log.error(f"Database health check failed: {e}")
        db.session.rollback()
        return False

def _latest_sync():
    job_log = SqlAlchemyJobLogRepository(db).latest()
    if job_log is None:
        return None
    return {
        'name': job_log.name,
        'status': job_log.status,
        'created_at': job_log.created_at.isoformat(),
    }

@health_bp.route('/health')
def health():
    """Unauthenticated health check for load balancers."""
    db_ok = _check_db_connection()
    status = {
        'status': 'ok' if db_ok else 'unhealthy',
        'version': current_app.config.get('VERSION', '1.0.0'),
        'timestamp': datetime.utcnow().isoformat(),
        'uptime': str(datetime.utcnow() - start_time).split('.')[0],
        'database': 'connected' if db_ok else 'disconnected',
        'last_sync': _latest_sync() if db_ok else None,
        'open_orders': SqlAlchemyOpenOrderRepository(db).count() if db_ok else None,
    }
    return jsonify(status), 200 if db_ok else 503
