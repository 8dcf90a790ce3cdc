"""
Initialize Flask extensions for the application.

These extensions are instantiated here and initialized in the application factory.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_apscheduler import APScheduler
from sqlalchemy import event
from sqlalchemy.engine import Engine

# SQLAlchemy for the open_orders replica and the job logs
db = SQLAlchemy()

# Flask-Migrate for database migrations
migrate = Migrate()

# Runs the sync and cleanup jobs; started by init_tasks
scheduler = APScheduler()

@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on."""
    if type(dbapi_connection).__module__.startswith('sqlite3'):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

def init_extensions(app):
    """Initialize all Flask extensions."""
    db.init_app(app)
    migrate.init_app(app, db)
    scheduler.init_app(app)
