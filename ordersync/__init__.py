import os
from datetime import datetime
from flask import Flask

from ordersync.extensions import init_extensions
from ordersync.errors import register_error_handlers

def create_app(test_config=None):
    """Application factory function."""
    # Create and configure the app
    app = Flask(__name__, instance_relative_config=True)

    # Load configuration
    from ordersync.config import get_config
    if test_config is None:
        config_name = os.environ.get('FLASK_ENV', 'default')
        app.config.from_object(get_config(config_name))
    else:
        # Test config overrides the testing defaults
        app.config.from_object(get_config('testing'))
        app.config.from_mapping(test_config)

    # Ensure the instance folder exists
    os.makedirs(app.instance_path, exist_ok=True)

    # Configure logging
    if not app.config.get('TESTING'):
        from ordersync.logger import setup_logging
        setup_logging(app)

    # Initialize extensions
    init_extensions(app)

    # Import models so they are registered with SQLAlchemy
    from ordersync import models  # noqa: F401

    # Register error handlers
    register_error_handlers(app)

    register_blueprints(app)

    from ordersync.utils.template_helpers import register_template_helpers
    register_template_helpers(app)

    from ordersync.cli import register_commands
    register_commands(app)

    @app.context_processor
    def utility_processor():
        return {
            'now': datetime.utcnow(),
            'app_name': app.config.get('APP_NAME', 'Open Orders')
        }

    # Scheduled sync and cleanup jobs
    from ordersync.tasks import init_tasks
    init_tasks(app)

    @app.teardown_appcontext
    def teardown_db(exception=None):
        """Clean up at the end of the request."""
        from ordersync.extensions import db
        db.session.remove()

    return app

def register_blueprints(app):
    """Register all blueprints with the application."""
    from ordersync.web.home import home_bp
    from ordersync.web.health import health_bp
    from ordersync.web.open_orders import open_orders_bp
    from ordersync.web.job_logs import job_logs_bp

    app.register_blueprint(home_bp)
    app.register_blueprint(health_bp)
    app.register_blueprint(open_orders_bp, url_prefix='/open_orders')
    app.register_blueprint(job_logs_bp, url_prefix='/job_logs')

    app.logger.info("Registered blueprints: home, health, open_orders, job_logs")
