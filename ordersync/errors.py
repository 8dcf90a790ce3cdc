from flask import render_template
from werkzeug.exceptions import HTTPException

class AppError(Exception):
    """Base exception class for application-specific errors."""

    def __init__(self, message=None, details=None, status_code=None):
        super().__init__(message)
        self.message = message or "An unexpected error occurred"
        self.details = details
        self.status_code = status_code or 500

class ResourceNotFoundError(AppError):
    """Exception for requests to non-existent resources."""

    def __init__(self, message=None, details=None):
        super().__init__(
            message=message or "Resource not found",
            details=details,
            status_code=404
        )

class SyncError(AppError):
    """Base class for failures raised by the open orders sync pipeline."""

    default_message = "Sync error"

    def __init__(self, message=None, details=None):
        super().__init__(
            message=message or self.default_message,
            details=details,
            status_code=500
        )

class SourceConnectionError(SyncError):
    """The SQL Server could not be reached or refused the login."""

    default_message = "SQL Server connection failed"

class SourceQueryError(SyncError):
    """The SQL Server was reachable but the query failed."""

    default_message = "SQL Server query failed"

class OrderImportError(SyncError):
    """Writing the snapshot into open_orders failed and was rolled back."""

    default_message = "Data import failed"

class JobLogNameCollisionError(SyncError):
    """No free job log name could be derived from the timestamp."""

    default_message = "Too many job log name collisions"

class InvalidStatusTransitionError(SyncError):
    """A job log was asked to move backwards or out of a terminal state."""

    default_message = "Invalid job log status transition"

def register_error_handlers(app):
    """Register application error handlers."""

    @app.errorhandler(404)
    def page_not_found(e):
        """Handle 404 errors."""
        return render_template("errors/404.html", error=e), 404

    @app.errorhandler(500)
    def internal_server_error(e):
        """Handle 500 errors."""
        return render_template("errors/500.html", error=e), 500

    @app.errorhandler(AppError)
    def handle_app_error(e):
        """Handle application specific errors."""
        if e.status_code == 404:
            return render_template("errors/404.html", error=e), 404
        return render_template("errors/500.html", error=e), e.status_code or 500

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        """Pass other HTTP errors (401, 405, ...) through unchanged."""
        return e
