"""HTTP Basic authentication shared by the admin pages."""

import hmac
import logging
from flask import Response, current_app, request
from ordersync.config import DEFAULT_ADMIN_PASSWORD

log = logging.getLogger(__name__)

REALM = 'Open Orders'

def _matches(given, expected):
    return hmac.compare_digest((given or '').encode('utf-8'), (expected or '').encode('utf-8'))

def check_credentials(username, password):
    """Compare against ADMIN_USERNAME / ADMIN_PASSWORD from the app config."""
    expected_username = current_app.config.get('ADMIN_USERNAME', 'admin')
    expected_password = current_app.config.get('ADMIN_PASSWORD', DEFAULT_ADMIN_PASSWORD)
    # Both compared unconditionally
    username_ok = _matches(username, expected_username)
    password_ok = _matches(password, expected_password)
    return username_ok and password_ok

def authenticate():
    """401 response asking the browser for credentials."""
    return Response(
        'Authentication required.\n', 401,
        {'WWW-Authenticate': f'Basic realm="{REALM}"'}
    )

def require_basic_auth():
    """before_request hook: returns a 401 response unless credentials match."""
    auth = request.authorization
    if auth is None or not check_credentials(auth.username, auth.password):
        log.warning(f"Rejected unauthenticated request to {request.path}")
        return authenticate()
    return None
