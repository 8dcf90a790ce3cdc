"""Gunicorn configuration file."""

import os

# Server socket
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")

# Worker processes. Keep one worker: every worker would start its own
# sync scheduler and the sync must never run twice at the same time.
workers = int(os.getenv("GUNICORN_WORKERS", "1"))
worker_class = os.getenv("GUNICORN_WORKER_CLASS", "gthread")
threads = int(os.getenv("GUNICORN_THREADS", "4"))
timeout = int(os.getenv("GUNICORN_TIMEOUT", "120"))
graceful_timeout = int(os.getenv("GUNICORN_GRACEFUL_TIMEOUT", "30"))
keepalive = int(os.getenv("GUNICORN_KEEPALIVE", "5"))

# Debug config
reload = os.getenv("FLASK_ENV", "production") == "development"

# Logging
errorlog = os.getenv("GUNICORN_ERROR_LOG", "-")
loglevel = os.getenv("GUNICORN_LOG_LEVEL", "info")
accesslog = os.getenv("GUNICORN_ACCESS_LOG", "-")

# When using a reverse proxy
forwarded_allow_ips = os.getenv("GUNICORN_FORWARDED_ALLOW_IPS", "127.0.0.1,::1")

# The app (and its scheduler) is created after fork
preload_app = False

def on_starting(server):
    """Log when the server is starting."""
    server.log.info("Open orders server is starting")

def post_worker_init(worker):
    """Log when a worker is initialized."""
    worker.log.info(f"Worker {worker.pid} initialized")
