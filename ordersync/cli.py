import click
from flask import current_app
from flask.cli import with_appcontext

from ordersync.clients import SqlServerClient, SqlServerConfig
from ordersync.errors import SyncError
from ordersync.extensions import db
from ordersync.tasks.cleanup_tasks import prune_job_logs
from ordersync.tasks.sync_tasks import SOURCE_VIEW, run_sync

@click.command('init-db')
@with_appcontext
def init_db_command():
    """Initialize the database tables."""
    click.echo('Initializing the database...')

    # Create all tables
    db.create_all()

    click.echo('Database initialized successfully!')

@click.command('run-sync')
@click.option('--retries', type=int, default=None, help='Attempts for connection/query failures (defaults to SYNC_RETRY_ATTEMPTS)')
@with_appcontext
def run_sync_command(retries):
    """Run the open orders sync once, now."""
    max_attempts = retries if retries is not None else current_app.config.get('SYNC_RETRY_ATTEMPTS', 3)
    result = run_sync(
        max_attempts=max_attempts,
        retry_delay=current_app.config.get('SYNC_RETRY_DELAY_SECONDS', 30),
    )

    if result.succeeded:
        click.echo(f"Sync completed: {result.record_count} records imported")
    else:
        click.echo(f"Sync failed after {result.attempts} attempt(s) ({result.error_kind}): {result.message}", err=True)
        raise SystemExit(1)

@click.command('test-source-connection')
@with_appcontext
def test_source_connection_command():
    """Check that the SQL Server is reachable and the view readable."""
    config = SqlServerConfig.from_mapping(current_app.config)
    click.echo(f"Connecting to SQL Server {config.display_name}...")

    try:
        with SqlServerClient(config) as client:
            client.connect()
            rows = client.execute(f"SELECT TOP 1 * FROM {SOURCE_VIEW}")
    except SyncError as e:
        click.echo(f"Connection test failed: {e.message}", err=True)
        raise SystemExit(1)

    click.echo(f"Connected successfully, {SOURCE_VIEW} returned {len(rows)} row(s)")

@click.command('prune-job-logs')
@click.option('--days', type=int, default=None, help='Keep this many days of job logs (defaults to JOB_LOG_RETENTION_DAYS)')
@with_appcontext
def prune_job_logs_command(days):
    """Delete job logs older than the retention period."""
    count = prune_job_logs(current_app._get_current_object(), days=days)
    click.echo(f"Deleted {count} job logs")

def register_commands(app):
    """Register CLI commands with the app."""
    app.cli.add_command(init_db_command)
    app.cli.add_command(run_sync_command)
    app.cli.add_command(test_source_connection_command)
    app.cli.add_command(prune_job_logs_command)
