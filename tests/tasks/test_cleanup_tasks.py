from datetime import datetime, timedelta

from ordersync.models.job_log import JobLog
from ordersync.tasks import cleanup_tasks, init_tasks
from ordersync.tasks.cleanup_tasks import prune_job_logs, setup_cleanup_jobs

def _add_log(db, name, age_days):
    db.session.add(JobLog(name=name, created_at=datetime.utcnow() - timedelta(days=age_days)))
    db.session.commit()

def test_prune_uses_retention_setting(app, db):
    _add_log(db, '20240101000000', 200)
    _add_log(db, '20251201000000', 1)
    app.config['JOB_LOG_RETENTION_DAYS'] = 90

    assert prune_job_logs(app) == 1
    assert JobLog.query.count() == 1

def test_prune_disabled_with_zero_days(app, db):
    _add_log(db, '20240101000000', 200)
    app.config['JOB_LOG_RETENTION_DAYS'] = 0

    assert prune_job_logs(app) == 0
    assert JobLog.query.count() == 1

def test_setup_cleanup_jobs(app, mocker):
    scheduler = mocker.patch.object(cleanup_tasks, 'scheduler')

    setup_cleanup_jobs(app)

    kwargs = scheduler.add_job.call_args.kwargs
    assert kwargs['id'] == 'prune_job_logs'
    assert kwargs['trigger'] == 'cron'

def test_init_tasks_does_not_start_scheduler_when_testing(app, mocker):
    start = mocker.patch('ordersync.tasks.scheduler.start')

    assert init_tasks(app) is False
    start.assert_not_called()

def test_init_tasks_starts_scheduler_when_enabled(app, mocker):
    app.config.update(TESTING=False, SYNC_ENABLED=True)
    mocker.patch('ordersync.tasks.sync_tasks.scheduler')
    mocker.patch('ordersync.tasks.cleanup_tasks.scheduler')
    scheduler = mocker.patch('ordersync.tasks.scheduler')
    scheduler.running = False

    assert init_tasks(app) is True
    scheduler.start.assert_called_once()
