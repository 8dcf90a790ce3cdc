from datetime import datetime, timedelta

import pytest

from ordersync.errors import InvalidStatusTransitionError, JobLogNameCollisionError
from ordersync.models.job_log import JobLog, JobLogDetail, JobStatus, MAX_MESSAGE_LENGTH

STAMP = datetime(2025, 12, 15, 10, 30, 45)

def test_create_with_timestamp(job_log_repository):
    job_log = job_log_repository.create_with_timestamp(STAMP)

    assert job_log.id is not None
    assert job_log.name == '20251215103045'
    assert job_log.status == JobStatus.PENDING.value

def test_name_collisions_get_suffixes(job_log_repository):
    names = [job_log_repository.create_with_timestamp(STAMP).name for _ in range(3)]

    assert names == ['20251215103045', '20251215103045_1', '20251215103045_2']

def test_too_many_collisions_fail(db, job_log_repository):
    base = '20251215103045'
    db.session.add(JobLog(name=base))
    for suffix in range(1, 100):
        db.session.add(JobLog(name=f'{base}_{suffix}'))
    db.session.commit()

    with pytest.raises(JobLogNameCollisionError):
        job_log_repository.create_with_timestamp(STAMP)

    assert JobLog.query.count() == 100

def test_invalid_name_rejected():
    with pytest.raises(ValueError):
        JobLog(name='yesterday')

def test_forward_transitions(job_log_repository):
    job_log = job_log_repository.create_with_timestamp(STAMP)

    job_log_repository.processing(job_log)
    assert job_log.status == 'processing'

    job_log_repository.success(job_log)
    assert job_log.status == 'success'

def test_pending_can_fail_directly(job_log_repository):
    job_log = job_log_repository.create_with_timestamp(STAMP)

    job_log_repository.error(job_log)

    assert job_log.status == 'error'

@pytest.mark.parametrize('path, invalid', [
    (['processing', 'success'], 'processing'),
    (['processing', 'error'], 'success'),
    (['processing'], 'pending'),
    ([], 'success'),
])
def test_invalid_transitions(job_log_repository, path, invalid):
    job_log = job_log_repository.create_with_timestamp(STAMP)
    for status in path:
        job_log_repository.transition(job_log, status)

    with pytest.raises(InvalidStatusTransitionError):
        job_log_repository.transition(job_log, invalid)

def test_details_are_ordered_by_creation(db, job_log_repository):
    job_log = job_log_repository.create_with_timestamp(STAMP)
    db.session.add_all([
        JobLogDetail(message='third', job_log=job_log, created_at=STAMP + timedelta(seconds=3)),
        JobLogDetail(message='first', job_log=job_log, created_at=STAMP + timedelta(seconds=1)),
        JobLogDetail(message='second', job_log=job_log, created_at=STAMP + timedelta(seconds=2)),
    ])
    db.session.commit()

    assert [d.message for d in job_log_repository.get_details(job_log)] == ['first', 'second', 'third']

def test_add_detail(job_log_repository):
    job_log = job_log_repository.create_with_timestamp(STAMP)

    job_log_repository.add_detail(job_log, 'Job started - SyncOpenOrdersJob')
    job_log_repository.add_detail(job_log, 'Connected successfully')

    messages = [d.message for d in job_log_repository.get_details(job_log)]
    assert messages == ['Job started - SyncOpenOrdersJob', 'Connected successfully']

def test_long_detail_is_truncated(job_log_repository):
    job_log = job_log_repository.create_with_timestamp(STAMP)

    detail = job_log_repository.add_detail(job_log, 'x' * (MAX_MESSAGE_LENGTH + 100))

    assert len(detail.message) == MAX_MESSAGE_LENGTH
    assert detail.message.endswith('...')

def test_blank_detail_is_rejected(job_log_repository):
    job_log = job_log_repository.create_with_timestamp(STAMP)

    with pytest.raises(ValueError):
        job_log_repository.add_detail(job_log, '   ')

    assert job_log_repository.get_details(job_log) == []

def test_delete_cascades_to_details(job_log_repository):
    job_log = job_log_repository.create_with_timestamp(STAMP)
    job_log_repository.add_detail(job_log, 'one')
    job_log_repository.add_detail(job_log, 'two')

    job_log_repository.delete(job_log)

    assert JobLog.query.count() == 0
    assert JobLogDetail.query.count() == 0

def test_paginate_newest_first(db, job_log_repository):
    for minute in range(30):
        db.session.add(JobLog(name=f'2025121510{minute:02d}00', created_at=STAMP + timedelta(minutes=minute)))
    db.session.commit()

    page = job_log_repository.paginate(page=1, per_page=25)

    assert page.total == 30
    assert len(page.items) == 25
    assert page.items[0].name == '20251215102900'
    assert job_log_repository.latest().name == '20251215102900'

def test_prune_older_than(db, job_log_repository):
    old = JobLog(name='20240101000000', created_at=datetime.utcnow() - timedelta(days=120))
    recent = JobLog(name='20251201000000', created_at=datetime.utcnow() - timedelta(days=5))
    db.session.add_all([old, recent])
    db.session.commit()
    job_log_repository.add_detail(old, 'old detail')
    job_log_repository.add_detail(recent, 'recent detail')

    assert job_log_repository.prune_older_than(90) == 1

    db.session.expire_all()
    assert [j.name for j in JobLog.query.all()] == ['20251201000000']
    assert [d.message for d in JobLogDetail.query.all()] == ['recent detail']
