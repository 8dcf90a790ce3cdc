import json
import logging

from ordersync.logger import JSONFormatter, SecretMaskingFilter, build_logging_config, setup_logging

def _record(msg, *args, **extra):
    record = logging.LogRecord('ordersync.tasks', logging.ERROR, __file__, 1, msg, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record

def test_json_formatter_includes_app_and_extra_fields():
    formatter = JSONFormatter(app_name='Open Orders', version='1.0.0')

    data = json.loads(formatter.format(_record('Fetched %d records', 12, job_log='20251215103045')))

    assert data['message'] == 'Fetched 12 records'
    assert data['level'] == 'ERROR'
    assert data['app'] == 'Open Orders'
    assert data['version'] == '1.0.0'
    assert data['job_log'] == '20251215103045'

def test_masking_filter_replaces_secrets():
    record = _record("Login failed for reader with %s", 'hunter2')

    assert SecretMaskingFilter(['hunter2', None]).filter(record) is True
    assert record.getMessage() == 'Login failed for reader with ***'

def test_masking_filter_leaves_clean_records_alone():
    record = _record('Connected to %s', 'sql.example.com')

    SecretMaskingFilter(['hunter2']).filter(record)

    assert record.args == ('sql.example.com',)

def test_logging_config_formatter_choice(app, tmp_path):
    app.config['LOG_FORMAT'] = 'standard'
    config = build_logging_config(app, str(tmp_path))

    assert config['handlers']['console']['formatter'] == 'standard'
    assert config['handlers']['file']['filename'] == str(tmp_path / 'app.log')
    assert config['filters']['mask_secrets']['secrets'][0] == 's3cr3t-pw'

def test_logging_config_masks_both_passwords(app, tmp_path):
    secrets = build_logging_config(app, str(tmp_path))['filters']['mask_secrets']['secrets']

    assert secrets == ['s3cr3t-pw', 'secret']

def test_logging_config_skips_default_admin_password(app, tmp_path):
    app.config['ADMIN_PASSWORD'] = 'password'
    secrets = build_logging_config(app, str(tmp_path))['filters']['mask_secrets']['secrets']

    assert secrets == ['s3cr3t-pw']

    record = _record('Reset password for %s', 'reader')
    SecretMaskingFilter(secrets).filter(record)
    assert record.getMessage() == 'Reset password for reader'

def test_setup_logging_creates_log_dir(app, tmp_path):
    log_dir = tmp_path / 'logs'
    app.config['LOG_DIR'] = str(log_dir)

    try:
        setup_logging(app)
        assert log_dir.is_dir()
    finally:
        for handler in list(logging.getLogger().handlers):
            if isinstance(handler, logging.FileHandler):
                handler.close()
                logging.getLogger().removeHandler(handler)
