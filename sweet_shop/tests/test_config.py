import os
from datetime import timedelta

import pytest

from sweet_shop.config import load_config, parse_expiry


@pytest.mark.parametrize('value, expected', [
    ('7d', timedelta(days=7)),
    ('12h', timedelta(hours=12)),
    ('30m', timedelta(minutes=30)),
    ('45s', timedelta(seconds=45)),
    ('3600', timedelta(seconds=3600)),
    (' 2d ', timedelta(days=2)),
])
def test_parse_expiry(value, expected):
    assert parse_expiry(value) == expected


@pytest.mark.parametrize('value', ['', 'week', '7w', '-1d', '1.5h'])
def test_parse_expiry_rejects_garbage(value):
    with pytest.raises(ValueError):
        parse_expiry(value)


def test_load_config_reads_environment(monkeypatch, tmp_path):
    monkeypatch.setenv('JWT_SECRET', 'from-env-secret')
    monkeypatch.setenv('JWT_EXPIRE', '1h')
    monkeypatch.setenv('SWEET_SHOP_DATA_DIR', str(tmp_path))
    monkeypatch.setenv('CORS_ORIGINS', 'http://a.test, http://b.test')
    monkeypatch.setenv('ENABLE_PROFILING', 'false')

    config = load_config()
    assert config['JWT_SECRET_KEY'] == 'from-env-secret'
    assert config['JWT_ACCESS_TOKEN_EXPIRES'] == timedelta(hours=1)
    assert config['DATA_DIR'] == str(tmp_path)
    assert config['CORS_ORIGINS'] == ['http://a.test', 'http://b.test']
    assert config['ENABLE_PROFILING'] is False


def test_overrides_win(monkeypatch):
    monkeypatch.setenv('PORT', '8080')
    assert load_config({'PORT': 9000})['PORT'] == 9000


def test_profiling_writes_route_logs(client, app, user_token):
    client.get('/api/sweets', headers={'Authorization': f'Bearer {user_token}'})
    log_path = os.path.join(app.config['LOG_DIR'], 'performance.log')
    assert os.path.exists(log_path)
    with open(log_path, 'r', encoding='utf-8') as f:
        assert 'GET' in f.read()
