# -*- coding: utf-8 -*-
"""
Tests de la app: errores HTTP, cabeceras de seguridad, CORS y aislamiento
entre apps del mismo proceso.
"""
import json
import os

import pytest

from sweet_shop.main import create_app

from conftest import TEST_SECRET, register


@pytest.fixture
def shop_app(tmp_path):
    return create_app({
        'DATA_DIR': str(tmp_path / 'shop'),
        'LOG_DIR': str(tmp_path / 'shop_logs'),
        'JWT_SECRET_KEY': TEST_SECRET,
        'CORS_ORIGINS': ['http://shop.test'],
        'ENABLE_PROFILING': False,
        'TESTING': True,
    })


def test_wrong_method_is_json_405(client):
    r = client.patch('/api/sweets')
    assert r.status_code == 405
    body = r.get_json()
    assert body['success'] is False
    assert body['message']


def test_security_headers(client):
    r = client.get('/health')
    assert r.headers['X-Frame-Options'] == 'DENY'
    assert r.headers['X-Content-Type-Options'] == 'nosniff'
    assert 'Strict-Transport-Security' not in r.headers


def test_cors_preflight_for_allowed_origin(shop_app):
    with shop_app.test_client() as c:
        r = c.options('/api/sweets', headers={
            'Origin': 'http://shop.test',
            'Access-Control-Request-Method': 'GET',
            'Access-Control-Request-Headers': 'Authorization',
        })
    assert r.status_code == 200
    assert r.headers['Access-Control-Allow-Origin'] == 'http://shop.test'
    assert 'GET' in r.headers['Access-Control-Allow-Methods']


def test_cors_ignores_unknown_origin(shop_app):
    with shop_app.test_client() as c:
        r = c.get('/health', headers={'Origin': 'http://evil.test'})
    assert r.status_code == 200
    assert 'Access-Control-Allow-Origin' not in r.headers


def test_two_apps_keep_their_own_data(app, client, shop_app):
    register(client, 'first@example.com')
    with shop_app.test_client() as c:
        register(c, 'second@example.com')

    # La primera app sigue escribiendo en su carpeta después de crear la segunda
    register(client, 'third@example.com')

    def emails(data_dir):
        with open(os.path.join(data_dir, 'users.json'), 'r', encoding='utf-8') as f:
            return sorted(u['email'] for u in json.load(f).values())

    assert emails(app.config['DATA_DIR']) == ['first@example.com', 'third@example.com']
    assert emails(shop_app.config['DATA_DIR']) == ['second@example.com']
