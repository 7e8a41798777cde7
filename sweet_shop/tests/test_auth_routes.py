import json
import os

from conftest import auth_header, register


def test_register_returns_user_and_token(client):
    r = register(client, 'test@example.com', name='Test User')
    assert r.status_code == 201
    body = r.get_json()
    assert body['success'] is True
    assert body['user']['email'] == 'test@example.com'
    assert body['user']['name'] == 'Test User'
    assert body['user']['role'] == 'user'
    assert 'password' not in body['user']
    assert isinstance(body['token'], str) and body['token']


def test_register_duplicate_email_is_conflict(client):
    assert register(client, 'a@x.com', password='secret1', name='A').status_code == 201
    r = register(client, 'a@x.com', password='secret1', name='A')
    assert r.status_code == 409
    body = r.get_json()
    assert body['success'] is False
    assert 'already exists' in body['message']
    assert 'token' not in body


def test_register_duplicate_email_ignores_case(client):
    assert register(client, 'Mixed@Example.com').status_code == 201
    assert register(client, 'mixed@example.com').status_code == 409


def test_register_validation_errors(client):
    r = client.post('/api/auth/register', json={'email': 'not-an-email', 'password': '123', 'name': ''})
    assert r.status_code == 400
    body = r.get_json()
    assert body['success'] is False
    assert body['message'] == 'Validation failed'
    fields = {e['field'] for e in body['errors']}
    assert fields == {'email', 'password', 'name'}


def test_register_rejects_unknown_role(client):
    r = register(client, 'x@example.com', role='superuser')
    assert r.status_code == 400


def test_register_with_admin_role(client):
    r = register(client, 'boss@example.com', role='admin')
    assert r.status_code == 201
    assert r.get_json()['user']['role'] == 'admin'


def test_password_is_stored_hashed(client, app):
    register(client, 'hash@example.com', password='password123')
    with open(os.path.join(app.config['DATA_DIR'], 'users.json'), 'r', encoding='utf-8') as f:
        users = json.load(f)
    stored = next(u for u in users.values() if u['email'] == 'hash@example.com')
    assert stored['password'] != 'password123'
    assert 'password123' not in json.dumps(users)


def test_login_success(client):
    register(client, 'login@example.com', password='password123')
    r = client.post('/api/auth/login', json={'email': 'login@example.com', 'password': 'password123'})
    assert r.status_code == 200
    body = r.get_json()
    assert body['success'] is True
    assert body['user']['email'] == 'login@example.com'
    assert body['token']


def test_login_wrong_password_and_unknown_email_look_the_same(client):
    register(client, 'login@example.com', password='password123')
    wrong_pwd = client.post('/api/auth/login', json={'email': 'login@example.com', 'password': 'nope!!'})
    unknown = client.post('/api/auth/login', json={'email': 'ghost@example.com', 'password': 'password123'})

    for r in (wrong_pwd, unknown):
        assert r.status_code == 401
        body = r.get_json()
        assert body == {'success': False, 'message': 'Invalid credentials'}


def test_login_validation(client):
    r = client.post('/api/auth/login', json={'email': 'bad', 'password': ''})
    assert r.status_code == 400
    assert r.get_json()['message'] == 'Validation failed'


def test_malformed_json_body(client):
    r = client.post('/api/auth/login', data='{not json', content_type='application/json')
    assert r.status_code == 400
    assert r.get_json()['success'] is False


def test_token_from_login_grants_access(client):
    register(client, 'reader@example.com')
    token = client.post('/api/auth/login', json={
        'email': 'reader@example.com', 'password': 'password123'
    }).get_json()['token']
    r = client.get('/api/sweets', headers=auth_header(token))
    assert r.status_code == 200


def test_health(client):
    r = client.get('/health')
    assert r.status_code == 200
    assert r.get_json()['status'] == 'OK'


def test_unknown_route_is_json_404(client):
    r = client.get('/api/nothing-here')
    assert r.status_code == 404
    assert r.get_json()['success'] is False
