from datetime import timedelta

import pytest

from sweet_shop.app_container import get_container

from conftest import TEST_SECRET, auth_header, create_sweet, register

MISSING_ID = 'f' * 32


def test_no_token_is_401(client):
    r = client.get('/api/sweets')
    assert r.status_code == 401
    assert r.get_json() == {'success': False, 'message': 'Access token is required'}


def test_admin_endpoint_without_token_is_401(client):
    r = client.post('/api/sweets', json={'name': 'Test', 'category': 'candy', 'price': 1, 'quantity': 10})
    assert r.status_code == 401
    assert r.get_json()['success'] is False


@pytest.mark.parametrize('header', [
    'Bearer not-a-jwt',
    'Bearer a.b.c',
    'Token abc',
    'Bearer',
])
def test_bad_authorization_header_is_401(client, header):
    r = client.get('/api/sweets', headers={'Authorization': header})
    assert r.status_code == 401
    assert r.get_json()['success'] is False


def test_token_signed_with_other_key_is_401(client, app, user_token):
    from flask_jwt_extended import create_access_token

    app.config['JWT_SECRET_KEY'] = 'another-secret-key-with-at-least-32-chars'
    with app.app_context():
        forged = create_access_token(identity='0' * 32, additional_claims={'role': 'admin'})
    app.config['JWT_SECRET_KEY'] = TEST_SECRET

    r = client.get('/api/sweets', headers=auth_header(forged))
    assert r.status_code == 401
    assert r.get_json()['message'] == 'Invalid or expired token'


def test_expired_token_is_401(client, app):
    user = register(client, 'late@example.com').get_json()['user']
    with app.app_context():
        token = get_container().auth_service.generate_token(
            user['id'], 'user', expires=timedelta(seconds=-10)
        )
    r = client.get('/api/sweets', headers=auth_header(token))
    assert r.status_code == 401
    assert r.get_json()['message'] == 'Invalid or expired token'


def test_token_of_deleted_user_is_401(client, app):
    body = register(client, 'gone@example.com').get_json()
    with app.app_context():
        get_container().user_repo.delete(body['user']['id'])

    r = client.get('/api/sweets', headers=auth_header(body['token']))
    assert r.status_code == 401
    assert r.get_json()['message'] == 'Invalid token'


def test_user_cannot_use_admin_endpoints(client, user_token, admin_token):
    sweet = create_sweet(client, admin_token)
    headers = auth_header(user_token)

    checks = [
        client.post('/api/sweets', json={'name': 'X', 'category': 'candy', 'price': 1, 'quantity': 1},
                    headers=headers),
        client.put(f"/api/sweets/{sweet['id']}", json={'name': 'Hacked Sweet'}, headers=headers),
        client.delete(f"/api/sweets/{sweet['id']}", headers=headers),
        client.post(f"/api/sweets/{sweet['id']}/restock", json={'quantity': 5}, headers=headers),
    ]
    for r in checks:
        assert r.status_code == 403
        assert r.get_json() == {'success': False, 'message': 'Admin access required'}

    # Nada cambió
    r = client.get(f"/api/sweets/{sweet['id']}", headers=headers)
    assert r.get_json()['data']['name'] == 'Chocolate Bar'
    assert r.get_json()['data']['quantity'] == 10


@pytest.mark.parametrize('sweet_id', [MISSING_ID, 'not-a-valid-id'])
def test_user_delete_is_403_regardless_of_existence(client, user_token, sweet_id):
    r = client.delete(f'/api/sweets/{sweet_id}', headers=auth_header(user_token))
    assert r.status_code == 403


def test_user_can_read_and_purchase(client, user_token, admin_token):
    sweet = create_sweet(client, admin_token)
    headers = auth_header(user_token)
    assert client.get('/api/sweets', headers=headers).status_code == 200
    assert client.get('/api/sweets/search?name=choc', headers=headers).status_code == 200
    r = client.post(f"/api/sweets/{sweet['id']}/purchase", json={'quantity': 1}, headers=headers)
    assert r.status_code == 200
