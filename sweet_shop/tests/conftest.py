import pytest

from sweet_shop.main import create_app

TEST_SECRET = 'test-secret-key-with-at-least-32-characters!'


@pytest.fixture
def app(tmp_path):
    app = create_app({
        'DATA_DIR': str(tmp_path / 'data'),
        'LOG_DIR': str(tmp_path / 'logs'),
        'JWT_SECRET_KEY': TEST_SECRET,
        'ENABLE_PROFILING': True,
        'TESTING': True,
    })
    yield app


@pytest.fixture
def client(app):
    with app.test_client() as c:
        yield c


def register(client, email, password='password123', name='Test User', role=None):
    payload = {'email': email, 'password': password, 'name': name}
    if role:
        payload['role'] = role
    return client.post('/api/auth/register', json=payload)


def auth_header(token):
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def user_token(client):
    r = register(client, 'user@test.com', name='Test User', role='user')
    assert r.status_code == 201
    return r.get_json()['token']


@pytest.fixture
def admin_token(client):
    r = register(client, 'admin@test.com', name='Test Admin', role='admin')
    assert r.status_code == 201
    return r.get_json()['token']


def create_sweet(client, admin_token, **overrides):
    payload = {'name': 'Chocolate Bar', 'category': 'chocolate', 'price': 2.5, 'quantity': 10}
    payload.update(overrides)
    r = client.post('/api/sweets', json=payload, headers=auth_header(admin_token))
    assert r.status_code == 201, r.get_json()
    return r.get_json()['data']
