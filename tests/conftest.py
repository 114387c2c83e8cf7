import pytest

from app import create_app
from app.config import TestConfig
from app.models import db, User

PASSWORD = 'secret123'


@pytest.fixture
def app(tmp_path):
    class Config(TestConfig):
        UPLOAD_FOLDER = tmp_path / 'uploads'

    app = create_app(Config)
    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    """Create a user directly in the database and return its id."""
    def _make_user(email, name='Test Farmer', password=PASSWORD, is_admin=False, phone=None):
        with app.app_context():
            user = User(name=name, email=email, phone=phone, is_admin=is_admin)
            user.set_password(password)
            db.session.add(user)
            db.session.commit()
            return user.id
    return _make_user


@pytest.fixture
def login():
    def _login(client, email, password=PASSWORD):
        resp = client.post('/api/login', json={'email': email, 'password': password})
        assert resp.status_code == 200, resp.get_json()
        return resp
    return _login


@pytest.fixture
def farmer(make_user):
    return make_user('farmer@example.com', name='Jane Farmer', phone='0700111222')


@pytest.fixture
def farmer_client(app, farmer, login):
    client = app.test_client()
    login(client, 'farmer@example.com')
    return client


@pytest.fixture
def other_client(app, make_user, login):
    make_user('other@example.com', name='Other Farmer')
    client = app.test_client()
    login(client, 'other@example.com')
    return client


@pytest.fixture
def admin_client(app, make_user, login):
    make_user('admin@example.com', name='Site Admin', is_admin=True)
    client = app.test_client()
    login(client, 'admin@example.com')
    return client
