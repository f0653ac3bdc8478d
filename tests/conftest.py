"""
Shared fixtures: a fresh in-memory app per test, model factories and
signed-in clients. Outbound email is captured instead of sent.
"""

import pytest

from app import create_app
from extensions import db
from models import User, Portfolio, Role
from utils import notifications as email
from utils.security import hash_password

PASSWORD = 'secret123'


@pytest.fixture
def app():
    app = create_app('testing')
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def sent_emails(monkeypatch):
    """Record every templated email instead of talking to SMTP"""
    sent = []

    def recorder(name):
        def record(*args, **kwargs):
            sent.append((name, args, kwargs))
            return True
        return record

    for name in ('send_registration_confirmation', 'send_access_requested',
                 'send_access_decision', 'send_forgot_password_contact_admin'):
        monkeypatch.setattr(email, name, recorder(name))
    return sent


@pytest.fixture
def make_user(app):
    def factory(full_name='Alice', email_address=None, role=Role.USER, password=PASSWORD):
        email_address = email_address or f"{full_name.lower().replace(' ', '.')}@example.com"
        with app.app_context():
            user = User(full_name=full_name, email=email_address,
                        password_hash=hash_password(password), role=role)
            db.session.add(user)
            db.session.commit()
            return user.id
    return factory


@pytest.fixture
def make_portfolio(app):
    def factory(owner_id, title='Portfolio', is_public=False, **fields):
        with app.app_context():
            portfolio = Portfolio(user_id=owner_id, title=title, is_public=is_public, **fields)
            db.session.add(portfolio)
            db.session.commit()
            return portfolio.id
    return factory


@pytest.fixture
def login(app):
    """Return a new test client signed in as the given email"""
    def do_login(email_address, password=PASSWORD):
        user_client = app.test_client()
        response = user_client.post('/api/Auth/login', json={'email': email_address, 'password': password})
        assert response.status_code == 200, response.get_json()
        return user_client
    return do_login
