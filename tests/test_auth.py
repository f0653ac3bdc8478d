from extensions import db
from models import User, Role


def test_register_signs_in_and_sends_welcome(app, client, sent_emails):
    response = client.post('/api/Auth/register', json={
        'fullName': 'Dana', 'email': 'Dana@Example.com', 'password': 'pw12345'
    })

    assert response.status_code == 200
    assert response.get_json() == {'message': 'Registration successful'}

    session = client.get('/api/Auth/check-session').get_json()
    assert session['isAuthenticated'] is True
    assert session['email'] == 'dana@example.com'
    assert session['role'] == Role.USER

    with app.app_context():
        user = User.query.filter_by(email='dana@example.com').one()
        assert user.password_hash != 'pw12345'
    assert sent_emails[0][0] == 'send_registration_confirmation'


def test_register_validation(client, make_user, sent_emails):
    make_user('Alice')

    missing = client.post('/api/Auth/register', json={'fullName': 'X', 'email': ''})
    taken = client.post('/api/Auth/register', json={
        'fullName': 'Other', 'email': 'alice@example.com', 'password': 'pw'
    })

    assert missing.status_code == 400
    assert taken.status_code == 400
    assert taken.get_json() == {'error': 'Email already in use'}


def test_login_logout_and_session(client, make_user):
    make_user('Alice')

    assert client.post('/api/Auth/login', json={'email': 'alice@example.com', 'password': 'nope'}).status_code == 401
    assert client.get('/api/Auth/check-session').status_code == 401

    response = client.post('/api/Auth/login', json={'email': 'alice@example.com', 'password': 'secret123'})
    assert response.status_code == 200
    assert response.get_json()['user']['fullName'] == 'Alice'
    assert client.get('/api/Auth/check-session').get_json()['fullName'] == 'Alice'

    assert client.post('/api/Auth/logout').status_code == 200
    assert client.get('/api/Auth/check-session').status_code == 401


def test_update_profile(app, login, make_user):
    make_user('Alice')
    make_user('Bob')
    alice_client = login('alice@example.com')

    wrong = alice_client.put('/api/Auth/profile', json={'currentPassword': 'bad', 'newPassword': 'n3w'})
    assert wrong.status_code == 400
    assert wrong.get_json() == {'error': 'Current password is incorrect'}

    taken = alice_client.put('/api/Auth/profile', json={'email': 'bob@example.com'})
    assert taken.status_code == 400

    ok = alice_client.put('/api/Auth/profile', json={
        'fullName': 'Alice Smith', 'currentPassword': 'secret123', 'newPassword': 'n3w-pass'
    })
    assert ok.status_code == 200
    assert ok.get_json()['user']['fullName'] == 'Alice Smith'
    login('alice@example.com', 'n3w-pass')


def test_forgot_password_always_answers(app, client, make_user, sent_emails):
    make_user('Alice')

    known = client.post('/api/Auth/forgot-password', json={'email': 'alice@example.com'}).get_json()
    unknown = client.post('/api/Auth/forgot-password', json={'email': 'ghost@example.com'})

    assert known['sent'] is True
    assert known['admin']['name'] == app.config['ADMIN_CONTACT_NAME']
    assert unknown.status_code == 200
    assert unknown.get_json()['sent'] is False


def test_promote_requires_pin(app, client, make_user):
    user_id = make_user('Alice')

    assert client.post('/api/Auth/promote?email=alice@example.com').status_code == 403
    assert client.post('/api/Auth/promote?email=alice@example.com',
                       headers={'X-Admin-Pin': 'wrong'}).status_code == 403
    assert client.post('/api/Auth/promote?email=ghost@example.com',
                       headers={'X-Admin-Pin': 'test-pin'}).status_code == 404
    assert client.post('/api/Auth/promote?email=alice@example.com',
                       headers={'X-Admin-Pin': 'test-pin'}).status_code == 200

    with app.app_context():
        assert db.session.get(User, user_id).role == Role.ADMIN


def test_health(client):
    response = client.get('/health')

    assert response.status_code == 200
    assert response.get_json() == {'status': 'ok'}
    assert response.headers['X-Content-Type-Options'] == 'nosniff'


def test_unknown_route_is_json(client):
    response = client.get('/api/Nope')

    assert response.status_code == 404
    assert 'error' in response.get_json()
