import pytest

from utils import notifications as email


@pytest.fixture
def outbox(monkeypatch):
    captured = []

    def fake_send(recipient, subject, body, html=True):
        captured.append({'to': recipient, 'subject': subject, 'body': body})
        return True

    monkeypatch.setattr(email, 'send_email', fake_send)
    return captured


def test_send_email_skips_without_smtp(app):
    with app.app_context():
        assert email.send_email('a@example.com', 'Hi', '<p>x</p>') is False


def test_send_email_reports_smtp_failure(app, monkeypatch):
    def refuse(*args, **kwargs):
        raise OSError('connection refused')

    monkeypatch.setattr(email.smtplib, 'SMTP', refuse)
    app.config['SMTP_HOST'] = 'smtp.invalid'

    with app.app_context():
        assert email.send_email('a@example.com', 'Hi', '<p>x</p>') is False


def test_access_requested_email_escapes_user_text(app, outbox):
    with app.app_context():
        email.send_access_requested('owner@example.com', 'Alice', '<b>Bob</b>', 'Works', '<script>x</script>')

    assert outbox[0]['to'] == 'owner@example.com'
    assert '&lt;b&gt;Bob&lt;/b&gt;' in outbox[0]['body']
    assert '<script>' not in outbox[0]['body']


def test_access_decision_email(app, outbox):
    with app.app_context():
        email.send_access_decision('bob@example.com', 'Bob', 'Works', approved=False, note='Not now')

    assert outbox[0]['subject'] == 'Your access request was rejected'
    assert 'Not now' in outbox[0]['body']


def test_dispatch_without_recipient(app, outbox):
    with app.app_context():
        assert email.dispatch_email('', 'Hi', 'body') is False
    assert outbox == []
