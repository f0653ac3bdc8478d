import pytest

from extensions import db
from models import (
    Portfolio, Project, AccessRequest, AccessRequestStatus, Notification,
    NotificationType, PortfolioViewLog, SocialMediaLink
)


@pytest.fixture
def people(make_user):
    return {'alice': make_user('Alice'), 'bob': make_user('Bob')}


def _add_project(app, portfolio_id, title='Site'):
    with app.app_context():
        project = Project(portfolio_id=portfolio_id, title=title)
        db.session.add(project)
        db.session.commit()
        return project.id


def _approve(app, portfolio_id, user_id):
    with app.app_context():
        db.session.add(AccessRequest(portfolio_id=portfolio_id, requester_user_id=user_id,
                                     status=AccessRequestStatus.APPROVED))
        db.session.commit()


def test_public_listing_excludes_private(client, people, make_portfolio):
    make_portfolio(people['alice'], title='Open', is_public=True)
    make_portfolio(people['alice'], title='Hidden', is_public=False)

    titles = [p['title'] for p in client.get('/api/Portfolio/public').get_json()]

    assert titles == ['Open']


def test_private_portfolio_is_forbidden_to_strangers(client, login, people, make_portfolio):
    portfolio = make_portfolio(people['alice'], is_public=False)

    assert client.get(f'/api/Portfolio/{portfolio}').status_code == 403
    assert login('bob@example.com').get(f'/api/Portfolio/{portfolio}').status_code == 403
    assert login('alice@example.com').get(f'/api/Portfolio/{portfolio}').status_code == 200
    assert client.get('/api/Portfolio/9999').status_code == 404


def test_hidden_sections_only_reach_the_owner(app, login, client, people, make_portfolio):
    portfolio = make_portfolio(people['alice'], is_public=True, is_projects_public=False)
    _add_project(app, portfolio)

    stranger_view = client.get(f'/api/Portfolio/{portfolio}').get_json()
    owner_view = login('alice@example.com').get(f'/api/Portfolio/{portfolio}').get_json()

    assert stranger_view['projects'] == []
    assert [p['title'] for p in owner_view['projects']] == ['Site']


def test_approved_viewer_still_respects_section_flags(app, login, people, make_portfolio):
    portfolio = make_portfolio(people['alice'], is_public=False, is_projects_public=False)
    _add_project(app, portfolio)
    _approve(app, portfolio, people['bob'])

    response = login('bob@example.com').get(f'/api/Portfolio/{portfolio}')

    assert response.status_code == 200
    assert response.get_json()['projects'] == []


def test_views_are_logged_and_owner_is_notified(app, client, login, people, make_portfolio):
    portfolio = make_portfolio(people['alice'], title='Open', is_public=True)

    client.get(f'/api/Portfolio/{portfolio}', headers={'X-Forwarded-For': '203.0.113.9, 10.0.0.1'})
    login('alice@example.com').get(f'/api/Portfolio/{portfolio}')
    login('bob@example.com').get(f'/api/Portfolio/{portfolio}')

    with app.app_context():
        logs = PortfolioViewLog.query.order_by(PortfolioViewLog.id).all()
        assert len(logs) == 3
        assert logs[0].viewer_user_id is None
        assert logs[0].ip_address == '203.0.113.9'
        assert logs[2].viewer_user_id == people['bob']

        viewed = Notification.query.filter_by(type=NotificationType.PORTFOLIO_VIEWED).all()
        assert len(viewed) == 1
        assert viewed[0].user_id == people['alice']
        assert 'Bob' in viewed[0].message


def test_all_visible_hides_contact_details_without_access(login, people, make_portfolio):
    make_portfolio(people['alice'], title='Hidden', is_public=False, email='a@x.io', phone='123')
    make_portfolio(people['alice'], title='Open', is_public=True, email='b@x.io')

    entries = {p['title']: p for p in login('bob@example.com').get('/api/Portfolio/all-visible').get_json()}

    assert entries['Hidden']['hasAccess'] is False
    assert entries['Hidden']['email'] is None
    assert entries['Hidden']['phone'] is None
    assert entries['Open']['hasAccess'] is True
    assert entries['Open']['email'] == 'b@x.io'


def test_accessible_marks_approved_portfolios(app, login, people, make_portfolio):
    shared = make_portfolio(people['alice'], title='Shared', is_public=False)
    make_portfolio(people['alice'], title='Other', is_public=False)
    make_portfolio(people['bob'], title='Mine', is_public=False)
    _approve(app, shared, people['bob'])

    entries = login('bob@example.com').get('/api/Portfolio/accessible').get_json()

    assert {p['title']: p['isAccessedViaApproval'] for p in entries} == {'Shared': True, 'Mine': False}


def test_create_update_delete_portfolio(app, login, people):
    alice_client = login('alice@example.com')

    response = alice_client.post('/api/Portfolio', json={
        'title': 'New',
        'description': 'About me',
        'socialMediaLinks': [{'platform': 'GitHub', 'url': 'https://github.com/alice'}]
    })
    assert response.status_code == 201
    created = response.get_json()
    assert created['isPublic'] is False
    assert created['isProjectsPublic'] is True
    assert created['socialMediaLinks'][0]['platform'] == 'GitHub'

    portfolio_id = created['id']
    assert alice_client.put(f'/api/Portfolio/{portfolio_id}',
                            json={'title': 'Renamed', 'isPublic': True}).status_code == 204
    with app.app_context():
        portfolio = db.session.get(Portfolio, portfolio_id)
        assert portfolio.title == 'Renamed'
        assert portfolio.is_public is True
        # An update without links keeps the existing ones
        assert len(portfolio.social_media_links) == 1

    assert alice_client.delete(f'/api/Portfolio/{portfolio_id}').status_code == 204
    with app.app_context():
        assert db.session.get(Portfolio, portfolio_id) is None
        assert SocialMediaLink.query.count() == 0


def test_portfolio_validation_and_ownership(login, client, people, make_portfolio):
    portfolio = make_portfolio(people['alice'])
    bob_client = login('bob@example.com')

    assert bob_client.post('/api/Portfolio', json={'title': ''}).status_code == 400
    assert bob_client.post('/api/Portfolio', json={'title': 'x' * 101}).status_code == 400
    assert bob_client.put(f'/api/Portfolio/{portfolio}', json={'title': 'Mine now'}).status_code == 403
    assert bob_client.delete(f'/api/Portfolio/{portfolio}').status_code == 403
    assert bob_client.put('/api/Portfolio/9999', json={'title': 'x'}).status_code == 404
    assert client.post('/api/Portfolio', json={'title': 'Anon'}).status_code == 401
    assert client.get('/api/Portfolio/my-portfolios').status_code == 401


def test_deleting_portfolio_cascades_requests_and_logs(app, client, login, people, make_portfolio, sent_emails):
    portfolio = make_portfolio(people['alice'], is_public=True)
    client.get(f'/api/Portfolio/{portfolio}')
    login('bob@example.com').post(f'/api/AccessRequest/portfolio/{portfolio}', json={})

    assert login('alice@example.com').delete(f'/api/Portfolio/{portfolio}').status_code == 204

    with app.app_context():
        assert AccessRequest.query.count() == 0
        assert PortfolioViewLog.query.count() == 0


def test_social_media_routes(app, login, client, people, make_portfolio):
    portfolio = make_portfolio(people['alice'], is_public=True, is_social_media_public=False)
    other = make_portfolio(people['bob'], is_public=True)
    alice_client = login('alice@example.com')
    base = f'/api/Portfolio/{portfolio}/social-media'

    response = alice_client.post(base, json={'platform': 'X', 'url': 'https://x.com/alice'})
    assert response.status_code == 201
    link_id = response.get_json()['id']

    assert alice_client.get(base).get_json()[0]['url'] == 'https://x.com/alice'
    assert client.get(base).status_code == 403
    assert client.get(f'{base}/{link_id}').status_code == 403

    assert alice_client.put(f'{base}/{link_id}',
                            json={'platform': 'X', 'url': 'https://x.com/a'}).status_code == 204
    # The link does not belong to Bob's portfolio
    assert login('bob@example.com').delete(
        f'/api/Portfolio/{other}/social-media/{link_id}').status_code == 404
    assert login('bob@example.com').put(
        f'{base}/{link_id}', json={'platform': 'X', 'url': 'u'}).status_code == 404

    assert alice_client.delete(f'{base}/{link_id}').status_code == 204
    with app.app_context():
        assert SocialMediaLink.query.count() == 0
