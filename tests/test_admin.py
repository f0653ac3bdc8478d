from datetime import date, datetime

import pytest

from extensions import db
from models import Portfolio, Project, Skill, Experience, Role
from services.statistics import format_number


@pytest.fixture
def admin_client(make_user, login):
    make_user('Root', email_address='root@example.com', role=Role.ADMIN)
    return login('root@example.com')


def test_admin_routes_reject_regular_users(client, login, make_user):
    make_user('Alice')
    alice_client = login('alice@example.com')

    assert client.get('/api/Admin/users').status_code == 401
    response = alice_client.get('/api/Admin/users')
    assert response.status_code == 403
    assert response.get_json() == {'error': 'Admin access required'}
    assert alice_client.get('/api/Statistics/dashboard').status_code == 403


def test_admin_lists_users_and_full_portfolios(app, admin_client, make_user, make_portfolio):
    alice = make_user('Alice')
    portfolio = make_portfolio(alice, is_public=False, is_projects_public=False)
    with app.app_context():
        db.session.add(Project(portfolio_id=portfolio, title='Secret'))
        db.session.commit()

    users = admin_client.get('/api/Admin/users').get_json()
    portfolios = admin_client.get('/api/Admin/portfolios').get_json()

    assert {u['email']: u['portfolioCount'] for u in users} == {'root@example.com': 0, 'alice@example.com': 1}
    assert portfolios[0]['projects'][0]['title'] == 'Secret'


def test_admin_deletes_portfolio_and_resets_password(app, admin_client, login, make_user, make_portfolio):
    alice = make_user('Alice')
    portfolio = make_portfolio(alice)

    assert admin_client.delete(f'/api/Admin/portfolios/{portfolio}').status_code == 204
    assert admin_client.delete('/api/Admin/portfolios/9999').status_code == 404
    with app.app_context():
        assert db.session.get(Portfolio, portfolio) is None

    url = f'/api/Admin/users/{alice}/reset-password'
    assert admin_client.post(url).status_code == 403
    assert admin_client.post(url, headers={'X-Admin-Pin': 'wrong'}).status_code == 403

    response = admin_client.post(url, headers={'X-Admin-Pin': 'test-pin'})
    assert response.status_code == 200
    temporary_password = response.get_json()['temporaryPassword']
    assert temporary_password.startswith('Temp')
    login('alice@example.com', temporary_password)

    response = admin_client.post('/api/Admin/users/9999/reset-password', headers={'X-Admin-Pin': 'test-pin'})
    assert response.status_code == 404


def test_statistics(client, admin_client, make_user, make_portfolio):
    alice = make_user('Alice')
    make_portfolio(alice, title='Public', is_public=True)
    make_portfolio(alice, title='Private', is_public=False)

    stats = client.get('/api/Statistics').get_json()
    assert stats['totalUsers'] == 2
    assert stats['totalPortfolios'] == 2
    # Root has no portfolio
    assert stats['activeUsers'] == 1
    assert stats['portfoliosThisMonth'] == 2
    assert stats['publicPortfolios'] == 1
    assert stats['privatePortfolios'] == 1
    assert stats['formattedStats'] == {'users': '2', 'portfolios': '2', 'activeUsers': '1'}

    dashboard = admin_client.get('/api/Statistics/dashboard').get_json()
    assert dashboard['totalAccessRequests'] == 0
    assert dashboard['totalNotifications'] == 0
    assert {p['title'] for p in dashboard['recentPortfolios']} == {'Public', 'Private'}
    assert dashboard['recentUsers'][0] == {'fullName': 'Alice', 'email': 'alice@example.com'}


def test_portfolio_created_last_month_is_not_counted(app, client, make_user, make_portfolio):
    alice = make_user('Alice')
    make_portfolio(alice, created_at=datetime(2001, 1, 1))
    make_portfolio(alice)

    stats = client.get('/api/Statistics').get_json()

    assert stats['totalPortfolios'] == 2
    assert stats['portfoliosThisMonth'] == 1


@pytest.mark.parametrize('number,expected', [
    (0, '0'),
    (999, '999'),
    (1500, '1.5K'),
    (2300000, '2.3M'),
])
def test_format_number(number, expected):
    assert format_number(number) == expected


def test_admin_full_portfolio_ignores_section_flags(app, admin_client, login, make_user, make_portfolio):
    alice = make_user('Alice')
    portfolio = make_portfolio(alice, title='Hidden', is_public=False,
                               is_projects_public=False, is_skills_public=False)
    with app.app_context():
        db.session.add(Project(portfolio_id=portfolio, title='Secret'))
        db.session.add(Skill(portfolio_id=portfolio, name='Python', level=5))
        db.session.commit()

    response = admin_client.get(f'/api/Admin/portfolios/{portfolio}/full')

    assert response.status_code == 200
    body = response.get_json()
    assert body['user']['email'] == 'alice@example.com'
    assert body['portfolio']['title'] == 'Hidden'
    assert [p['title'] for p in body['portfolio']['projects']] == ['Secret']
    assert [s['name'] for s in body['portfolio']['skills']] == ['Python']

    assert admin_client.get('/api/Admin/portfolios/9999/full').status_code == 404
    assert login('alice@example.com').get(f'/api/Admin/portfolios/{portfolio}/full').status_code == 403


def test_admin_portfolio_analytics(app, admin_client, login, make_user, make_portfolio):
    alice = make_user('Alice')
    portfolio = make_portfolio(alice)
    with app.app_context():
        db.session.add_all([
            Project(portfolio_id=portfolio, title='Old', created_at=datetime(2020, 5, 1)),
            Project(portfolio_id=portfolio, title='Older', created_at=datetime(2019, 5, 1)),
            Project(portfolio_id=portfolio, title='Also old', created_at=datetime(2020, 9, 1)),
            Skill(portfolio_id=portfolio, name='Python', level=5),
            Skill(portfolio_id=portfolio, name='SQL', level=3),
            Skill(portfolio_id=portfolio, name='Go', level=5),
            Experience(portfolio_id=portfolio, company='Acme', position='Engineer',
                       start_date=date(2020, 1, 1), end_date=date(2021, 3, 1)),
        ])
        db.session.commit()

    response = admin_client.get(f'/api/Admin/portfolios/{portfolio}/analytics')

    assert response.status_code == 200
    body = response.get_json()
    assert body['projectsByYear'] == [{'year': 2019, 'count': 1}, {'year': 2020, 'count': 2}]
    assert body['skillsByLevel'] == [{'level': '5', 'count': 2}, {'level': '3', 'count': 1}]
    assert body['experienceMonths'] == [{'company': 'Acme', 'position': 'Engineer', 'months': 14}]

    assert admin_client.get('/api/Admin/portfolios/9999/analytics').status_code == 404
    assert login('alice@example.com').get(f'/api/Admin/portfolios/{portfolio}/analytics').status_code == 403
