"""
Statistics Service - Platform-wide counters and per-portfolio analytics
"""

import calendar
from collections import Counter
from models import User, Portfolio, AccessRequest, Notification, utcnow
from .portfolios import get_portfolio_or_404

RECENT_LIMIT = 5


def _one_month_before(moment):
    year, month = (moment.year, moment.month - 1) if moment.month > 1 else (moment.year - 1, 12)
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def format_number(number):
    """Compact display form: 1500 -> '1.5K', 2300000 -> '2.3M'"""
    if number >= 1000000:
        return f"{number / 1000000.0:.1f}M"
    if number >= 1000:
        return f"{number / 1000.0:.1f}K"
    return str(number)


def platform_statistics():
    total_users = User.query.count()
    total_portfolios = Portfolio.query.count()
    public_portfolios = Portfolio.query.filter_by(is_public=True).count()
    # Users with at least one portfolio
    active_users = User.query.filter(User.portfolios.any()).count()
    this_month = Portfolio.query.filter(Portfolio.created_at >= _one_month_before(utcnow())).count()

    return {
        'totalUsers': total_users,
        'totalPortfolios': total_portfolios,
        'activeUsers': active_users,
        'portfoliosThisMonth': this_month,
        'publicPortfolios': public_portfolios,
        'privatePortfolios': total_portfolios - public_portfolios,
        'formattedStats': {
            'users': format_number(total_users),
            'portfolios': format_number(total_portfolios),
            'activeUsers': format_number(active_users)
        }
    }


def dashboard_statistics():
    recent_users = User.query.order_by(User.id.desc()).limit(RECENT_LIMIT)
    recent_portfolios = (Portfolio.query
                         .order_by(Portfolio.created_at.desc(), Portfolio.id.desc())
                         .limit(RECENT_LIMIT))
    return {
        'totalUsers': User.query.count(),
        'totalPortfolios': Portfolio.query.count(),
        'totalAccessRequests': AccessRequest.query.count(),
        'totalNotifications': Notification.query.count(),
        'recentUsers': [{'fullName': u.full_name, 'email': u.email} for u in recent_users],
        'recentPortfolios': [
            {'title': p.title, 'createdAt': p.created_at.isoformat() if p.created_at else None}
            for p in recent_portfolios
        ]
    }


def portfolio_analytics(portfolio_id):
    """Projects per year, skills per level and months spent per experience"""
    portfolio = get_portfolio_or_404(portfolio_id)

    years = Counter(p.created_at.year for p in portfolio.projects if p.created_at)
    levels = Counter(str(s.level) for s in sorted(portfolio.skills, key=lambda s: s.id))

    today = utcnow().date()
    experience_months = []
    for experience in portfolio.experiences:
        end = experience.end_date or today
        start = experience.start_date
        months = (end.year - start.year) * 12 + end.month - start.month
        experience_months.append({
            'company': experience.company,
            'position': experience.position,
            'months': max(months, 0)
        })

    return {
        'projectsByYear': [{'year': year, 'count': count} for year, count in sorted(years.items())],
        'skillsByLevel': [{'level': level, 'count': count} for level, count in levels.items()],
        'experienceMonths': experience_months
    }
