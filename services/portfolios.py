"""
Portfolio Service - Portfolio CRUD, viewing rules and view logging

Visibility:
    owner            -> every section
    anyone else      -> only sections whose is_*_public flag is set
    private portfolio -> non-owners need an Approved access request to see it at all
"""

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from extensions import db
from models import Portfolio, SocialMediaLink, PortfolioViewLog, User, NotificationType, utcnow
from utils.helpers import parse_bool, clean_str
from utils.serializers import (
    portfolio_summary_to_dict, project_to_dict, education_to_dict,
    experience_to_dict, skill_to_dict, social_media_link_to_dict
)
from .access_requests import has_approved_access, approved_portfolio_ids
from .errors import Unauthenticated, Forbidden, NotFound, ValidationFailed
from .notifications import create_notification

TITLE_MAX_LENGTH = 100

# (payload key, visibility flag, relationship, serializer)
SECTIONS = (
    ('projects', 'is_projects_public', 'projects', project_to_dict),
    ('educations', 'is_education_public', 'educations', education_to_dict),
    ('experiences', 'is_experience_public', 'experiences', experience_to_dict),
    ('skills', 'is_skills_public', 'skills', skill_to_dict),
    ('socialMediaLinks', 'is_social_media_public', 'social_media_links', social_media_link_to_dict),
)

VISIBILITY_FIELDS = (
    ('isPublic', 'is_public'),
    ('isProjectsPublic', 'is_projects_public'),
    ('isEducationPublic', 'is_education_public'),
    ('isExperiencePublic', 'is_experience_public'),
    ('isSkillsPublic', 'is_skills_public'),
    ('isSocialMediaPublic', 'is_social_media_public'),
)

CONTACT_FIELDS = (
    ('email', 'email'),
    ('phone', 'phone'),
    ('city', 'city'),
    ('country', 'country'),
)


def is_owner(portfolio, user_id):
    return user_id is not None and portfolio.user_id == user_id


def can_view(portfolio, user_id):
    """Whether the portfolio itself (not a given section) is visible"""
    if portfolio.is_public or is_owner(portfolio, user_id):
        return True
    return has_approved_access(portfolio.id, user_id)


def section_visible(portfolio, flag, user_id):
    return is_owner(portfolio, user_id) or bool(getattr(portfolio, flag))


def serialize_portfolio(portfolio, viewer_id=None):
    data = portfolio_summary_to_dict(portfolio)
    owner = is_owner(portfolio, viewer_id)
    for key, flag, relationship, serializer in SECTIONS:
        if owner or getattr(portfolio, flag):
            data[key] = [serializer(item) for item in getattr(portfolio, relationship)]
    return data


def get_portfolio_or_404(portfolio_id):
    portfolio = db.session.get(Portfolio, portfolio_id)
    if not portfolio:
        raise NotFound('Portfolio not found')
    return portfolio


def require_owner(portfolio, user_id):
    if user_id is None:
        raise Unauthenticated()
    if not is_owner(portfolio, user_id):
        raise Forbidden()
    return portfolio


def record_view(portfolio, viewer_id, ip_address=None, user_agent=None):
    """Append a view log and notify the owner of authenticated views.

    Failures are logged only; a view must never fail because of this.
    """
    try:
        viewer = db.session.get(User, viewer_id) if viewer_id is not None else None
        db.session.add(PortfolioViewLog(
            portfolio_id=portfolio.id,
            viewer_user_id=viewer.id if viewer else None,
            viewer_name=viewer.full_name if viewer else None,
            viewer_email=viewer.email if viewer else None,
            ip_address=(ip_address or '')[:45] or None,
            user_agent=(user_agent or '')[:500] or None,
            viewed_at=utcnow()
        ))

        if viewer and not is_owner(portfolio, viewer.id):
            create_notification(
                user_id=portfolio.user_id,
                type=NotificationType.PORTFOLIO_VIEWED,
                title='Your portfolio was viewed',
                message=f"{viewer.full_name} viewed your portfolio '{portfolio.title}'.",
                portfolio_id=portfolio.id
            )

        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Failed to record view of portfolio {portfolio.id}: {str(e)}")


def view_portfolio(portfolio_id, viewer_id, ip_address=None, user_agent=None):
    portfolio = get_portfolio_or_404(portfolio_id)
    if not can_view(portfolio, viewer_id):
        raise Forbidden('This portfolio is private')

    data = serialize_portfolio(portfolio, viewer_id)
    record_view(portfolio, viewer_id, ip_address, user_agent)
    return data


def list_public(viewer_id=None):
    portfolios = (Portfolio.query
                  .filter_by(is_public=True)
                  .order_by(Portfolio.updated_at.desc(), Portfolio.id.desc())
                  .all())
    return [serialize_portfolio(p, viewer_id) for p in portfolios]


def list_all_visible(viewer_id=None):
    """Every portfolio; private ones the viewer cannot open are reduced to a card"""
    approved = approved_portfolio_ids(viewer_id) if viewer_id is not None else set()
    results = []
    for portfolio in Portfolio.query.order_by(Portfolio.updated_at.desc(), Portfolio.id.desc()).all():
        has_access = portfolio.is_public or is_owner(portfolio, viewer_id) or portfolio.id in approved
        if has_access:
            data = serialize_portfolio(portfolio, viewer_id)
        else:
            data = portfolio_summary_to_dict(portfolio)
            for key, attr in CONTACT_FIELDS:
                data[key] = None
        data['hasAccess'] = has_access
        results.append(data)
    return results


def list_owned(user_id):
    portfolios = (Portfolio.query
                  .filter_by(user_id=user_id)
                  .order_by(Portfolio.updated_at.desc(), Portfolio.id.desc())
                  .all())
    return [serialize_portfolio(p, user_id) for p in portfolios]


def list_accessible(user_id):
    """Owned portfolios plus the ones the user was approved to see"""
    approved = approved_portfolio_ids(user_id)
    query = Portfolio.query.filter(db.or_(Portfolio.user_id == user_id, Portfolio.id.in_(approved)))
    results = []
    for portfolio in query.order_by(Portfolio.updated_at.desc(), Portfolio.id.desc()).all():
        data = serialize_portfolio(portfolio, user_id)
        data['isAccessedViaApproval'] = portfolio.user_id != user_id
        results.append(data)
    return results


def _apply_portfolio_fields(portfolio, data, defaults):
    title = clean_str(data.get('title'))
    if not title:
        raise ValidationFailed('Title is required')
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationFailed(f'Title cannot exceed {TITLE_MAX_LENGTH} characters')

    portfolio.title = title
    portfolio.description = clean_str(data.get('description')) or ''
    portfolio.profile_image = clean_str(data.get('profileImage')) or ''
    for key, attr in VISIBILITY_FIELDS:
        default = defaults.get(attr, getattr(portfolio, attr))
        setattr(portfolio, attr, parse_bool(data.get(key), default))
    for key, attr in CONTACT_FIELDS:
        setattr(portfolio, attr, clean_str(data.get(key)) or None)


def _build_social_links(items):
    links = []
    for item in items or []:
        if not isinstance(item, dict):
            raise ValidationFailed('Invalid social media link')
        platform = clean_str(item.get('platform'))
        url = clean_str(item.get('url'))
        if not platform or not url:
            raise ValidationFailed('Social media links need a platform and a url')
        links.append(SocialMediaLink(
            platform=platform[:50],
            url=url,
            icon_name=(clean_str(item.get('iconName')) or '')[:50]
        ))
    return links


def create_portfolio(user_id, data):
    if user_id is None:
        raise Unauthenticated()
    user = db.session.get(User, user_id)
    if not user:
        raise NotFound('User not found')

    portfolio = Portfolio(user_id=user.id)
    # Sections default to visible, the portfolio itself to private
    defaults = {attr: True for key, attr in VISIBILITY_FIELDS}
    defaults['is_public'] = False
    _apply_portfolio_fields(portfolio, data, defaults)
    portfolio.social_media_links = _build_social_links(data.get('socialMediaLinks'))

    db.session.add(portfolio)
    db.session.commit()
    current_app.logger.info(f"Portfolio {portfolio.id} created by user {user_id}")
    return portfolio


def update_portfolio(portfolio_id, user_id, data):
    if user_id is None:
        raise Unauthenticated()
    portfolio = get_portfolio_or_404(portfolio_id)
    require_owner(portfolio, user_id)

    _apply_portfolio_fields(portfolio, data, {})
    links = data.get('socialMediaLinks')
    if links:
        portfolio.social_media_links = _build_social_links(links)
    portfolio.updated_at = utcnow()

    db.session.commit()
    current_app.logger.info(f"Portfolio {portfolio.id} updated by user {user_id}")
    return portfolio


def delete_portfolio(portfolio_id, user_id):
    if user_id is None:
        raise Unauthenticated()
    portfolio = get_portfolio_or_404(portfolio_id)
    require_owner(portfolio, user_id)

    db.session.delete(portfolio)
    db.session.commit()
    current_app.logger.info(f"Portfolio {portfolio_id} deleted by user {user_id}")
