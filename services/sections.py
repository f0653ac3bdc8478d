"""
Sections Service - CRUD for the content sections of a portfolio

Projects, education, experience, skills and social media links all follow
the same rules, so each one is described by a SectionType and handled by
the same functions:

    read   -> portfolio must be viewable, and the section flag public (owner bypasses)
    write  -> only the portfolio owner
"""

from collections import namedtuple
from flask import current_app
from extensions import db
from models import Portfolio, Project, Education, Experience, Skill, SocialMediaLink
from utils.helpers import parse_date, clean_str
from utils.serializers import (
    project_to_dict, education_to_dict, experience_to_dict,
    skill_to_dict, social_media_link_to_dict
)
from .errors import Unauthenticated, Forbidden, NotFound, ValidationFailed
from .portfolios import can_view, section_visible, is_owner, get_portfolio_or_404

SectionType = namedtuple('SectionType', ['model', 'label', 'flag', 'serializer', 'fields'])
Field = namedtuple('Field', ['key', 'attr', 'kind', 'required', 'max_length'])

SECTION_TYPES = {
    'project': SectionType(Project, 'Project', 'is_projects_public', project_to_dict, (
        Field('title', 'title', 'str', True, 100),
        Field('description', 'description', 'str', False, None),
        Field('imageUrl', 'image_url', 'str', False, 500),
        Field('projectUrl', 'project_url', 'str', False, 500),
    )),
    'education': SectionType(Education, 'Education', 'is_education_public', education_to_dict, (
        Field('institution', 'institution', 'str', True, 100),
        Field('degree', 'degree', 'str', True, 100),
        Field('field', 'field', 'str', False, 255),
        Field('startDate', 'start_date', 'date', True, None),
        Field('endDate', 'end_date', 'date', False, None),
        Field('description', 'description', 'str', False, None),
    )),
    'experience': SectionType(Experience, 'Experience', 'is_experience_public', experience_to_dict, (
        Field('company', 'company', 'str', True, 100),
        Field('position', 'position', 'str', True, 100),
        Field('location', 'location', 'str', False, 255),
        Field('startDate', 'start_date', 'date', True, None),
        Field('endDate', 'end_date', 'date', False, None),
        Field('description', 'description', 'str', False, None),
    )),
    'skill': SectionType(Skill, 'Skill', 'is_skills_public', skill_to_dict, (
        Field('name', 'name', 'str', True, 50),
        Field('level', 'level', 'level', False, None),
    )),
    'social_media_link': SectionType(SocialMediaLink, 'Social media link', 'is_social_media_public',
                                     social_media_link_to_dict, (
        Field('platform', 'platform', 'str', True, 50),
        Field('url', 'url', 'str', True, 500),
        Field('iconName', 'icon_name', 'str', False, 50),
    )),
}

SKILL_LEVEL_MIN = 1
SKILL_LEVEL_MAX = 5
SKILL_LEVEL_DEFAULT = 3


def get_section_type(kind):
    try:
        return SECTION_TYPES[kind]
    except KeyError:
        raise ValueError(f"Unknown section type: {kind}")


def _parse_field(field, raw):
    if field.kind == 'date':
        try:
            value = parse_date(raw)
        except ValueError:
            raise ValidationFailed(f"{field.key} must be a date in YYYY-MM-DD format")
    elif field.kind == 'level':
        if raw in (None, ''):
            return SKILL_LEVEL_DEFAULT
        try:
            value = int(raw)
        except (TypeError, ValueError):
            raise ValidationFailed('level must be a number')
        if not SKILL_LEVEL_MIN <= value <= SKILL_LEVEL_MAX:
            raise ValidationFailed(f'level must be between {SKILL_LEVEL_MIN} and {SKILL_LEVEL_MAX}')
    else:
        value = clean_str(raw) or ''
        if field.max_length and len(value) > field.max_length:
            raise ValidationFailed(f"{field.key} cannot exceed {field.max_length} characters")

    if field.required and not value:
        raise ValidationFailed(f"{field.key} is required")
    if field.kind == 'str' and not field.required:
        return value
    return value or None


def _apply_fields(section, item, data):
    for field in section.fields:
        setattr(item, field.attr, _parse_field(field, data.get(field.key)))


def _check_readable(section, portfolio, viewer_id):
    if not can_view(portfolio, viewer_id):
        raise Forbidden('This portfolio is private')
    if not section_visible(portfolio, section.flag, viewer_id):
        raise Forbidden(f'{section.label} section is private')


def _get_item(section, item_id, portfolio_id=None):
    item = db.session.get(section.model, item_id)
    if not item or (portfolio_id is not None and item.portfolio_id != portfolio_id):
        raise NotFound(f'{section.label} not found')
    return item


def _get_owned_portfolio(portfolio_id, user_id, message):
    portfolio = Portfolio.query.filter_by(id=portfolio_id, user_id=user_id).first()
    if not portfolio:
        raise NotFound(message)
    return portfolio


def list_items(kind, portfolio_id, viewer_id):
    section = get_section_type(kind)
    portfolio = get_portfolio_or_404(portfolio_id)
    _check_readable(section, portfolio, viewer_id)

    items = (section.model.query
             .filter_by(portfolio_id=portfolio.id)
             .order_by(section.model.id)
             .all())
    return [section.serializer(item) for item in items]


def get_item(kind, item_id, viewer_id, portfolio_id=None):
    section = get_section_type(kind)
    if portfolio_id is not None:
        get_portfolio_or_404(portfolio_id)
    item = _get_item(section, item_id, portfolio_id)
    _check_readable(section, item.portfolio, viewer_id)
    return section.serializer(item)


def create_item(kind, portfolio_id, user_id, data):
    if user_id is None:
        raise Unauthenticated()
    section = get_section_type(kind)
    portfolio = _get_owned_portfolio(
        portfolio_id, user_id, "Portfolio not found or you don't have access to it")

    item = section.model(portfolio_id=portfolio.id)
    _apply_fields(section, item, data)
    db.session.add(item)
    db.session.commit()
    current_app.logger.info(f"{section.label} {item.id} added to portfolio {portfolio.id} by user {user_id}")
    return section.serializer(item)


def update_item(kind, item_id, user_id, data, portfolio_id=None):
    if user_id is None:
        raise Unauthenticated()
    section = get_section_type(kind)
    if portfolio_id is not None:
        _get_owned_portfolio(
            portfolio_id, user_id, "Portfolio not found or you don't have permission to edit it")
    item = _get_item(section, item_id, portfolio_id)
    if not is_owner(item.portfolio, user_id):
        raise Forbidden()

    _apply_fields(section, item, data)
    db.session.commit()
    current_app.logger.info(f"{section.label} {item.id} updated by user {user_id}")
    return section.serializer(item)


def delete_item(kind, item_id, user_id, portfolio_id=None):
    if user_id is None:
        raise Unauthenticated()
    section = get_section_type(kind)
    if portfolio_id is not None:
        _get_owned_portfolio(
            portfolio_id, user_id, "Portfolio not found or you don't have permission to edit it")
    item = _get_item(section, item_id, portfolio_id)
    if not is_owner(item.portfolio, user_id):
        raise Forbidden()

    db.session.delete(item)
    db.session.commit()
    current_app.logger.info(f"{section.label} {item_id} deleted by user {user_id}")
