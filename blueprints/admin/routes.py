"""
Admin Routes - User and portfolio administration, platform statistics
"""

from flask import request, jsonify, current_app
from extensions import db
from models import User, Portfolio
from services import portfolios, users, statistics
from utils.decorators import admin_required
from utils.security import current_subject_id
from utils.serializers import user_to_dict, portfolio_summary_to_dict
from . import admin_bp, statistics_bp


def _full_portfolio(portfolio):
    data = portfolio_summary_to_dict(portfolio)
    for key, flag, relationship, serializer in portfolios.SECTIONS:
        data[key] = [serializer(item) for item in getattr(portfolio, relationship)]
    return data


@admin_bp.route('/users', methods=['GET'])
@admin_required
def list_users():
    result = []
    for user in User.query.order_by(User.created_at.desc(), User.id.desc()).all():
        data = user_to_dict(user)
        data['createdAt'] = user.created_at.isoformat() if user.created_at else None
        data['portfolioCount'] = len(user.portfolios)
        result.append(data)
    return jsonify(result)


@admin_bp.route('/portfolios', methods=['GET'])
@admin_required
def list_portfolios():
    """Every portfolio with full content; admins bypass section flags"""
    all_portfolios = Portfolio.query.order_by(Portfolio.updated_at.desc(), Portfolio.id.desc()).all()
    return jsonify([_full_portfolio(p) for p in all_portfolios])


@admin_bp.route('/portfolios/<int:portfolio_id>/full', methods=['GET'])
@admin_required
def portfolio_full(portfolio_id):
    """Owner details plus the complete portfolio, section flags ignored"""
    portfolio = portfolios.get_portfolio_or_404(portfolio_id)
    return jsonify({'user': user_to_dict(portfolio.user), 'portfolio': _full_portfolio(portfolio)})


@admin_bp.route('/portfolios/<int:portfolio_id>/analytics', methods=['GET'])
@admin_required
def portfolio_analytics(portfolio_id):
    return jsonify(statistics.portfolio_analytics(portfolio_id))


@admin_bp.route('/portfolios/<int:portfolio_id>', methods=['DELETE'])
@admin_required
def delete_portfolio(portfolio_id):
    portfolio = portfolios.get_portfolio_or_404(portfolio_id)
    db.session.delete(portfolio)
    db.session.commit()
    current_app.logger.info(f"Admin {current_subject_id()} deleted portfolio {portfolio_id}")
    return '', 204


@admin_bp.route('/users/<int:user_id>/reset-password', methods=['POST'])
@admin_required
def reset_password(user_id):
    """Issue a temporary password; needs the X-Admin-Pin header as well"""
    temporary_password = users.reset_password(user_id, request.headers.get('X-Admin-Pin'))
    return jsonify({'temporaryPassword': temporary_password}), 200


@statistics_bp.route('', methods=['GET'])
def platform_statistics():
    return jsonify(statistics.platform_statistics())


@statistics_bp.route('/dashboard', methods=['GET'])
@admin_required
def dashboard_statistics():
    return jsonify(statistics.dashboard_statistics())
