"""
Portfolio Routes - Listings, gated reads, owner CRUD and social links
"""

from flask import jsonify
from services import portfolios, sections
from utils.decorators import login_required
from utils.helpers import get_json_body
from utils.security import current_subject_id, get_client_ip, get_user_agent
from . import portfolio_bp

SOCIAL = 'social_media_link'


@portfolio_bp.route('/public', methods=['GET'])
def public_portfolios():
    return jsonify(portfolios.list_public(current_subject_id()))


@portfolio_bp.route('/all-visible', methods=['GET'])
def all_visible():
    """Every portfolio, reduced to a card where the caller has no access"""
    return jsonify(portfolios.list_all_visible(current_subject_id()))


@portfolio_bp.route('/<int:portfolio_id>', methods=['GET'])
def get_portfolio(portfolio_id):
    data = portfolios.view_portfolio(
        portfolio_id, current_subject_id(), get_client_ip(), get_user_agent())
    return jsonify(data)


@portfolio_bp.route('/my-portfolios', methods=['GET'])
@login_required
def my_portfolios():
    return jsonify(portfolios.list_owned(current_subject_id()))


@portfolio_bp.route('/accessible', methods=['GET'])
@login_required
def accessible():
    """Owned portfolios plus those shared through approved requests"""
    return jsonify(portfolios.list_accessible(current_subject_id()))


@portfolio_bp.route('', methods=['POST'])
@login_required
def create_portfolio():
    user_id = current_subject_id()
    portfolio = portfolios.create_portfolio(user_id, get_json_body())
    return jsonify(portfolios.serialize_portfolio(portfolio, user_id)), 201


@portfolio_bp.route('/<int:portfolio_id>', methods=['PUT'])
@login_required
def update_portfolio(portfolio_id):
    portfolios.update_portfolio(portfolio_id, current_subject_id(), get_json_body())
    return '', 204


@portfolio_bp.route('/<int:portfolio_id>', methods=['DELETE'])
@login_required
def delete_portfolio(portfolio_id):
    portfolios.delete_portfolio(portfolio_id, current_subject_id())
    return '', 204


# Social media links

@portfolio_bp.route('/<int:portfolio_id>/social-media', methods=['GET'])
def list_social_media(portfolio_id):
    return jsonify(sections.list_items(SOCIAL, portfolio_id, current_subject_id()))


@portfolio_bp.route('/<int:portfolio_id>/social-media/<int:link_id>', methods=['GET'])
def get_social_media(portfolio_id, link_id):
    return jsonify(sections.get_item(SOCIAL, link_id, current_subject_id(), portfolio_id=portfolio_id))


@portfolio_bp.route('/<int:portfolio_id>/social-media', methods=['POST'])
@login_required
def create_social_media(portfolio_id):
    item = sections.create_item(SOCIAL, portfolio_id, current_subject_id(), get_json_body())
    return jsonify(item), 201


@portfolio_bp.route('/<int:portfolio_id>/social-media/<int:link_id>', methods=['PUT'])
@login_required
def update_social_media(portfolio_id, link_id):
    sections.update_item(SOCIAL, link_id, current_subject_id(), get_json_body(), portfolio_id=portfolio_id)
    return '', 204


@portfolio_bp.route('/<int:portfolio_id>/social-media/<int:link_id>', methods=['DELETE'])
@login_required
def delete_social_media(portfolio_id, link_id):
    sections.delete_item(SOCIAL, link_id, current_subject_id(), portfolio_id=portfolio_id)
    return '', 204
