"""
Section Routes - CRUD shared by every portfolio section type
"""

from flask import jsonify
from services import sections
from utils.decorators import login_required
from utils.helpers import get_json_body
from utils.security import current_subject_id
from . import project_bp, education_bp, experience_bp, skill_bp


def register_section_routes(bp, kind):
    """Attach list/get/create/update/delete routes for one section type"""

    @bp.route('/portfolio/<int:portfolio_id>', methods=['GET'])
    def list_items(portfolio_id):
        return jsonify(sections.list_items(kind, portfolio_id, current_subject_id()))

    @bp.route('/<int:item_id>', methods=['GET'])
    def get_item(item_id):
        return jsonify(sections.get_item(kind, item_id, current_subject_id()))

    @bp.route('/portfolio/<int:portfolio_id>', methods=['POST'])
    @login_required
    def create_item(portfolio_id):
        item = sections.create_item(kind, portfolio_id, current_subject_id(), get_json_body())
        return jsonify(item), 201

    @bp.route('/<int:item_id>', methods=['PUT'])
    @login_required
    def update_item(item_id):
        sections.update_item(kind, item_id, current_subject_id(), get_json_body())
        return '', 204

    @bp.route('/<int:item_id>', methods=['DELETE'])
    @login_required
    def delete_item(item_id):
        sections.delete_item(kind, item_id, current_subject_id())
        return '', 204


register_section_routes(project_bp, 'project')
register_section_routes(education_bp, 'education')
register_section_routes(experience_bp, 'experience')
register_section_routes(skill_bp, 'skill')
