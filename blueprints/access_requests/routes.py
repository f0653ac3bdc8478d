"""
Access Request Routes - Request, decide and list portfolio access requests
"""

from flask import jsonify, current_app
from services import access_requests
from services.errors import ServiceError, Unexpected
from utils.decorators import login_required
from utils.helpers import get_json_body
from utils.security import current_subject_id
from utils.serializers import access_request_to_dict
from . import access_requests_bp


@access_requests_bp.route('/portfolio/<int:portfolio_id>', methods=['POST'])
def request_access(portfolio_id):
    """Ask the owner of a portfolio for access"""
    data = get_json_body()
    try:
        access_request = access_requests.request_access(
            portfolio_id, current_subject_id(), data.get('message'))
    except ServiceError:
        raise
    except Exception:
        current_app.logger.exception(f"Error creating access request for portfolio {portfolio_id}")
        raise Unexpected('Failed to send access request')

    return jsonify({
        'message': 'Access request sent successfully',
        'requestId': access_request.id
    }), 200


@access_requests_bp.route('/debug/<int:portfolio_id>', methods=['GET'])
def debug_portfolio_data(portfolio_id):
    """Diagnostic payload for the access-request flow (anonymous)"""
    current_user_id = current_subject_id()
    current_app.logger.info(f"DEBUG: Current user ID: {current_user_id}")
    try:
        return jsonify(access_requests.debug_snapshot(portfolio_id, current_user_id))
    except Exception:
        current_app.logger.exception(f"Error in debug endpoint for portfolio {portfolio_id}")
        raise Unexpected('Failed to load debug data')


@access_requests_bp.route('/my-received', methods=['GET'])
@login_required
def my_received():
    """Requests made against the current user's portfolios"""
    requests = access_requests.list_received(current_subject_id())
    return jsonify([access_request_to_dict(ar) for ar in requests])


@access_requests_bp.route('/my-sent', methods=['GET'])
@login_required
def my_sent():
    """Requests the current user has made"""
    requests = access_requests.list_sent(current_subject_id())
    return jsonify([access_request_to_dict(ar) for ar in requests])


def _decide(request_id, decision):
    data = get_json_body()
    access_request = access_requests.decide_access_request(
        request_id, current_subject_id(), decision, data.get('note'))
    verb = 'approved' if decision == access_requests.APPROVE else 'rejected'
    return jsonify({
        'message': f'Access request {verb}',
        'request': access_request_to_dict(access_request)
    }), 200


@access_requests_bp.route('/<int:request_id>/approve', methods=['POST'])
@login_required
def approve(request_id):
    return _decide(request_id, access_requests.APPROVE)


@access_requests_bp.route('/<int:request_id>/reject', methods=['POST'])
@login_required
def reject(request_id):
    return _decide(request_id, access_requests.REJECT)
