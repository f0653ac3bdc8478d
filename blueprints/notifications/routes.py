"""
Notification Routes - Inbox listing and read state
"""

from flask import jsonify
from services import notifications
from utils.decorators import login_required
from utils.security import current_subject_id
from utils.serializers import notification_to_dict
from . import notifications_bp


@notifications_bp.route('/my', methods=['GET'])
@login_required
def my_notifications():
    """Most recent notifications of the current user, newest first"""
    items = notifications.list_for_user(current_subject_id())
    return jsonify([notification_to_dict(n) for n in items])


@notifications_bp.route('/unread-count', methods=['GET'])
@login_required
def unread_count():
    return jsonify({'count': notifications.unread_count(current_subject_id())})


@notifications_bp.route('/<int:notification_id>/read', methods=['POST'])
@login_required
def mark_read(notification_id):
    notifications.mark_read(notification_id, current_subject_id())
    return jsonify({'message': 'Notification marked as read'}), 200


@notifications_bp.route('/read-all', methods=['POST'])
@login_required
def mark_all_read():
    updated = notifications.mark_all_read(current_subject_id())
    return jsonify({'message': 'All notifications marked as read', 'updated': updated}), 200
