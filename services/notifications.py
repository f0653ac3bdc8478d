"""
Notification Service - Per-user inbox of system events

Writers only add rows to the session; committing belongs to the caller's
unit of work so a notification is stored together with the event it
describes.
"""

from flask import current_app
from extensions import db
from models import Notification
from .errors import NotFound

TITLE_MAX_LENGTH = 200
MESSAGE_MAX_LENGTH = 1000
DEFAULT_LIST_LIMIT = 100


def create_notification(user_id, type, title, message=None, portfolio_id=None, access_request_id=None):
    """Stage a notification for ``user_id`` in the current session"""
    notification = Notification(
        user_id=user_id,
        type=type,
        title=title[:TITLE_MAX_LENGTH],
        message=message[:MESSAGE_MAX_LENGTH] if message else message,
        portfolio_id=portfolio_id,
        access_request_id=access_request_id,
        is_read=False
    )
    db.session.add(notification)
    return notification


def list_for_user(user_id, limit=None):
    """Most recent notifications for a user, newest first"""
    if limit is None:
        limit = current_app.config.get('NOTIFICATION_LIST_LIMIT', DEFAULT_LIST_LIMIT)
    return (Notification.query
            .filter_by(user_id=user_id)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
            .limit(limit)
            .all())


def unread_count(user_id):
    return Notification.query.filter_by(user_id=user_id, is_read=False).count()


def mark_read(notification_id, user_id):
    """Mark one of the user's notifications as read.

    A notification owned by someone else is indistinguishable from a
    missing one.
    """
    notification = Notification.query.filter_by(id=notification_id, user_id=user_id).first()
    if not notification:
        raise NotFound('Notification not found')

    if not notification.is_read:
        notification.is_read = True
        db.session.commit()
    return notification


def mark_all_read(user_id):
    """Mark every unread notification of the user as read, returns the count"""
    updated = (Notification.query
               .filter_by(user_id=user_id, is_read=False)
               .update({Notification.is_read: True}, synchronize_session=False))
    db.session.commit()
    current_app.logger.info(f"Marked {updated} notifications as read for user {user_id}")
    return updated


__all__ = [
    'create_notification',
    'list_for_user',
    'unread_count',
    'mark_read',
    'mark_all_read'
]
