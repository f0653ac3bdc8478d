"""
Access-Request Service - Requests to view a private portfolio

Flow:
    request_access -> AccessRequest + owner Notification (one commit) -> email owner
    decide_access_request -> status change + requester Notification (one commit) -> email requester

Callers pass the acting user's id explicitly; nothing here reads the
session.
"""

from collections import namedtuple
from flask import current_app
from sqlalchemy.exc import IntegrityError
from extensions import db
from models import (
    User, Portfolio, AccessRequest, Notification,
    AccessRequestStatus, NotificationType, utcnow
)
from utils import notifications as email
from .errors import Unauthenticated, NotFound, Forbidden, DuplicateRequest, InvalidState, ValidationFailed
from .notifications import create_notification

MESSAGE_MAX_LENGTH = 500
NOTE_MAX_LENGTH = 500

CREATED = 'created'
ALREADY_EXISTS = 'already_exists'

APPROVE = 'approve'
REJECT = 'reject'

CreateOutcome = namedtuple('CreateOutcome', ['status', 'access_request'])


def _find_existing(portfolio_id, requester_id):
    return AccessRequest.query.filter_by(
        portfolio_id=portfolio_id,
        requester_user_id=requester_id
    ).first()


def _send_best_effort(sender, *args, **kwargs):
    try:
        sender(*args, **kwargs)
    except Exception as e:
        name = getattr(sender, '__name__', repr(sender))
        current_app.logger.error(f"Email notification failed ({name}): {str(e)}")


def try_create_access_request(portfolio_id, requester_id, message=None):
    """
    Insert a Pending request unless one already exists for the pair.

    The row is flushed but not committed. The unique constraint on
    (portfolio_id, requester_user_id) decides concurrent inserts; the
    pre-check only saves a round trip in the common case.

    Returns:
        CreateOutcome: status is CREATED or ALREADY_EXISTS
    """
    existing = _find_existing(portfolio_id, requester_id)
    if existing:
        return CreateOutcome(ALREADY_EXISTS, existing)

    access_request = AccessRequest(
        portfolio_id=portfolio_id,
        requester_user_id=requester_id,
        message=message or '',
        status=AccessRequestStatus.PENDING,
        created_at=utcnow()
    )
    db.session.add(access_request)
    try:
        db.session.flush()
    except IntegrityError:
        db.session.rollback()
        current_app.logger.warning(
            f"Concurrent access request detected for portfolio {portfolio_id} from user {requester_id}")
        return CreateOutcome(ALREADY_EXISTS, _find_existing(portfolio_id, requester_id))

    return CreateOutcome(CREATED, access_request)


def request_access(portfolio_id, requester_id, message=None):
    """Ask the owner of a portfolio for access, notifying them in-app and by email"""
    current_app.logger.info(f"Access request started for portfolio {portfolio_id}")

    if requester_id is None:
        current_app.logger.warning("Access request failed: User not authenticated")
        raise Unauthenticated()

    requester = db.session.get(User, requester_id)
    if not requester:
        current_app.logger.warning(f"Access request failed: requester {requester_id} no longer exists")
        raise Unauthenticated()

    portfolio = db.session.get(Portfolio, portfolio_id)
    if not portfolio:
        current_app.logger.warning(f"Access request failed: Portfolio {portfolio_id} not found")
        raise NotFound('Portfolio not found')

    message = (message or '').strip()
    if len(message) > MESSAGE_MAX_LENGTH:
        raise ValidationFailed(f'Message cannot exceed {MESSAGE_MAX_LENGTH} characters')

    outcome = try_create_access_request(portfolio.id, requester.id, message)
    if outcome.status == ALREADY_EXISTS:
        db.session.rollback()
        current_app.logger.warning(
            f"Access request failed: Request already exists for portfolio {portfolio_id} from user {requester_id}")
        raise DuplicateRequest()

    access_request = outcome.access_request
    owner = portfolio.user

    text = f"{requester.full_name} has requested access to your portfolio '{portfolio.title}'"
    if message:
        text += f": {message}"
    notification = create_notification(
        user_id=owner.id,
        type=NotificationType.ACCESS_REQUESTED,
        title='New Access Request',
        message=text,
        portfolio_id=portfolio.id,
        access_request_id=access_request.id
    )

    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise DuplicateRequest()
    except Exception:
        db.session.rollback()
        raise

    current_app.logger.info(
        f"Access request {access_request.id} saved, notification {notification.id} created for user {owner.id}")

    _send_best_effort(
        email.send_access_requested,
        owner.email,
        owner.full_name,
        requester.full_name,
        portfolio.title,
        message
    )
    return access_request


def decide_access_request(request_id, decider_id, decision, note=None):
    """Approve or reject a Pending request; only the portfolio owner may decide"""
    if decider_id is None:
        raise Unauthenticated()

    if decision not in (APPROVE, REJECT):
        raise ValidationFailed('Decision must be approve or reject')

    access_request = db.session.get(AccessRequest, request_id)
    if not access_request:
        raise NotFound('Access request not found')

    portfolio = access_request.portfolio
    if portfolio.user_id != decider_id:
        current_app.logger.warning(
            f"User {decider_id} tried to decide access request {request_id} on a portfolio they do not own")
        raise Forbidden('Only the portfolio owner can decide this request')

    if access_request.status != AccessRequestStatus.PENDING:
        raise InvalidState()

    note = (note or '').strip() or None
    if note and len(note) > NOTE_MAX_LENGTH:
        raise ValidationFailed(f'Note cannot exceed {NOTE_MAX_LENGTH} characters')

    approved = decision == APPROVE
    access_request.status = AccessRequestStatus.APPROVED if approved else AccessRequestStatus.REJECTED
    access_request.owner_response_note = note
    access_request.decided_at = utcnow()

    verb = 'approved' if approved else 'rejected'
    text = f"{portfolio.user.full_name} has {verb} your request to view '{portfolio.title}'"
    if note:
        text += f": {note}"
    create_notification(
        user_id=access_request.requester_user_id,
        type=NotificationType.ACCESS_APPROVED if approved else NotificationType.ACCESS_REJECTED,
        title='Access Request Approved' if approved else 'Access Request Rejected',
        message=text,
        portfolio_id=portfolio.id,
        access_request_id=access_request.id
    )

    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    current_app.logger.info(f"Access request {request_id} {verb} by user {decider_id}")

    requester = access_request.requester
    _send_best_effort(
        email.send_access_decision,
        requester.email,
        requester.full_name,
        portfolio.title,
        approved,
        note
    )
    return access_request


def list_received(owner_id):
    """Requests made against portfolios the user owns"""
    return (AccessRequest.query
            .join(Portfolio, AccessRequest.portfolio_id == Portfolio.id)
            .filter(Portfolio.user_id == owner_id)
            .order_by(AccessRequest.created_at.desc(), AccessRequest.id.desc())
            .all())


def list_sent(requester_id):
    return (AccessRequest.query
            .filter_by(requester_user_id=requester_id)
            .order_by(AccessRequest.created_at.desc(), AccessRequest.id.desc())
            .all())


def has_approved_access(portfolio_id, user_id):
    if user_id is None:
        return False
    return AccessRequest.query.filter_by(
        portfolio_id=portfolio_id,
        requester_user_id=user_id,
        status=AccessRequestStatus.APPROVED
    ).first() is not None


def approved_portfolio_ids(user_id):
    rows = (db.session.query(AccessRequest.portfolio_id)
            .filter_by(requester_user_id=user_id, status=AccessRequestStatus.APPROVED)
            .all())
    return {row[0] for row in rows}


def debug_snapshot(portfolio_id, current_user_id):
    """Diagnostic view of one portfolio's access-request state"""
    portfolio = db.session.get(Portfolio, portfolio_id)

    portfolio_info = None
    owner_notifications = []
    if portfolio:
        portfolio_info = {
            'id': portfolio.id,
            'title': portfolio.title,
            'ownerId': portfolio.user_id,
            'ownerName': portfolio.user.full_name if portfolio.user else None,
            'isPrivate': not portfolio.is_public
        }
        owner_notifications = [{
            'id': n.id,
            'type': n.type,
            'message': n.message,
            'createdAt': n.created_at.isoformat() if n.created_at else None,
            'isRead': n.is_read
        } for n in (Notification.query
                    .filter_by(user_id=portfolio.user_id)
                    .order_by(Notification.created_at.desc(), Notification.id.desc())
                    .limit(5)
                    .all())]

    existing_requests = []
    if current_user_id is not None:
        existing_requests = [{
            'id': ar.id,
            'status': ar.status,
            'createdAt': ar.created_at.isoformat() if ar.created_at else None
        } for ar in AccessRequest.query.filter_by(
            requester_user_id=current_user_id, portfolio_id=portfolio_id).all()]

    return {
        'currentUserId': current_user_id or 0,
        'portfolio': portfolio_info,
        'existingRequests': existing_requests,
        'ownerNotifications': owner_notifications
    }
