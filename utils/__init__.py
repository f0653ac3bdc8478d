"""
Utils Package - Centralized utility modules initialization
"""

from .decorators import login_required, admin_required
from .notifications import (
    send_email,
    dispatch_email,
    send_registration_confirmation,
    send_access_requested,
    send_access_decision,
    send_forgot_password_contact_admin
)
from .security import (
    current_subject_id,
    get_client_ip,
    get_user_agent,
    hash_password,
    verify_password
)
from .helpers import get_json_body, parse_date, parse_bool, clean_str

__all__ = [
    # Decorators
    'login_required',
    'admin_required',

    # Notifications
    'send_email',
    'dispatch_email',
    'send_registration_confirmation',
    'send_access_requested',
    'send_access_decision',
    'send_forgot_password_contact_admin',

    # Security
    'current_subject_id',
    'get_client_ip',
    'get_user_agent',
    'hash_password',
    'verify_password',

    # Helpers
    'get_json_body',
    'parse_date',
    'parse_bool',
    'clean_str'
]
