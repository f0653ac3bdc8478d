"""
Security Module - Identity resolution, password hashing and client info
"""

from flask import request
from flask_login import current_user
from werkzeug.security import generate_password_hash, check_password_hash


def current_subject_id():
    """Id of the signed-in user, or None for anonymous callers"""
    if current_user and current_user.is_authenticated:
        return current_user.id
    return None


def get_client_ip():
    """Get real client IP address"""
    forwarded = request.environ.get('HTTP_X_FORWARDED_FOR')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.environ.get('REMOTE_ADDR', 'unknown')


def get_user_agent():
    return request.headers.get('User-Agent', 'Unknown')[:500]


def hash_password(password):
    return generate_password_hash(password)


def verify_password(password, password_hash):
    """Verify password against hash"""
    return check_password_hash(password_hash, password)


__all__ = [
    'current_subject_id',
    'get_client_ip',
    'get_user_agent',
    'hash_password',
    'verify_password'
]
