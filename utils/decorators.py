"""
Decorators Module - Authentication and authorization decorators
"""

from functools import wraps
from flask import jsonify, current_app
from flask_login import current_user


def login_required(f):
    """Decorator to require a signed-in user"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            return jsonify({'error': 'User not authenticated'}), 401
        return f(*args, **kwargs)
    return decorated_function


def admin_required(f):
    """Decorator to require the Admin role"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            return jsonify({'error': 'User not authenticated'}), 401
        if not current_user.is_admin:
            current_app.logger.warning(f"User {current_user.id} denied access to an admin endpoint")
            return jsonify({'error': 'Admin access required'}), 403
        return f(*args, **kwargs)
    return decorated_function
