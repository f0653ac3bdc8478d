"""
Notification Blueprint - Per-user in-app inbox
"""

from flask import Blueprint

notifications_bp = Blueprint('notifications', __name__, url_prefix='/api/Notification')

from . import routes
