"""
Access Request Blueprint - Requests to view private portfolios
Handles: Creating requests, owner decisions, sent/received lists
"""

from flask import Blueprint

access_requests_bp = Blueprint('access_requests', __name__, url_prefix='/api/AccessRequest')

from . import routes
