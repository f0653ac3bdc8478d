"""
Admin Blueprint - Platform administration and statistics
Handles: User/portfolio management, password resets, counters
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__, url_prefix='/api/Admin')
statistics_bp = Blueprint('statistics', __name__, url_prefix='/api/Statistics')

from . import routes
