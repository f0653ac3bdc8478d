"""
Portfolio Blueprint - Portfolio listings, views and CRUD
Handles: Public/visible listings, gated reads, owner edits, social links
"""

from flask import Blueprint

portfolio_bp = Blueprint('portfolio', __name__, url_prefix='/api/Portfolio')

from . import routes
