"""
Auth Blueprint - Authentication and account management
Handles: Register, Login, Logout, Profile, Admin promotion
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__, url_prefix='/api/Auth')

from . import routes
