"""
Extensions Module - Centralized initialization of Flask extensions
Keeps extension objects unbound so models, services and blueprints can
import them without pulling in the application factory.
"""

from flask import jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_cors import CORS

# Initialize extensions without binding to app
db = SQLAlchemy()
cors = CORS()
login_manager = LoginManager()
login_manager.session_protection = 'basic'


@login_manager.user_loader
def load_user(user_id):
    from models import User
    try:
        return db.session.get(User, int(user_id))
    except (TypeError, ValueError):
        return None


@login_manager.unauthorized_handler
def unauthorized():
    # API clients get a status code instead of a redirect to a login page
    return jsonify({'error': 'User not authenticated'}), 401


__all__ = ['db', 'cors', 'login_manager']
