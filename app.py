"""
Digital Portfolio - Main Application Entry Point
Application Factory Pattern with blueprint-based modules

This module initializes the Flask application with its extensions,
configuration, error handlers and hooks. Route handling is delegated to
blueprints, business rules to the services package.
"""

import os
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException
from config import get_config
from extensions import db, cors, login_manager
from services.errors import ServiceError, Unexpected

# Import all blueprints
from blueprints.auth import auth_bp
from blueprints.portfolio import portfolio_bp
from blueprints.sections import project_bp, education_bp, experience_bp, skill_bp
from blueprints.access_requests import access_requests_bp
from blueprints.notifications import notifications_bp
from blueprints.admin import admin_bp, statistics_bp


def create_app(config_name=None):
    """
    Application Factory Pattern
    Creates and configures Flask application instance

    Args:
        config_name (str): Configuration environment name (optional)

    Returns:
        Flask: Configured Flask application instance
    """

    app = Flask(__name__)

    # Load configuration
    app.config.from_object(get_config(config_name))

    # Initialize extensions with app
    initialize_extensions(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register request/response hooks
    register_hooks(app)

    # Health check route
    @app.route('/health')
    def health_check():
        return {'status': 'ok'}, 200

    return app


def initialize_extensions(app):
    """Initialize Flask extensions with the app instance"""
    db.init_app(app)
    login_manager.init_app(app)
    cors.init_app(app, origins=app.config['CORS_ORIGINS'], supports_credentials=True)

    # Create tables if they don't exist
    with app.app_context():
        import models  # noqa: F401  registers the tables on db.metadata
        try:
            db.create_all()
            app.logger.info("Database initialized successfully")
        except Exception as e:
            app.logger.error(f"Database initialization failed: {str(e)}")
            raise


def register_blueprints(app):
    """Register all application blueprints"""
    app.register_blueprint(auth_bp)
    app.register_blueprint(portfolio_bp)
    app.register_blueprint(project_bp)
    app.register_blueprint(education_bp)
    app.register_blueprint(experience_bp)
    app.register_blueprint(skill_bp)
    app.register_blueprint(access_requests_bp)
    app.register_blueprint(notifications_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(statistics_bp)


def register_error_handlers(app):
    """Register JSON error handlers"""

    @app.errorhandler(ServiceError)
    def service_error(e):
        if e.status_code >= 500:
            db.session.rollback()
            app.logger.error(f"Service error: {e.message}")
        return jsonify({'error': e.message}), e.status_code

    @app.errorhandler(HTTPException)
    def http_error(e):
        return jsonify({'error': e.description or e.name}), e.code

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({'error': 'Resource not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({'error': 'Method not allowed'}), 405

    @app.errorhandler(Exception)
    def internal_server_error(e):
        app.logger.exception(f"Server Error: {str(e)}")
        return service_error(Unexpected())


def register_hooks(app):
    """Register request/response hooks"""

    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses"""
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Cache-Control'] = 'no-store'
        if not app.debug:
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
        return response


if __name__ == '__main__':
    # Get environment
    env = os.environ.get('FLASK_ENV', 'development')

    # Create app
    app = create_app(env)

    # Run development server
    app.run(
        host='0.0.0.0',
        port=int(os.environ.get('PORT', 5000)),
        debug=(env == 'development')
    )
