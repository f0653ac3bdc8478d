"""
Blueprints Package - Modular application structure
Each blueprint handles a specific domain of functionality
"""

__all__ = ['access_requests', 'admin', 'auth', 'notifications', 'portfolio', 'sections']
