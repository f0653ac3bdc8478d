"""
Auth Routes - Registration, session login and profile
"""

from flask import request, jsonify, current_app
from flask_login import login_user, logout_user
from services import users
from utils.decorators import login_required
from utils.helpers import get_json_body
from utils.security import current_subject_id, get_client_ip
from utils.serializers import user_to_dict
from . import auth_bp


@auth_bp.route('/register', methods=['POST'])
def register():
    """Create an account and sign it in"""
    data = get_json_body()
    user = users.register_user(data.get('fullName'), data.get('email'), data.get('password'))
    login_user(user)
    return jsonify({'message': 'Registration successful'}), 200


@auth_bp.route('/login', methods=['POST'])
def login():
    data = get_json_body()
    user = users.authenticate(data.get('email'), data.get('password'))
    login_user(user)
    current_app.logger.info(f"User {user.id} logged in from {get_client_ip()}")
    return jsonify({'message': 'Login successful', 'user': user_to_dict(user)}), 200


@auth_bp.route('/logout', methods=['POST'])
def logout():
    logout_user()
    return jsonify({'message': 'Logout successful'}), 200


@auth_bp.route('/check-session', methods=['GET'])
@login_required
def check_session():
    """Identity of the signed-in user"""
    user = users.get_user(current_subject_id())
    return jsonify({
        'isAuthenticated': True,
        'userId': user.id,
        'email': user.email,
        'fullName': user.full_name,
        'role': user.role
    })


@auth_bp.route('/profile', methods=['PUT'])
@login_required
def update_profile():
    user = users.update_profile(current_subject_id(), get_json_body())
    return jsonify({'message': 'Profile updated successfully', 'user': user_to_dict(user)}), 200


@auth_bp.route('/forgot-password', methods=['POST'])
def forgot_password():
    """Password resets go through the administrator"""
    data = get_json_body()
    admin, user_exists = users.forgot_password(data.get('email'))
    return jsonify({
        'message': 'Please contact the administrator to reset your password',
        'admin': admin,
        'sent': user_exists
    }), 200


@auth_bp.route('/promote', methods=['POST'])
def promote():
    user = users.promote_to_admin(request.args.get('email'), request.headers.get('X-Admin-Pin'))
    return jsonify({'message': f'{user.email} is now an admin', 'user': user_to_dict(user)}), 200
