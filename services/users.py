"""
Users Service - Registration, credentials and profile management
"""

import uuid
from flask import current_app
from sqlalchemy.exc import IntegrityError
from extensions import db
from models import User, Role
from utils.security import hash_password, verify_password
from utils.helpers import clean_str
from utils import notifications as email
from .errors import Unauthenticated, NotFound, ValidationFailed, Forbidden

NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 100


def _normalize_email(value):
    return (clean_str(value) or '').lower()


def _validate_name_and_email(full_name, email_address):
    if len(full_name) > NAME_MAX_LENGTH:
        raise ValidationFailed(f'Full name cannot exceed {NAME_MAX_LENGTH} characters')
    if len(email_address) > EMAIL_MAX_LENGTH or '@' not in email_address:
        raise ValidationFailed('A valid email address is required')


def find_by_email(email_address):
    return User.query.filter_by(email=_normalize_email(email_address)).first()


def get_user(user_id):
    user = db.session.get(User, user_id) if user_id is not None else None
    if not user:
        raise NotFound('User not found')
    return user


def register_user(full_name, email_address, password):
    full_name = clean_str(full_name) or ''
    email_address = _normalize_email(email_address)
    if not full_name or not email_address or not password:
        current_app.logger.warning("Invalid registration data: Missing required fields")
        raise ValidationFailed('Invalid registration data: Missing required fields')
    _validate_name_and_email(full_name, email_address)

    if find_by_email(email_address):
        current_app.logger.warning(f"Registration failed: Email {email_address} already in use")
        raise ValidationFailed('Email already in use')

    user = User(
        full_name=full_name,
        email=email_address,
        password_hash=hash_password(password),
        role=Role.USER
    )
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ValidationFailed('Email already in use')

    current_app.logger.info(f"User created successfully with ID: {user.id}")
    try:
        email.send_registration_confirmation(user.email, user.full_name)
    except Exception as e:
        current_app.logger.error(f"Failed to send confirmation email: {str(e)}")
    return user


def authenticate(email_address, password):
    user = find_by_email(email_address)
    if not user or not password or not verify_password(password, user.password_hash):
        current_app.logger.warning(f"Failed login for {email_address}")
        raise Unauthenticated('Invalid credentials')
    return user


def update_profile(user_id, data):
    if user_id is None:
        raise Unauthenticated()
    user = db.session.get(User, user_id)
    if not user:
        raise NotFound('User not found')

    full_name = clean_str(data.get('fullName'))
    email_address = _normalize_email(data.get('email'))
    if full_name:
        _validate_name_and_email(full_name, user.email)
        user.full_name = full_name
    if email_address and email_address != user.email:
        _validate_name_and_email(user.full_name, email_address)
        if find_by_email(email_address):
            raise ValidationFailed('Email already in use')
        user.email = email_address

    new_password = data.get('newPassword')
    if new_password:
        current_password = data.get('currentPassword')
        if not current_password or not verify_password(current_password, user.password_hash):
            db.session.rollback()
            raise ValidationFailed('Current password is incorrect')
        user.password_hash = hash_password(new_password)

    db.session.commit()
    current_app.logger.info(f"Profile updated for user {user.id}")
    return user


def forgot_password(email_address):
    """Point the user to the administrator; never reveals much about the account"""
    email_address = _normalize_email(email_address)
    if not email_address:
        raise ValidationFailed('Email is required')

    user_exists = find_by_email(email_address) is not None
    admin = {
        'name': current_app.config.get('ADMIN_CONTACT_NAME', 'Administrator'),
        'email': current_app.config.get('ADMIN_CONTACT_EMAIL', ''),
        'phone': current_app.config.get('ADMIN_CONTACT_PHONE', '')
    }
    try:
        email.send_forgot_password_contact_admin(email_address, admin['name'], admin['email'], admin['phone'])
    except Exception as e:
        current_app.logger.error(f"Failed to send forgot-password email: {str(e)}")
    return admin, user_exists


def _check_admin_pin(pin):
    required_pin = current_app.config.get('ADMIN_PIN')
    return bool(required_pin) and pin == required_pin


def promote_to_admin(email_address, pin):
    if not _check_admin_pin(pin):
        current_app.logger.warning(f"Rejected admin promotion attempt for {email_address}")
        raise Forbidden()

    user = find_by_email(email_address)
    if not user:
        raise NotFound('User not found')

    user.role = Role.ADMIN
    db.session.commit()
    current_app.logger.info(f"User {user.id} promoted to admin")
    return user


def reset_password(user_id, pin):
    """Replace a user's password with a generated temporary one and return it"""
    if not _check_admin_pin(pin):
        current_app.logger.warning(f"Rejected password reset for user {user_id}: bad admin pin")
        raise Forbidden()

    user = db.session.get(User, user_id)
    if not user:
        raise NotFound('User not found')

    temporary_password = f"Temp{uuid.uuid4().hex[:8]}!"
    user.password_hash = hash_password(temporary_password)
    db.session.commit()
    current_app.logger.info(f"Password reset by admin for user {user.id}")
    return temporary_password
