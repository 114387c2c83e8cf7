# Authentication & Account Routes
import logging
from datetime import datetime

from flask import Blueprint, jsonify, session
from flask_login import login_user, logout_user, login_required, current_user

from app.models import db, User
from app.utils.errors import AuthenticationError, ConflictError, NotFoundError
from app.utils.forms import request_data, require_fields, clean_str, is_blank, parse_json_object, parse_bool
from app.utils.mailer import send_password_reset, send_contact_message
from app.utils.tokens import create_reset_token, verify_reset_token
from app.utils.uploads import save_upload, delete_upload

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)


def normalize_email(value):
    return clean_str(value).lower()


def ensure_email_available(email, user_id=None):
    existing = User.query.filter_by(email=email).first()
    if existing and existing.id != user_id:
        raise ConflictError('User with this email already exists', details={'field': 'email'})


# ==================== SIGNUP / LOGIN ====================

@auth_bp.route('/signup', methods=['POST'])
def signup():
    data = request_data()
    require_fields(data, ['name', 'email', 'password'])

    email = normalize_email(data['email'])
    ensure_email_available(email)

    user = User(name=clean_str(data['name']), email=email, phone=clean_str(data.get('phone')) or None)
    user.set_password(str(data['password']))
    db.session.add(user)
    db.session.commit()
    logger.info('New user signed up: %s', user.email)

    return jsonify({'message': 'User created successfully', 'user': user.to_dict()}), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    data = request_data()
    require_fields(data, ['email', 'password'])

    user = User.query.filter_by(email=normalize_email(data['email'])).first()

    # Same answer for unknown email and wrong password
    if not user or not user.check_password(str(data['password'])):
        logger.info('Failed login attempt for %s', data['email'])
        raise AuthenticationError('Invalid email or password.')

    session.rotate()
    login_user(user)
    session['email'] = user.email
    user.last_active = datetime.utcnow()
    db.session.commit()
    logger.info('User %s logged in', user.email)

    return jsonify({
        'message': 'Login successful',
        'user': {
            '_id': user.id,
            'name': user.name,
            'email': user.email,
            'isAdmin': user.is_admin,
        }
    }), 200


@auth_bp.route('/logout', methods=['POST'])
def logout():
    logout_user()
    session.clear()
    return jsonify({'message': 'Logged out successfully'}), 200


@auth_bp.route('/currentuser', methods=['GET'])
@login_required
def get_current_user():
    return jsonify(current_user.to_dict()), 200


# ==================== SETTINGS ====================

@auth_bp.route('/settings', methods=['PUT'])
@login_required
def update_settings():
    data = request_data()
    require_fields(data, ['name', 'email'])

    email = normalize_email(data['email'])
    ensure_email_available(email, current_user.id)

    notifications = {}
    if not is_blank(data.get('notifications')):
        raw = parse_json_object(data['notifications'], 'notifications', allowed_keys=('email', 'push'))
        notifications = {key: parse_bool(value, f'notifications.{key}') for key, value in raw.items()}

    picture = save_upload('profilePicture')

    user = current_user._get_current_object()
    user.name = clean_str(data['name'])
    user.email = email
    if not is_blank(data.get('phone')):
        user.phone = clean_str(data['phone'])
    if not is_blank(data.get('language')):
        user.language = clean_str(data['language'])
    if 'email' in notifications:
        user.notify_email = notifications['email']
    if 'push' in notifications:
        user.notify_push = notifications['push']

    previous_picture = user.profile_picture
    if picture:
        user.profile_picture = picture

    db.session.commit()
    session['email'] = user.email

    if picture and previous_picture:
        delete_upload(previous_picture)

    return jsonify({'message': 'Settings updated successfully', 'user': user.to_dict()}), 200


# ==================== PASSWORD RESET ====================

@auth_bp.route('/forgotpassword', methods=['POST'])
def forgot_password():
    data = request_data()
    require_fields(data, ['email'])

    user = User.query.filter_by(email=normalize_email(data['email'])).first()
    if not user:
        raise NotFoundError('User does not exist!')

    token = create_reset_token(user)
    send_password_reset(user, token)

    return jsonify({'message': 'Password reset instructions have been sent to your email.'}), 200


@auth_bp.route('/reset-password', methods=['POST'])
def reset_password():
    data = request_data()
    require_fields(data, ['token', 'newPassword'])

    user = verify_reset_token(data['token'])
    user.set_password(str(data['newPassword']))
    db.session.commit()
    logger.info('Password reset for %s', user.email)

    return jsonify({'message': 'Password successfully reset'}), 200


# ==================== CONTACT FORM ====================

@auth_bp.route('/sendemail', methods=['POST'])
def send_email():
    data = request_data()
    require_fields(data, ['name', 'email', 'message'])

    send_contact_message(clean_str(data['name']), clean_str(data['email']), data['message'])

    return jsonify({'message': 'Message sent successfully!'}), 200
