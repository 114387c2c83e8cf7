# Password Reset Tokens
from datetime import datetime, timedelta

from flask import current_app
from jose import jwt, JWTError

from app.models import db, User
from app.utils.errors import ValidationError

ALGORITHM = 'HS256'


def _signing_key(user):
    # The current hash is part of the key, so changing the password retires old tokens
    return current_app.config['JWT_SECRET'] + user.password_hash


def create_reset_token(user):
    expires = datetime.utcnow() + timedelta(minutes=current_app.config['RESET_TOKEN_MINUTES'])
    claims = {'id': user.id, 'email': user.email, 'exp': expires}
    return jwt.encode(claims, _signing_key(user), algorithm=ALGORITHM)


def verify_reset_token(token):
    """Return the user a reset token was minted for, or raise ValidationError."""
    invalid = ValidationError('Invalid or expired token')
    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError:
        raise invalid

    user_id = claims.get('id')
    user = db.session.get(User, user_id) if isinstance(user_id, str) else None
    if user is None:
        raise invalid

    try:
        jwt.decode(token, _signing_key(user), algorithms=[ALGORITHM])
    except JWTError:
        raise invalid
    return user
