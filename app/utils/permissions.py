# Authorization Policy
from functools import wraps

from flask_login import current_user, login_required

from app.models import db
from app.utils.errors import AuthorizationError, NotFoundError


def get_or_404(model, object_id, message=None):
    """Load a record by id or raise NotFoundError with a resource specific message."""
    obj = db.session.get(model, object_id) if object_id else None
    if obj is None:
        raise NotFoundError(message or f'{model.__name__} not found')
    return obj


def can_modify(owner_id, user=None, admin_override=True):
    user = user or current_user
    if not user or not user.is_authenticated:
        return False
    if owner_id is not None and user.id == owner_id:
        return True
    return admin_override and bool(user.is_admin)


def ensure_can_modify(owner_id, action='modify this resource', admin_override=True):
    """
    Single ownership check used by every resource handler.

    Passes when the session user owns the record, or when the user is an
    administrator and ``admin_override`` is set. Raises AuthorizationError
    otherwise. Callers are expected to be behind ``login_required`` already.
    """
    if not can_modify(owner_id, admin_override=admin_override):
        raise AuthorizationError(f'Not authorized to {action}')


def admin_required(view):
    """Require a logged in user with the administrator flag."""
    @wraps(view)
    @login_required
    def wrapper(*args, **kwargs):
        if not current_user.is_admin:
            raise AuthorizationError('Not authorized')
        return view(*args, **kwargs)
    return wrapper
