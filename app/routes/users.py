# User Account Routes
import logging

from flask import Blueprint, jsonify, session
from flask_login import login_required, current_user, logout_user

from app.models import db, User
from app.utils.permissions import get_or_404, ensure_can_modify
from app.utils.uploads import delete_upload

logger = logging.getLogger(__name__)

users_bp = Blueprint('users', __name__)


def delete_user_account(user):
    """
    Delete a user together with everything they own.

    Products, farm inputs, posts, comments, likes and guides are removed by
    the relationship cascades in the same commit; uploaded images are cleaned
    up afterwards on a best-effort basis.
    """
    images = [p.image for p in user.products] + [f.image for f in user.farm_inputs] + [user.profile_picture]
    product_count = len(user.products)
    email = user.email

    db.session.delete(user)
    db.session.commit()
    logger.info('User %s deleted along with %d product(s)', email, product_count)

    for image in images:
        if image:
            delete_upload(image)
    return product_count


@users_bp.route('/<user_id>', methods=['DELETE'])
@login_required
def delete_user(user_id):
    user = get_or_404(User, user_id, 'User not found')
    ensure_can_modify(user.id, 'delete this user')

    deleting_self = user.id == current_user.id
    delete_user_account(user)
    if deleting_self:
        logout_user()
        session.clear()

    return jsonify({'message': 'User and associated products deleted successfully'}), 200
