# Admin Module Routes
import hmac
import logging

from flask import Blueprint, request, jsonify, current_app
from flask_login import login_required, current_user

from app.models import db, User, Product, FarmInput, ForumPost
from app.routes.auth import normalize_email, ensure_email_available
from app.routes.farm_inputs import update_farm_input, remove_farm_input
from app.routes.forum import apply_post_fields, remove_comment
from app.routes.marketplace import update_product, remove_product
from app.routes.users import delete_user_account
from app.utils.analytics import build_analytics, build_dashboard_stats
from app.utils.errors import AuthorizationError, ValidationError
from app.utils.forms import request_data, require_fields, is_blank, clean_str, parse_bool
from app.utils.permissions import get_or_404, admin_required

logger = logging.getLogger(__name__)

admin_bp = Blueprint('admin', __name__)


def check_admin_key(value):
    expected = current_app.config.get('ADMIN_KEY')
    if not expected or not hmac.compare_digest(str(value or '').encode('utf-8'), str(expected).encode('utf-8')):
        raise AuthorizationError('Invalid admin key')


# ==================== ROLE ELEVATION ====================

@admin_bp.route('/register', methods=['POST'])
def register_admin():
    data = request_data()
    require_fields(data, ['name', 'email', 'password', 'adminKey'])
    check_admin_key(data['adminKey'])

    email = normalize_email(data['email'])
    ensure_email_available(email)

    admin = User(name=clean_str(data['name']), email=email, is_admin=True)
    admin.set_password(str(data['password']))
    db.session.add(admin)
    db.session.commit()
    logger.info('Admin account registered: %s', admin.email)

    return jsonify({'message': 'Admin registered successfully', 'user': admin.to_dict()}), 201


@admin_bp.route('/upgrade', methods=['POST'])
@login_required
def upgrade_to_admin():
    data = request_data()
    require_fields(data, ['adminKey'])
    check_admin_key(data['adminKey'])

    current_user.is_admin = True
    db.session.commit()
    logger.info('User %s upgraded to admin', current_user.email)

    return jsonify({'message': 'User upgraded to admin', 'user': current_user.to_dict()}), 200


# ==================== USER MANAGEMENT ====================

@admin_bp.route('/users', methods=['GET'])
@admin_required
def list_users():
    users = User.query.order_by(User.created_at.desc()).all()
    return jsonify([user.to_dict() for user in users]), 200


@admin_bp.route('/users/<user_id>', methods=['PUT'])
@admin_required
def edit_user(user_id):
    user = get_or_404(User, user_id, 'User not found')
    data = request_data()

    if 'name' in data:
        if is_blank(data['name']):
            raise ValidationError('name cannot be empty', details={'field': 'name'})
        user.name = clean_str(data['name'])
    if 'email' in data:
        if is_blank(data['email']):
            raise ValidationError('email cannot be empty', details={'field': 'email'})
        email = normalize_email(data['email'])
        ensure_email_available(email, user_id=user.id)
        user.email = email
    if 'phone' in data:
        user.phone = clean_str(data['phone']) or None
    if 'isAdmin' in data:
        user.is_admin = parse_bool(data['isAdmin'], 'isAdmin')

    db.session.commit()
    logger.info('Admin %s updated user %s', current_user.email, user.email)
    return jsonify(user.to_dict()), 200


@admin_bp.route('/users/<user_id>', methods=['DELETE'])
@admin_required
def delete_user(user_id):
    user = get_or_404(User, user_id, 'User not found')
    if user.id == current_user.id:
        raise ValidationError('You cannot delete your own account from the admin panel')

    delete_user_account(user)
    return jsonify({'message': 'User and associated products deleted successfully'}), 200


# ==================== MARKETPLACE MODERATION ====================

@admin_bp.route('/products', methods=['GET'])
@admin_required
def list_products():
    products = Product.query.order_by(Product.created_at.desc()).all()
    return jsonify([product.to_dict() for product in products]), 200


@admin_bp.route('/products/<product_id>', methods=['PUT'])
@admin_required
def edit_product(product_id):
    product = get_or_404(Product, product_id, 'Product not found')
    update_product(product, request_data())
    return jsonify(product.to_dict()), 200


@admin_bp.route('/products/<product_id>', methods=['DELETE'])
@admin_required
def delete_product(product_id):
    product = get_or_404(Product, product_id, 'Product not found')
    remove_product(product)
    return jsonify({'message': 'Product deleted successfully'}), 200


@admin_bp.route('/farminputs', methods=['GET'])
@admin_required
def list_farm_inputs():
    category = request.args.get('category', '', type=str).strip()
    query = FarmInput.query
    if category and category != 'all':
        query = query.filter_by(category=category)
    items = query.order_by(FarmInput.created_at.desc()).all()
    return jsonify([item.to_dict() for item in items]), 200


@admin_bp.route('/farminputs/<input_id>', methods=['PUT'])
@admin_required
def edit_farm_input(input_id):
    farm_input = get_or_404(FarmInput, input_id, 'Farm input not found')
    update_farm_input(farm_input, request_data())
    return jsonify(farm_input.to_dict()), 200


@admin_bp.route('/farminputs/<input_id>', methods=['DELETE'])
@admin_required
def delete_farm_input(input_id):
    farm_input = get_or_404(FarmInput, input_id, 'Farm input not found')
    remove_farm_input(farm_input)
    return jsonify({'message': 'Farm input deleted successfully'}), 200


# ==================== FORUM MODERATION ====================

@admin_bp.route('/forum/posts', methods=['GET'])
@admin_required
def list_posts():
    posts = ForumPost.query.order_by(ForumPost.created_at.desc()).all()
    return jsonify([post.to_dict() for post in posts]), 200


@admin_bp.route('/forum/posts/<post_id>', methods=['PUT'])
@admin_required
def edit_post(post_id):
    post = get_or_404(ForumPost, post_id, 'Post not found')
    apply_post_fields(post, request_data())
    db.session.commit()
    return jsonify(post.to_dict()), 200


@admin_bp.route('/forum/posts/<post_id>', methods=['DELETE'])
@admin_required
def delete_post(post_id):
    post = get_or_404(ForumPost, post_id, 'Post not found')
    db.session.delete(post)
    db.session.commit()
    logger.info('Admin %s deleted forum post %s', current_user.email, post_id)
    return jsonify({'message': 'Post deleted successfully'}), 200


@admin_bp.route('/forum/posts/<post_id>/comments/<comment_id>', methods=['DELETE'])
@admin_required
def delete_comment(post_id, comment_id):
    post = get_or_404(ForumPost, post_id, 'Post not found')
    remove_comment(post, comment_id)
    return jsonify(post.to_dict()), 200


# ==================== DASHBOARD ====================

@admin_bp.route('/analytics', methods=['GET'])
@admin_required
def analytics():
    range_name = request.args.get('range', 'week', type=str).strip() or 'week'
    return jsonify(build_analytics(range_name)), 200


@admin_bp.route('/stats', methods=['GET'])
@admin_required
def stats():
    return jsonify(build_dashboard_stats()), 200
