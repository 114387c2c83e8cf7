# Produce Marketplace Routes
import logging

from flask import Blueprint, request, jsonify
from flask_login import login_required, current_user

from app.models import db, Product
from app.utils.errors import ValidationError
from app.utils.forms import (
    request_data, require_fields, is_blank, clean_str,
    parse_float, parse_int, parse_bool
)
from app.utils.permissions import get_or_404, ensure_can_modify
from app.utils.uploads import save_upload, delete_upload

logger = logging.getLogger(__name__)

marketplace_bp = Blueprint('marketplace', __name__)

REQUIRED_FIELDS = ['name', 'price', 'city', 'quantity', 'unit']


def apply_product_fields(product, data):
    """Copy the editable fields present in ``data`` onto ``product``. The farmer is never editable."""
    for field in ('name', 'city', 'unit'):
        if field in data:
            if is_blank(data[field]):
                raise ValidationError(f'{field} cannot be empty', details={'field': field})
            setattr(product, field, clean_str(data[field]))

    for field in ('description', 'category'):
        if field in data:
            setattr(product, field, clean_str(data[field]) or None)

    if 'price' in data:
        product.price = parse_float(data['price'], 'price')
    if 'quantity' in data:
        product.quantity = parse_int(data['quantity'], 'quantity')
    if 'available' in data:
        product.available = parse_bool(data['available'], 'available')


def update_product(product, data):
    """Apply a partial update plus an optional replacement image, then commit."""
    apply_product_fields(product, data)

    new_image = save_upload('image')
    old_image = product.image
    if new_image:
        product.image = new_image

    db.session.commit()

    if new_image and old_image:
        delete_upload(old_image)
    return product


def remove_product(product):
    """Delete the record; the image file goes too when possible, but never blocks the delete."""
    image, product_id = product.image, product.id
    db.session.delete(product)
    db.session.commit()
    logger.info('Product %s deleted', product_id)
    if image:
        delete_upload(image)


# ============================================================================
# PUBLIC LISTING
# ============================================================================

@marketplace_bp.route('', methods=['GET'])
def list_products():
    """Available products, newest first, optionally filtered by category"""
    query = Product.query.filter_by(available=True)

    category = request.args.get('category', '', type=str).strip()
    if category and category != 'all':
        query = query.filter_by(category=category)

    products = query.order_by(Product.created_at.desc()).all()
    return jsonify([product.to_dict() for product in products]), 200


@marketplace_bp.route('/<product_id>', methods=['GET'])
def get_product(product_id):
    product = get_or_404(Product, product_id, 'Product not found')
    return jsonify(product.to_dict()), 200


# ============================================================================
# FARMER PRODUCT MANAGEMENT (Login required)
# ============================================================================

@marketplace_bp.route('', methods=['POST'])
@login_required
def add_product():
    data = request_data()
    require_fields(data, REQUIRED_FIELDS)

    product = Product(farmer_id=current_user.id)
    apply_product_fields(product, data)
    product.image = save_upload('image')

    db.session.add(product)
    db.session.commit()
    logger.info('Product %s listed by %s', product.id, current_user.email)

    return jsonify(product.to_dict()), 201


@marketplace_bp.route('/<product_id>', methods=['PUT'])
@login_required
def edit_product(product_id):
    product = get_or_404(Product, product_id, 'Product not found')
    ensure_can_modify(product.owner_id, 'update this product')

    update_product(product, request_data())
    return jsonify(product.to_dict()), 200


@marketplace_bp.route('/<product_id>', methods=['DELETE'])
@login_required
def delete_product(product_id):
    product = get_or_404(Product, product_id, 'Product not found')
    ensure_can_modify(product.owner_id, 'delete this product')

    remove_product(product)
    return jsonify({'message': 'Product deleted successfully'}), 200
