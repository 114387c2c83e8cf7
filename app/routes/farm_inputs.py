# Farm Inputs Routes
import logging

from flask import Blueprint, request, jsonify
from flask_login import login_required, current_user

from app.models import db, FarmInput, FARM_INPUT_CATEGORIES, SPECIFICATION_FIELDS
from app.utils.errors import ValidationError
from app.utils.forms import (
    request_data, require_fields, is_blank, clean_str,
    parse_float, parse_int, parse_bool, parse_json_object, parse_choice
)
from app.utils.permissions import get_or_404, ensure_can_modify
from app.utils.uploads import save_upload, delete_upload

logger = logging.getLogger(__name__)

farm_inputs_bp = Blueprint('farm_inputs', __name__)

REQUIRED_FIELDS = ['name', 'price', 'category', 'quantity', 'unit']


def apply_farm_input_fields(farm_input, data):
    """Copy the editable fields present in ``data``; numeric and JSON fields are parsed here."""
    for field in ('name', 'unit'):
        if field in data:
            if is_blank(data[field]):
                raise ValidationError(f'{field} cannot be empty', details={'field': field})
            setattr(farm_input, field, clean_str(data[field]))

    if 'description' in data:
        farm_input.description = clean_str(data['description']) or None
    if 'category' in data:
        farm_input.category = parse_choice(data['category'], 'category', FARM_INPUT_CATEGORIES)
    if 'price' in data:
        farm_input.price = parse_float(data['price'], 'price')
    if 'quantity' in data:
        farm_input.quantity = parse_int(data['quantity'], 'quantity')
    if 'available' in data:
        farm_input.available = parse_bool(data['available'], 'available')
    if 'discountEligible' in data:
        farm_input.discount_eligible = parse_bool(data['discountEligible'], 'discountEligible')

    if 'discountThreshold' in data:
        value = data['discountThreshold']
        farm_input.discount_threshold = None if is_blank(value) else parse_int(value, 'discountThreshold')
    if 'discountPercentage' in data:
        value = data['discountPercentage']
        if is_blank(value):
            farm_input.discount_percentage = None
        else:
            percentage = parse_float(value, 'discountPercentage')
            if percentage > 100:
                raise ValidationError('discountPercentage must not exceed 100', details={'field': 'discountPercentage'})
            farm_input.discount_percentage = percentage

    if 'specifications' in data:
        value = data['specifications']
        farm_input.specifications = None if is_blank(value) else parse_json_object(
            value, 'specifications', allowed_keys=SPECIFICATION_FIELDS)


def update_farm_input(farm_input, data):
    apply_farm_input_fields(farm_input, data)

    new_image = save_upload('image')
    old_image = farm_input.image
    if new_image:
        farm_input.image = new_image

    db.session.commit()

    if new_image and old_image:
        delete_upload(old_image)
    return farm_input


def remove_farm_input(farm_input):
    image, input_id = farm_input.image, farm_input.id
    db.session.delete(farm_input)
    db.session.commit()
    logger.info('Farm input %s deleted', input_id)
    if image:
        delete_upload(image)


def _available_inputs(category=None):
    query = FarmInput.query.filter_by(available=True)
    if category and category != 'all':
        query = query.filter_by(category=category)
    return query.order_by(FarmInput.created_at.desc()).all()


@farm_inputs_bp.route('', methods=['GET'])
def list_farm_inputs():
    category = request.args.get('category', '', type=str).strip()
    return jsonify([item.to_dict() for item in _available_inputs(category)]), 200


@farm_inputs_bp.route('/category/<category>', methods=['GET'])
def list_farm_inputs_by_category(category):
    parse_choice(category, 'category', FARM_INPUT_CATEGORIES)
    return jsonify([item.to_dict() for item in _available_inputs(category)]), 200


@farm_inputs_bp.route('', methods=['POST'])
@login_required
def add_farm_input():
    data = request_data()
    require_fields(data, REQUIRED_FIELDS)

    farm_input = FarmInput(seller_id=current_user.id)
    apply_farm_input_fields(farm_input, data)
    farm_input.image = save_upload('image')

    db.session.add(farm_input)
    db.session.commit()
    logger.info('Farm input %s listed by %s', farm_input.id, current_user.email)

    return jsonify(farm_input.to_dict()), 201


@farm_inputs_bp.route('/<input_id>', methods=['PUT'])
@login_required
def edit_farm_input(input_id):
    farm_input = get_or_404(FarmInput, input_id, 'Farm input not found')
    ensure_can_modify(farm_input.owner_id, 'update this farm input')

    update_farm_input(farm_input, request_data())
    return jsonify(farm_input.to_dict()), 200


@farm_inputs_bp.route('/<input_id>', methods=['DELETE'])
@login_required
def delete_farm_input(input_id):
    farm_input = get_or_404(FarmInput, input_id, 'Farm input not found')
    ensure_can_modify(farm_input.owner_id, 'delete this farm input')

    remove_farm_input(farm_input)
    return jsonify({'message': 'Farm input deleted successfully'}), 200
