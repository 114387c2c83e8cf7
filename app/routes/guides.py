# Farming Guide Routes
import logging

from flask import Blueprint, request, jsonify
from flask_login import login_required, current_user

from app.models import db, FarmingGuide
from app.utils.errors import ValidationError, NotFoundError
from app.utils.forms import request_data, require_fields, is_blank, clean_str
from app.utils.permissions import get_or_404, ensure_can_modify

logger = logging.getLogger(__name__)

guides_bp = Blueprint('guides', __name__)


def apply_guide_fields(guide, data):
    for field in ('crop', 'title', 'content'):
        if field in data:
            if is_blank(data[field]):
                raise ValidationError(f'{field} cannot be empty', details={'field': field})
            setattr(guide, field, clean_str(data[field]))


@guides_bp.route('/crops', methods=['GET'])
def list_crops():
    """Distinct crop names that have at least one guide"""
    rows = db.session.query(FarmingGuide.crop).distinct().order_by(FarmingGuide.crop).all()
    return jsonify([row[0] for row in rows]), 200


@guides_bp.route('/guides', methods=['GET'])
def list_guides():
    query = FarmingGuide.query
    crop = request.args.get('crop', '', type=str).strip()
    if crop:
        query = query.filter_by(crop=crop)
    guides = query.order_by(FarmingGuide.created_at.desc()).all()
    return jsonify([guide.to_dict() for guide in guides]), 200


@guides_bp.route('/guides/<crop>', methods=['GET'])
def guides_for_crop(crop):
    guides = FarmingGuide.query.filter_by(crop=crop).order_by(FarmingGuide.created_at.desc()).all()
    if not guides:
        raise NotFoundError('No guides found for this crop')
    return jsonify([guide.to_dict() for guide in guides]), 200


@guides_bp.route('/guides', methods=['POST'])
@login_required
def add_guide():
    data = request_data()
    require_fields(data, ['crop', 'title', 'content'])

    guide = FarmingGuide(user_id=current_user.id)
    apply_guide_fields(guide, data)
    db.session.add(guide)
    db.session.commit()
    logger.info('Guide %s for %s added by %s', guide.id, guide.crop, current_user.email)

    return jsonify(guide.to_dict()), 201


@guides_bp.route('/guides/<guide_id>', methods=['PUT'])
@login_required
def edit_guide(guide_id):
    guide = get_or_404(FarmingGuide, guide_id, 'Guide not found')
    ensure_can_modify(guide.owner_id, 'edit this guide')

    apply_guide_fields(guide, request_data())
    db.session.commit()
    return jsonify(guide.to_dict()), 200


@guides_bp.route('/guides/<guide_id>', methods=['DELETE'])
@login_required
def delete_guide(guide_id):
    guide = get_or_404(FarmingGuide, guide_id, 'Guide not found')
    ensure_can_modify(guide.owner_id, 'delete this guide')

    db.session.delete(guide)
    db.session.commit()
    return jsonify({'message': f'Guide with ID: {guide_id} deleted successfully'}), 200
