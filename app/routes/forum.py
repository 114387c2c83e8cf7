# Community Forum Routes
import logging

from flask import Blueprint, request, jsonify
from flask_login import login_required, current_user

from app.models import db, ForumPost, ForumComment, FORUM_CATEGORIES
from app.utils.errors import ValidationError, NotFoundError
from app.utils.forms import request_data, require_fields, is_blank, clean_str, parse_choice
from app.utils.permissions import get_or_404, ensure_can_modify

logger = logging.getLogger(__name__)

forum_bp = Blueprint('forum', __name__)


def apply_post_fields(post, data):
    for field in ('title', 'content'):
        if field in data:
            if is_blank(data[field]):
                raise ValidationError(f'{field} cannot be empty', details={'field': field})
            setattr(post, field, clean_str(data[field]))
    if not is_blank(data.get('category')):
        post.category = parse_choice(clean_str(data['category']), 'category', FORUM_CATEGORIES)


def remove_comment(post, comment_id):
    """Drop one comment; only the post owner or an administrator may do this."""
    ensure_can_modify(post.owner_id, 'delete comments on this post')
    comment = next((c for c in post.comments if c.id == comment_id), None)
    if comment is None:
        raise NotFoundError('Comment not found')
    post.comments.remove(comment)
    db.session.commit()
    return post


@forum_bp.route('/posts', methods=['GET'])
def list_posts():
    query = ForumPost.query
    category = request.args.get('category', '', type=str).strip()
    if category and category != 'all':
        query = query.filter_by(category=category)
    posts = query.order_by(ForumPost.created_at.desc()).all()
    return jsonify([post.to_dict() for post in posts]), 200


@forum_bp.route('/posts/<post_id>', methods=['GET'])
def get_post(post_id):
    post = get_or_404(ForumPost, post_id, 'Post not found')
    return jsonify(post.to_dict()), 200


@forum_bp.route('/posts', methods=['POST'])
@login_required
def create_post():
    data = request_data()
    require_fields(data, ['title', 'content'])

    post = ForumPost(author_id=current_user.id, category='uncategorized')
    apply_post_fields(post, data)
    db.session.add(post)
    db.session.commit()
    logger.info('Forum post %s created by %s', post.id, current_user.email)

    return jsonify(post.to_dict()), 201


@forum_bp.route('/posts/<post_id>', methods=['PUT'])
@login_required
def edit_post(post_id):
    post = get_or_404(ForumPost, post_id, 'Post not found')
    ensure_can_modify(post.owner_id, 'edit this post')

    apply_post_fields(post, request_data())
    db.session.commit()
    return jsonify(post.to_dict()), 200


@forum_bp.route('/posts/<post_id>', methods=['DELETE'])
@login_required
def delete_post(post_id):
    post = get_or_404(ForumPost, post_id, 'Post not found')
    ensure_can_modify(post.owner_id, 'delete this post')

    db.session.delete(post)
    db.session.commit()
    logger.info('Forum post %s deleted', post_id)
    return jsonify({'message': 'Post deleted successfully'}), 200


# ==================== COMMENTS & LIKES ====================

@forum_bp.route('/posts/<post_id>/comments', methods=['POST'])
@login_required
def add_comment(post_id):
    post = get_or_404(ForumPost, post_id, 'Post not found')
    data = request_data()
    require_fields(data, ['content'])

    post.comments.append(ForumComment(author_id=current_user.id, content=clean_str(data['content'])))
    db.session.commit()
    return jsonify(post.to_dict()), 200


@forum_bp.route('/posts/<post_id>/comments/<comment_id>', methods=['DELETE'])
@login_required
def delete_comment(post_id, comment_id):
    post = get_or_404(ForumPost, post_id, 'Post not found')
    remove_comment(post, comment_id)
    return jsonify(post.to_dict()), 200


@forum_bp.route('/posts/<post_id>/like', methods=['POST'])
@login_required
def toggle_like(post_id):
    post = get_or_404(ForumPost, post_id, 'Post not found')
    post.toggle_like(current_user._get_current_object())
    db.session.commit()
    return jsonify(post.to_dict()), 200
