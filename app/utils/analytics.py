# Admin Analytics
import math
from datetime import datetime, timedelta

from sqlalchemy import func

from app.models import db, User, Product, FarmInput, ForumPost, ForumComment
from app.models.user import isoformat
from app.utils.errors import ValidationError

RANGE_DAYS = {
    'week': 7,
    'month': 30,
    'year': 365,
}


def calculate_growth(current, previous):
    """Whole-number percentage change between two windows."""
    if previous == 0:
        return 100 if current > 0 else 0
    # Halves round up, never to even
    return math.floor((current - previous) / previous * 100 + 0.5)


def resolve_windows(range_name, now=None):
    """Return (previous_start, start, now) for two adjacent windows of equal length."""
    if range_name not in RANGE_DAYS:
        raise ValidationError(f'range must be one of: {", ".join(RANGE_DAYS)}', details={'field': 'range'})
    now = now or datetime.utcnow()
    length = timedelta(days=RANGE_DAYS[range_name])
    start = now - length
    return start - length, start, now


def _count_between(column, lower, upper):
    return db.session.query(func.count()).select_from(column.class_)\
        .filter(column >= lower, column < upper).scalar()


def _day(column):
    # Handle Postgres vs SQLite
    if db.engine.dialect.name == 'sqlite':
        return func.strftime('%Y-%m-%d', column)
    return func.to_char(column, 'YYYY-MM-DD')


def _per_day(column, start, end):
    day = _day(column).label('day')
    rows = db.session.query(day, func.count()).filter(column >= start, column < end)\
        .group_by('day').order_by('day').all()
    return {row[0]: row[1] for row in rows}


def _aligned(*series):
    labels = sorted(set().union(*series))
    return labels, [[s.get(label, 0) for label in labels] for s in series]


def build_analytics(range_name='week', now=None):
    previous_start, start, now = resolve_windows(range_name, now)

    total_users = User.query.count()
    total_products = Product.query.count()
    total_posts = ForumPost.query.count()

    windows = {}
    for key, column in (
        ('users', User.created_at),
        ('products', Product.created_at),
        ('posts', ForumPost.created_at),
        ('active_users', User.last_active),
    ):
        windows[key] = (
            _count_between(column, start, now),
            _count_between(column, previous_start, start),
        )

    new_users = _per_day(User.created_at, start, now)
    active_users = _per_day(User.last_active, start, now)
    user_labels, (new_user_counts, active_user_counts) = _aligned(new_users, active_users)

    posts = _per_day(ForumPost.created_at, start, now)
    comments = _per_day(ForumComment.created_at, start, now)
    forum_labels, (post_counts, comment_counts) = _aligned(posts, comments)

    categories = {}
    for category, count in db.session.query(Product.category, func.count(Product.id))\
            .group_by(Product.category).all():
        label = category or 'Uncategorized'
        categories[label] = categories.get(label, 0) + count

    return {
        'range': range_name,
        'from': isoformat(start),
        'to': isoformat(now),
        'summary': {
            'totalUsers': total_users,
            'totalProducts': total_products,
            'totalPosts': total_posts,
            'activeUsers': windows['active_users'][0],
            'newUsers': windows['users'][0],
            'newProducts': windows['products'][0],
            'newPosts': windows['posts'][0],
            'userGrowth': calculate_growth(*windows['users']),
            'productGrowth': calculate_growth(*windows['products']),
            'postGrowth': calculate_growth(*windows['posts']),
            'activeUserGrowth': calculate_growth(*windows['active_users']),
        },
        'userActivity': {
            'labels': user_labels,
            'newUsers': new_user_counts,
            'activeUsers': active_user_counts,
        },
        'productCategories': {
            'labels': list(categories),
            'counts': list(categories.values()),
        },
        'forumActivity': {
            'labels': forum_labels,
            'posts': post_counts,
            'comments': comment_counts,
        },
    }


def build_dashboard_stats(limit=5):
    """Headline counters plus the latest sign-ups, listings and posts."""
    activities = []
    for user in User.query.order_by(User.created_at.desc()).limit(limit):
        activities.append({'type': 'user', 'description': f'{user.name} joined', 'createdAt': user.created_at})
    for product in Product.query.order_by(Product.created_at.desc()).limit(limit):
        activities.append({'type': 'product', 'description': f'New product listed: {product.name}', 'createdAt': product.created_at})
    for post in ForumPost.query.order_by(ForumPost.created_at.desc()).limit(limit):
        activities.append({'type': 'post', 'description': f'New forum post: {post.title}', 'createdAt': post.created_at})

    activities.sort(key=lambda item: item['createdAt'], reverse=True)
    recent = [dict(item, createdAt=isoformat(item['createdAt'])) for item in activities[:limit]]

    return {
        'users': User.query.count(),
        'products': Product.query.count(),
        'farmInputs': FarmInput.query.count(),
        'forumPosts': ForumPost.query.count(),
        'recentActivities': recent,
    }
