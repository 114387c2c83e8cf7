# Database Models
from app.models.user import db, User
from app.models.marketplace import (
    Product, FarmInput, FARM_INPUT_CATEGORIES, SPECIFICATION_FIELDS
)
from app.models.forum import ForumPost, ForumComment, FORUM_CATEGORIES
from app.models.guide import FarmingGuide
from app.models.session import UserSession

__all__ = [
    'db', 'User', 'Product', 'FarmInput', 'ForumPost', 'ForumComment',
    'FarmingGuide', 'UserSession',
    'FARM_INPUT_CATEGORIES', 'SPECIFICATION_FIELDS', 'FORUM_CATEGORIES'
]
