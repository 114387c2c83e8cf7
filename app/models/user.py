# User Model
from flask_sqlalchemy import SQLAlchemy
from flask_login import UserMixin
import bcrypt
import uuid
from datetime import datetime

db = SQLAlchemy()


def generate_id():
    """Opaque identifier shared by every collection."""
    return uuid.uuid4().hex


def isoformat(value):
    return value.isoformat() + 'Z' if value else None


class User(UserMixin, db.Model):
    __tablename__ = 'users'

    id = db.Column(db.String(32), primary_key=True, default=generate_id)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(20))
    profile_picture = db.Column(db.String(255))
    language = db.Column(db.String(10), default='en', nullable=False)
    is_admin = db.Column(db.Boolean, default=False, nullable=False)
    notify_email = db.Column(db.Boolean, default=True, nullable=False)
    notify_push = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
    last_active = db.Column(db.DateTime, index=True)

    # Everything a user owns goes with them
    products = db.relationship('Product', back_populates='farmer',
                               cascade='all, delete-orphan')
    farm_inputs = db.relationship('FarmInput', back_populates='seller',
                                  cascade='all, delete-orphan')
    forum_posts = db.relationship('ForumPost', back_populates='author',
                                  cascade='all, delete-orphan')
    forum_comments = db.relationship('ForumComment', back_populates='author',
                                     cascade='all, delete')
    guides = db.relationship('FarmingGuide', back_populates='owner',
                             cascade='all, delete-orphan')

    def set_password(self, password):
        """Hash and set password using bcrypt"""
        salt = bcrypt.gensalt()
        self.password_hash = bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')

    def check_password(self, password):
        """Check if provided password matches hash using bcrypt"""
        if not password or not self.password_hash:
            return False
        return bcrypt.checkpw(password.encode('utf-8'), self.password_hash.encode('utf-8'))

    @property
    def notifications(self):
        return {'email': self.notify_email, 'push': self.notify_push}

    def owner_summary(self):
        """Display-safe subset used wherever a user is embedded in another record."""
        return {
            '_id': self.id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
        }

    def to_dict(self):
        return {
            '_id': self.id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'profilePicture': self.profile_picture,
            'language': self.language,
            'isAdmin': self.is_admin,
            'notifications': self.notifications,
            'createdAt': isoformat(self.created_at),
            'lastActive': isoformat(self.last_active),
        }

    def __repr__(self):
        return f'<User {self.email}{" (admin)" if self.is_admin else ""}>'
