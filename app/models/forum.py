# Community Forum Models
from app.models.user import db, generate_id, isoformat
from datetime import datetime

FORUM_CATEGORIES = ('crop farming', 'pest control', 'market trends', 'uncategorized')

post_likes = db.Table(
    'forum_post_likes',
    db.Column('post_id', db.String(32), db.ForeignKey('forum_posts.id'), primary_key=True),
    db.Column('user_id', db.String(32), db.ForeignKey('users.id'), primary_key=True),
)


class ForumPost(db.Model):
    __tablename__ = 'forum_posts'

    id = db.Column(db.String(32), primary_key=True, default=generate_id)
    category = db.Column(db.String(30), default='uncategorized', nullable=False, index=True)
    author_id = db.Column(db.String(32), db.ForeignKey('users.id'), nullable=False, index=True)
    title = db.Column(db.String(200), nullable=False)
    content = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    author = db.relationship('User', back_populates='forum_posts')
    likes = db.relationship('User', secondary=post_likes, backref='liked_posts')
    comments = db.relationship('ForumComment', back_populates='post',
                               cascade='all, delete-orphan',
                               order_by='ForumComment.created_at')

    @property
    def owner_id(self):
        return self.author_id

    def toggle_like(self, user):
        """Flip the user's membership in the likes set. Returns True if the post is now liked."""
        if user in self.likes:
            self.likes.remove(user)
            return False
        self.likes.append(user)
        return True

    def to_dict(self):
        return {
            '_id': self.id,
            'category': self.category,
            'author': self.author.owner_summary() if self.author else None,
            'title': self.title,
            'content': self.content,
            'likes': [user.id for user in self.likes],
            'comments': [comment.to_dict() for comment in self.comments],
            'createdAt': isoformat(self.created_at),
        }

    def __repr__(self):
        return f'<ForumPost {self.id} - {self.title}>'


class ForumComment(db.Model):
    __tablename__ = 'forum_comments'

    id = db.Column(db.String(32), primary_key=True, default=generate_id)
    post_id = db.Column(db.String(32), db.ForeignKey('forum_posts.id'), nullable=False, index=True)
    author_id = db.Column(db.String(32), db.ForeignKey('users.id'), nullable=False, index=True)
    content = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    post = db.relationship('ForumPost', back_populates='comments')
    author = db.relationship('User', back_populates='forum_comments')

    def to_dict(self):
        return {
            '_id': self.id,
            'author': self.author.owner_summary() if self.author else None,
            'content': self.content,
            'createdAt': isoformat(self.created_at),
        }

    def __repr__(self):
        return f'<ForumComment {self.id} on {self.post_id}>'
