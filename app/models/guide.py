# Farming Guide Model
from app.models.user import db, generate_id, isoformat
from datetime import datetime


class FarmingGuide(db.Model):
    __tablename__ = 'farming_guides'

    id = db.Column(db.String(32), primary_key=True, default=generate_id)
    crop = db.Column(db.String(100), nullable=False, index=True)
    title = db.Column(db.String(200), nullable=False)
    content = db.Column(db.Text, nullable=False)
    user_id = db.Column(db.String(32), db.ForeignKey('users.id'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    owner = db.relationship('User', back_populates='guides')

    @property
    def owner_id(self):
        return self.user_id

    def to_dict(self):
        return {
            '_id': self.id,
            'crop': self.crop,
            'title': self.title,
            'content': self.content,
            'userId': self.owner.owner_summary() if self.owner else None,
            'createdAt': isoformat(self.created_at),
        }

    def __repr__(self):
        return f'<FarmingGuide {self.id} - {self.crop}>'
