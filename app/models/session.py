# Server-side Session Records
from app.models.user import db
from datetime import datetime


class UserSession(db.Model):
    __tablename__ = 'sessions'

    sid = db.Column(db.String(64), primary_key=True)
    data = db.Column(db.JSON, nullable=False, default=dict)
    expires_at = db.Column(db.DateTime, nullable=False, index=True)

    def is_expired(self, now=None):
        return self.expires_at <= (now or datetime.utcnow())

    def __repr__(self):
        return f'<UserSession {self.sid[:8]}... expires {self.expires_at}>'
