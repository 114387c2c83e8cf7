# Server-side Session Store
"""
Flask session interface that keeps session data in the database.

The cookie only carries an opaque random id. Expiry is decided solely by the
stored record: a record past its ``expires_at`` is deleted when the cookie is
presented, and the request sees an empty session flagged as ``expired``.
"""
import logging
import secrets
from datetime import datetime, timedelta

from flask.sessions import SessionInterface, SessionMixin
from werkzeug.datastructures import CallbackDict

from app.models import db, UserSession

logger = logging.getLogger(__name__)


def generate_sid():
    return secrets.token_urlsafe(32)


class ServerSideSession(CallbackDict, SessionMixin):

    def __init__(self, initial=None, sid=None, new=False):
        def on_update(self):
            self.modified = True
        CallbackDict.__init__(self, initial, on_update)
        self.sid = sid or generate_sid()
        self.new = new
        self.modified = False
        self.expired = False
        self.retired_sids = []

    def rotate(self):
        """Move the data to a fresh id, e.g. after login."""
        self.retired_sids.append(self.sid)
        self.sid = generate_sid()
        self.modified = True


class DatabaseSessionInterface(SessionInterface):

    def open_session(self, app, request):
        sid = request.cookies.get(self.get_cookie_name(app))
        if not sid:
            return ServerSideSession(new=True)

        record = db.session.get(UserSession, sid)
        if record is None:
            return ServerSideSession(new=True)

        if record.is_expired():
            db.session.delete(record)
            db.session.commit()
            logger.info('Session %s... expired and was destroyed', sid[:8])
            session = ServerSideSession(new=True)
            session.expired = True
            return session

        return ServerSideSession(record.data, sid=sid)

    def _destroy(self, sids):
        for sid in sids:
            record = db.session.get(UserSession, sid)
            if record is not None:
                db.session.delete(record)

    def purge_expired(self, now=None):
        """Drop every record past its expiry, not just the one whose cookie came back."""
        now = now or datetime.utcnow()
        db.session.flush()
        count = UserSession.query.filter(UserSession.expires_at <= now)\
            .delete(synchronize_session=False)
        if count:
            logger.info('Purged %d expired session(s)', count)
        return count

    def save_session(self, app, session, response):
        name = self.get_cookie_name(app)
        domain = self.get_cookie_domain(app)
        path = self.get_cookie_path(app)

        self._destroy(session.retired_sids)

        if not session:
            # Logged out, expired, or never used: drop the record and the cookie
            if not session.new or session.modified or session.expired:
                self._destroy([session.sid])
                db.session.commit()
                response.delete_cookie(name, domain=domain, path=path)
            return

        lifetime = timedelta(seconds=app.config['SESSION_LIFETIME_SECONDS'])
        expires = datetime.utcnow() + lifetime

        record = db.session.get(UserSession, session.sid)
        if record is None:
            # New sessions (logins) are where abandoned ones get swept
            self.purge_expired()
            record = UserSession(sid=session.sid)
            db.session.add(record)
        record.data = dict(session)
        record.expires_at = expires
        db.session.commit()

        response.set_cookie(
            name,
            session.sid,
            max_age=int(lifetime.total_seconds()),
            httponly=self.get_cookie_httponly(app),
            secure=self.get_cookie_secure(app),
            samesite=self.get_cookie_samesite(app),
            domain=domain,
            path=path,
        )
