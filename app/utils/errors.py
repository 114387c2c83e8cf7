# API Error Types
"""
Exceptions raised by route handlers and translated into JSON responses.

Every error body has the shape ``{"error": "<message>"}`` with an optional
``details`` entry (missing field names, the underlying parse failure, or a
traceback when the app runs in debug mode).
"""
import logging
import traceback

from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class APIError(Exception):
    status_code = 500
    message = 'Server error'

    def __init__(self, message=None, details=None):
        super().__init__(message or self.message)
        self.message = message or self.message
        self.details = details

    def to_dict(self):
        body = {'error': self.message}
        if self.details is not None:
            body['details'] = self.details
        return body


class ValidationError(APIError):
    status_code = 400
    message = 'Invalid request'


class AuthenticationError(APIError):
    status_code = 401
    message = 'Please log in to continue'


class SessionExpiredError(APIError):
    status_code = 440
    message = 'Session expired'


class AuthorizationError(APIError):
    status_code = 403
    message = 'Not authorized'


class NotFoundError(APIError):
    status_code = 404
    message = 'Not found'


class ConflictError(APIError):
    status_code = 409
    message = 'Already exists'


class ExternalServiceError(APIError):
    status_code = 502
    message = 'External service unavailable'


def register_error_handlers(app):
    from app.models import db

    @app.errorhandler(APIError)
    def handle_api_error(error):
        # Discard half-applied edits before the session store commits
        db.session.rollback()
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return jsonify({'error': error.description or error.name}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        logger.exception('Unhandled error: %s', error)
        body = {'error': 'Server error'}
        if current_app.debug:
            body['details'] = traceback.format_exc()
        return jsonify(body), 500
