# Main Routes
import logging

from flask import Blueprint, request, jsonify, send_from_directory, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.models import db
from app.utils.weather import get_weather, DEFAULT_CITY

logger = logging.getLogger(__name__)

main_bp = Blueprint('main', __name__)


@main_bp.route('/api/health')
def health():
    """Backend and database status"""
    try:
        db.session.execute(text('SELECT 1'))
        database = 'connected'
    except SQLAlchemyError as e:
        logger.error('Database health check failed: %s', e)
        db.session.rollback()
        database = 'disconnected'

    status_code = 200 if database == 'connected' else 503
    return jsonify({
        'status': 'ok' if status_code == 200 else 'degraded',
        'backend': 'running',
        'database': database,
    }), status_code


@main_bp.route('/api/weather')
def weather():
    city = request.args.get('city', '', type=str).strip() or DEFAULT_CITY
    return jsonify(get_weather(city)), 200


@main_bp.route('/uploads/<path:filename>')
def uploaded_file(filename):
    return send_from_directory(current_app.config['UPLOAD_FOLDER'], filename)
