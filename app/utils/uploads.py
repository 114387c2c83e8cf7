# Image Upload Handling
import logging
import os
import uuid
from pathlib import Path

from flask import current_app, request

from app.utils.errors import ValidationError

logger = logging.getLogger(__name__)

UPLOAD_URL_PREFIX = 'uploads'


def allowed_image_file(filename):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in current_app.config['ALLOWED_IMAGE_EXTENSIONS']


def save_upload(field='image'):
    """
    Store the single file sent under ``field`` and return its relative path.

    The stored name is a random token plus the original extension, so two
    uploads of the same name in the same instant never overwrite each other.
    Returns None when the request carries no file.
    """
    file = request.files.get(field)
    if not file or file.filename == '':
        return None

    if not allowed_image_file(file.filename):
        raise ValidationError('Only image files are allowed.', details={'field': field, 'filename': file.filename})

    # Only the extension is kept; the client name may be non-ASCII
    extension = '.' + file.filename.rsplit('.', 1)[1].lower()
    filename = f'{uuid.uuid4().hex}{extension}'
    upload_dir = Path(current_app.config['UPLOAD_FOLDER'])
    upload_dir.mkdir(parents=True, exist_ok=True)
    file.save(upload_dir / filename)
    logger.info('Stored upload %s', filename)
    return f'{UPLOAD_URL_PREFIX}/{filename}'


def delete_upload(relative_path):
    """Best-effort removal of a stored upload. Returns True if a file was deleted."""
    if not relative_path:
        return False
    filename = os.path.basename(relative_path)
    path = Path(current_app.config['UPLOAD_FOLDER']) / filename
    try:
        path.unlink()
        return True
    except OSError as e:
        logger.warning('Could not delete upload %s: %s', path, e)
        return False
