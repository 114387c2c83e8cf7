# Application Configuration
import os
from pathlib import Path

basedir = Path(__file__).parent.parent


def _env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'
    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'

    # Handle both PostgreSQL (Render) and SQLite (local)
    database_url = os.environ.get('DATABASE_URL')
    if database_url:
        # Render provides postgres:// but SQLAlchemy needs postgresql://
        if database_url.startswith('postgres://'):
            database_url = database_url.replace('postgres://', 'postgresql://', 1)
        SQLALCHEMY_DATABASE_URI = database_url
    else:
        SQLALCHEMY_DATABASE_URI = f'sqlite:///{basedir / "instance" / "kfarm.db"}'

    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Upload settings
    UPLOAD_FOLDER = Path(os.environ.get('UPLOAD_FOLDER') or basedir / 'uploads')
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16MB max file size
    ALLOWED_IMAGE_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp'}

    # Server-side sessions: 1 hour, pushed forward on every request
    SESSION_LIFETIME_SECONDS = int(os.environ.get('SESSION_LIFETIME_SECONDS') or 60 * 60)
    SESSION_COOKIE_NAME = 'kfarm.sid'
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    SESSION_COOKIE_SECURE = _env_bool('SESSION_COOKIE_SECURE')

    # Password reset tokens are signed with JWT_SECRET + the user's password hash
    JWT_SECRET = os.environ.get('JWT_SECRET') or 'dev-jwt-secret-change-in-production'
    RESET_TOKEN_MINUTES = int(os.environ.get('RESET_TOKEN_MINUTES') or 5)

    # Shared secret required to register or upgrade an administrator
    ADMIN_KEY = os.environ.get('ADMIN_KEY') or 'dev-admin-key'

    # Optional bootstrap administrator created at startup
    DEFAULT_ADMIN_NAME = os.environ.get('DEFAULT_ADMIN_NAME')
    DEFAULT_ADMIN_EMAIL = os.environ.get('DEFAULT_ADMIN_EMAIL')
    DEFAULT_ADMIN_PASSWORD = os.environ.get('DEFAULT_ADMIN_PASSWORD')

    # Single-page client
    CLIENT_URL = os.environ.get('CLIENT_URL') or 'http://localhost:5173'
    CORS_ORIGINS = [
        origin.strip()
        for origin in (os.environ.get('CORS_ORIGINS') or 'http://localhost:5173,http://localhost:3000').split(',')
        if origin.strip()
    ]

    # Outbound mail (Flask-Mail)
    MAIL_SERVER = os.environ.get('MAIL_SERVER') or 'smtp.gmail.com'
    MAIL_PORT = int(os.environ.get('MAIL_PORT') or 587)
    MAIL_USE_TLS = _env_bool('MAIL_USE_TLS', True)
    MAIL_USE_SSL = _env_bool('MAIL_USE_SSL')
    MAIL_USERNAME = os.environ.get('MAIL_USERNAME')
    MAIL_PASSWORD = os.environ.get('MAIL_PASSWORD')
    MAIL_DEFAULT_SENDER = os.environ.get('MAIL_DEFAULT_SENDER') or MAIL_USERNAME or 'no-reply@kfarm.local'
    CONTACT_RECIPIENT = os.environ.get('CONTACT_RECIPIENT') or MAIL_DEFAULT_SENDER

    # OpenWeatherMap API
    WEATHER_API_KEY = os.environ.get('WEATHER_API_KEY') or None
    WEATHER_API_URL = 'https://api.openweathermap.org/data/2.5/weather'
    WEATHER_FORECAST_URL = 'https://api.openweathermap.org/data/2.5/forecast'


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SECRET_KEY = 'test-secret-key'
    JWT_SECRET = 'test-jwt-secret'
    ADMIN_KEY = 'test-admin-key'
    DEFAULT_ADMIN_EMAIL = None
    DEFAULT_ADMIN_PASSWORD = None
    MAIL_SUPPRESS_SEND = True
    MAIL_DEFAULT_SENDER = 'no-reply@kfarm.test'
    CONTACT_RECIPIENT = 'inbox@kfarm.test'
    WEATHER_API_KEY = None
    LOG_LEVEL = 'WARNING'
