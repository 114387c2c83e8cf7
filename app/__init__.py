# Flask Application Factory
import logging
import sys
from pathlib import Path

from flask import Flask, session
from flask_cors import CORS
from flask_login import LoginManager

from app.config import Config
from app.models import db, User
from app.sessions import DatabaseSessionInterface
from app.utils.errors import AuthenticationError, SessionExpiredError, register_error_handlers
from app.utils.mailer import mail

logger = logging.getLogger(__name__)

login_manager = LoginManager()


@login_manager.user_loader
def load_user(user_id):
    return db.session.get(User, user_id)


@login_manager.unauthorized_handler
def unauthorized():
    raise AuthenticationError('Please log in to continue')


def configure_logging(app):
    package_logger = logging.getLogger('app')
    package_logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))
    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(name)s: %(message)s'))
        package_logger.addHandler(handler)


def ensure_default_admin(app):
    """Create the bootstrap administrator named in the environment, if any."""
    email = app.config.get('DEFAULT_ADMIN_EMAIL')
    password = app.config.get('DEFAULT_ADMIN_PASSWORD')
    if not email or not password:
        return None

    if User.query.filter_by(email=email).first():
        logger.info('Default admin %s already exists, skipping seeding', email)
        return None

    admin = User(name=app.config.get('DEFAULT_ADMIN_NAME') or 'Administrator', email=email, is_admin=True)
    admin.set_password(password)
    db.session.add(admin)
    db.session.commit()
    logger.info('Created default admin %s', email)
    return admin


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)
    mail.init_app(app)
    CORS(app, origins=app.config['CORS_ORIGINS'], supports_credentials=True)
    app.session_interface = DatabaseSessionInterface()

    # Create upload directory
    Path(app.config['UPLOAD_FOLDER']).mkdir(parents=True, exist_ok=True)
    logger.info('Uploads stored in %s', app.config['UPLOAD_FOLDER'])

    # Create database tables and seed the bootstrap admin
    with app.app_context():
        if app.config['SQLALCHEMY_DATABASE_URI'].startswith('sqlite:///'):
            Path(app.config['SQLALCHEMY_DATABASE_URI'][len('sqlite:///'):]).parent.mkdir(parents=True, exist_ok=True)
        db.create_all()
        logger.info('Database tables created/verified')
        ensure_default_admin(app)

    @app.before_request
    def reject_expired_session():
        if getattr(session, 'expired', False):
            raise SessionExpiredError('Session expired')

    register_error_handlers(app)

    # Register blueprints
    from app.routes.main import main_bp
    from app.routes.auth import auth_bp
    from app.routes.users import users_bp
    from app.routes.marketplace import marketplace_bp
    from app.routes.farm_inputs import farm_inputs_bp
    from app.routes.forum import forum_bp
    from app.routes.guides import guides_bp
    from app.routes.admin import admin_bp
    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp, url_prefix='/api')
    app.register_blueprint(users_bp, url_prefix='/api/users')
    app.register_blueprint(marketplace_bp, url_prefix='/api/products')
    app.register_blueprint(farm_inputs_bp, url_prefix='/api/farminputs')
    app.register_blueprint(forum_bp, url_prefix='/api/forum')
    app.register_blueprint(guides_bp, url_prefix='/api')
    app.register_blueprint(admin_bp, url_prefix='/api/admin')

    return app
