from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException
from .extensions import db, migrate, bcrypt, jwt
import logging
import os

# Setup basic logging
logging.basicConfig(
    level=os.getenv('LOG_LEVEL', 'INFO'),
    format='%(asctime)s %(levelname)s: %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(config_name=None):
    """Create Flask application factory"""
    app = Flask(__name__)

    # Load configuration
    from .config import config, get_config
    config_class = config.get(config_name, config['default']) if config_name else get_config()
    config_class.validate()
    app.config.from_object(config_class)

    # Ensure production mode if FLASK_ENV is production
    if os.getenv('FLASK_ENV') == 'production':
        app.config['DEBUG'] = False
        app.config['TESTING'] = False

    # Initialize extensions first (before error handlers)
    db.init_app(app)
    migrate.init_app(app, db)
    bcrypt.init_app(app)
    jwt.init_app(app)

    from .utils.responses import PortalJSONProvider
    app.json = PortalJSONProvider(app)

    register_jwt_callbacks()
    register_error_handlers(app)

    from .utils.cors import init_cors
    from .utils.middleware import setup_middleware
    init_cors(app)
    setup_middleware(app)

    # Setup logging
    if not app.debug and not app.testing:
        from logging.handlers import RotatingFileHandler

        log_file = app.config['LOG_FILE']
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)

        file_handler = RotatingFileHandler(log_file, maxBytes=10240000, backupCount=10)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(app.config['LOG_LEVEL'])
        logging.getLogger().addHandler(file_handler)
        app.logger.info('Application startup')

    with app.app_context():
        from . import models  # noqa: F401  registers the tables on db.metadata

        from .routes import BLUEPRINTS
        for blueprint in BLUEPRINTS:
            app.register_blueprint(blueprint)

    return app


def _auth_error(message, code):
    return jsonify({'success': False, 'message': message, 'code': code}), 401


def register_jwt_callbacks():
    from .repositories import users

    @jwt.user_lookup_loader
    def load_user(jwt_header, jwt_data):
        # Deactivated accounts stop resolving, which fails the request
        return users.find_active(int(jwt_data['sub']))

    @jwt.user_lookup_error_loader
    def user_not_found(jwt_header, jwt_data):
        return _auth_error('User not found or inactive', 'USER_NOT_FOUND')

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return _auth_error('Token has expired', 'TOKEN_EXPIRED')

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return _auth_error('Invalid token', 'TOKEN_INVALID')

    @jwt.unauthorized_loader
    def missing_token(reason):
        return _auth_error('Access denied. No token provided', 'TOKEN_MISSING')


def register_error_handlers(app):
    from .errors import PortalError, StoreError

    @app.errorhandler(PortalError)
    def handle_portal_error(error):
        body = error.to_dict()
        if isinstance(error, StoreError) and app.config.get('EXPOSE_STORE_ERRORS') and error.detail:
            body['error'] = error.detail
        if getattr(error, 'retryable', False):
            body['retryable'] = True
        if error.status_code >= 500:
            logger.error("%s (%s): %s", error.code, error.status_code, error.message)
        return jsonify(body), error.status_code

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({
            'success': False,
            'message': 'Endpoint not found',
            'code': 'NOT_FOUND'
        }), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({
            'success': False,
            'message': 'Method not allowed',
            'code': 'METHOD_NOT_ALLOWED'
        }), 405

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"Internal Server Error: {error}", exc_info=True)
        return jsonify({
            'success': False,
            'message': 'Internal server error',
            'code': 'INTERNAL_ERROR'
        }), 500

    @app.errorhandler(Exception)
    def handle_exception(e):
        if isinstance(e, HTTPException):
            return jsonify({
                'success': False,
                'message': e.description,
                'code': e.name.upper().replace(' ', '_')
            }), e.code
        logger.error(f"Unhandled exception: {e}", exc_info=True)
        return jsonify({
            'success': False,
            'message': 'Internal server error',
            'code': 'INTERNAL_ERROR'
        }), 500
