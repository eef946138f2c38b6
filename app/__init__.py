"""
Tempo - Music streaming API

Flask application factory and initialization.
"""

import logging
import os

from flask import Flask
from werkzeug.exceptions import HTTPException

from config import config

logger = logging.getLogger(__name__)

# Default-deny: everything else requires a valid access token
PUBLIC_ENDPOINTS = {
    'auth.register',
    'auth.login',
    'api.hello',
}


def _register_error_handlers(app):
    """Render every failure with the same envelope as successful responses."""
    from app.exceptions import ApiError
    from app.models import db
    from app.utils import respond

    @app.errorhandler(ApiError)
    def handle_api_error(e):
        if e.status_code >= 500:
            db.session.rollback()
            logger.error('Request failed: %s', e.message)
        return respond(message=e.message, status_code=e.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return respond(message=e.name, status_code=e.code)

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        db.session.rollback()
        logger.exception('Unhandled error')
        return respond(message='Something went wrong', status_code=500)


def _start_retention_scheduler(app):
    """Start the daily playback-history sweep unless testing or disabled."""
    if app.config.get('TESTING') or not app.config['RETENTION_SWEEP_ENABLED']:
        return None

    # The reloader parent process would start a second sweeper
    if app.debug and os.environ.get('WERKZEUG_RUN_MAIN') != 'true':
        return None

    from app.services.retention import RetentionScheduler
    scheduler = RetentionScheduler(
        app,
        hour=app.config['RETENTION_SWEEP_HOUR'],
        retention_days=app.config['PLAYBACK_RETENTION_DAYS'],
    )
    scheduler.start()
    return scheduler


def create_app(testing=False):
    """Create and configure the Flask application."""

    app = Flask(__name__)

    app.config['TESTING'] = testing

    # Configuration
    app.config['SECRET_KEY'] = os.getenv('SECRET_KEY', config.SECRET_KEY)
    app.config['SQLALCHEMY_DATABASE_URI'] = config.SQLALCHEMY_DATABASE_URI
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['JWT_SECRET'] = config.JWT_SECRET
    app.config['JWT_TTL_MINUTES'] = config.JWT_TTL_MINUTES
    app.config['PLAYBACK_RETENTION_DAYS'] = config.PLAYBACK_RETENTION_DAYS
    app.config['RETENTION_SWEEP_ENABLED'] = config.RETENTION_SWEEP_ENABLED
    app.config['RETENTION_SWEEP_HOUR'] = config.RETENTION_SWEEP_HOUR
    app.json.sort_keys = False

    # Initialize database
    from app.models import init_db
    init_db(app)

    # Initialize authentication
    from app.auth import init_auth
    init_auth(app)

    # Initialize rate limiter
    from app.limiter import limiter
    if app.config.get('TESTING'):
        app.config['RATELIMIT_ENABLED'] = False
    limiter.init_app(app)

    _register_error_handlers(app)

    # Register blueprints
    from app.auth.routes import bp as auth_bp
    from app.routes.api import bp as api_bp
    from app.routes.playlists import bp as playlists_bp
    from app.routes.songs import bp as songs_bp
    from app.routes.users import bp as users_bp

    app.register_blueprint(auth_bp, url_prefix='/api')
    app.register_blueprint(api_bp, url_prefix='/api')
    app.register_blueprint(playlists_bp, url_prefix='/api')
    app.register_blueprint(songs_bp, url_prefix='/api')
    app.register_blueprint(users_bp, url_prefix='/api')

    @app.before_request
    def require_auth():
        from flask import g, request as req
        from flask_login import current_user as cu
        from app.exceptions import Unauthorized

        endpoint = req.endpoint
        if endpoint is None:
            return
        if endpoint in PUBLIC_ENDPOINTS:
            return
        if cu.is_authenticated:
            return
        raise Unauthorized(g.get('auth_error') or 'No token provided.')

    @app.after_request
    def add_security_headers(response):
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        return response

    app.extensions['retention_scheduler'] = _start_retention_scheduler(app)

    return app


__all__ = ['create_app']
