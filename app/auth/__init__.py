"""
Authentication package for Tempo.
Flask-Login setup with a bearer-token request loader.
"""

from flask import current_app, g
from flask_login import LoginManager

login_manager = LoginManager()


def init_auth(app):
    """Initialize authentication with Flask app."""
    login_manager.init_app(app)

    @login_manager.request_loader
    def load_user_from_request(req):
        from app.auth.tokens import bearer_token, verify_access_token
        from app.exceptions import Unauthorized
        from app.models import db, User

        token = bearer_token(req.headers.get('Authorization'))
        try:
            payload = verify_access_token(token, current_app.config['JWT_SECRET'])
        except Unauthorized as e:
            g.auth_error = e.message
            return None

        user = db.session.get(User, int(payload['sub']))
        if not user:
            g.auth_error = 'Invalid or expired token.'
            return None

        g.access_token = token
        g.token_payload = payload
        return user

    @login_manager.unauthorized_handler
    def unauthorized():
        from app.exceptions import Unauthorized
        raise Unauthorized(g.get('auth_error') or 'No token provided.')
