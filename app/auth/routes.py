"""
Auth Routes - Register, login, logout.
"""

import re

from flask import Blueprint, current_app, g
from flask_login import current_user, login_required
from sqlalchemy.exc import IntegrityError

from app.auth.tokens import create_access_token, revoke_token
from app.exceptions import Conflict, InvalidArgument, Unauthorized
from app.limiter import limiter
from app.models import db, User
from app.utils import json_body, respond

bp = Blueprint('auth', __name__)

USERNAME_RE = re.compile(r'^[A-Za-z0-9_.]{3,50}$')


def _text_field(data, key):
    """Read an optional string field from a JSON body; other JSON types are rejected."""
    value = data.get(key, '')
    if not isinstance(value, str):
        raise InvalidArgument(f'{key.capitalize()} must be a string')
    return value


@bp.route('/auth/register', methods=['POST'])
@limiter.limit("5 per minute")
def register():
    """Create a new user account."""
    data = json_body()

    name = _text_field(data, 'name').strip()
    username = _text_field(data, 'username').strip().lower()
    password = _text_field(data, 'password')

    if not name:
        raise InvalidArgument('Name is required')
    if len(name) > 100:
        raise InvalidArgument('Name is too long')
    if not USERNAME_RE.match(username):
        raise InvalidArgument('Username must be 3-50 letters, digits, dots or underscores')
    if len(password) < 8:
        raise InvalidArgument('Password must be at least 8 characters')

    user = User(name=name, username=username)
    user.set_password(password)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise Conflict('Username already exists')

    current_app.logger.info('Registered user %s', username)
    return respond(user.to_dict(), message='User registered successfully', status_code=201)


@bp.route('/auth/login', methods=['POST'])
@limiter.limit("10 per minute")
def login():
    """Exchange username and password for an access token."""
    data = json_body()

    username = _text_field(data, 'username').strip().lower()
    password = _text_field(data, 'password')

    if not username or not password:
        raise InvalidArgument('Username and password are required')

    user = User.query.filter_by(username=username).first()
    if not user or not user.check_password(password):
        raise Unauthorized('Invalid credentials')

    ttl_minutes = current_app.config['JWT_TTL_MINUTES']
    token = create_access_token(user, current_app.config['JWT_SECRET'], ttl_minutes)
    return respond({
        'accessToken': token,
        'tokenType': 'Bearer',
        'expiresIn': ttl_minutes * 60,
    }, message='Login successful')


@bp.route('/auth/logout', methods=['POST'])
@login_required
def logout():
    """Revoke the token used for this request."""
    revoke_token(g.access_token, g.token_payload, user_id=current_user.id)
    return respond(message='Logout successful')
