"""
Access token issuance, verification and revocation.
"""

import logging
import uuid
from datetime import datetime, timezone

import jwt
from sqlalchemy.exc import IntegrityError

from app.exceptions import InvalidArgument, Unauthorized
from app.models import db, RevokedToken

logger = logging.getLogger(__name__)

ALGORITHM = 'HS256'


def _now_ts() -> int:
    return int(datetime.now(tz=timezone.utc).timestamp())


def create_access_token(user, secret: str, ttl_minutes: int) -> str:
    now = _now_ts()
    payload = {
        'sub': str(user.id),
        'username': user.username,
        'iat': now,
        'exp': now + ttl_minutes * 60,
        'jti': uuid.uuid4().hex,
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def bearer_token(authorization_header) -> str:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization_header:
        return ''
    scheme, _, token = authorization_header.partition(' ')
    if scheme.lower() != 'bearer':
        return ''
    return token.strip()


def verify_access_token(token: str, secret: str) -> dict:
    """
    Decode a token and reject it if it has been revoked.

    Raises:
        Unauthorized: token missing, malformed, expired or revoked
    """
    if not token:
        raise Unauthorized('No token provided.')

    if RevokedToken.is_revoked(token):
        logger.warning('Revoked token access attempt')
        raise Unauthorized('Token has been revoked.')

    try:
        return jwt.decode(token, secret, algorithms=[ALGORITHM])
    except jwt.InvalidTokenError:
        raise Unauthorized('Invalid or expired token.')


def revoke_token(token: str, payload: dict, user_id=None) -> int:
    """
    Blacklist a token for the rest of its lifetime.

    Returns:
        Seconds until the token would have expired

    Raises:
        InvalidArgument: the token has already expired
    """
    remaining = int(payload.get('exp', 0)) - _now_ts()
    if remaining <= 0:
        raise InvalidArgument('Token is already expired.')

    expires_at = datetime.utcfromtimestamp(int(payload['exp']))
    db.session.add(RevokedToken(
        token_hash=RevokedToken.hash_token(token),
        user_id=user_id,
        expires_at=expires_at,
    ))
    try:
        db.session.commit()
    except IntegrityError:
        # Already revoked by a concurrent logout
        db.session.rollback()
    logger.info('Token revoked for user %s, %ds before expiry', user_id, remaining)
    return remaining
