"""
API Routes - liveness check.
"""

from flask import Blueprint

from app.utils import respond

bp = Blueprint('api', __name__)


@bp.route('/hello', methods=['GET'])
def hello():
    """Public liveness probe."""
    return respond(message='Hello from Tempo')
