"""
Bearer-token authentication.

Tokens are itsdangerous signatures over ``{'user_id': ...}`` keyed by the
app's SECRET_KEY. ``login_required`` puts the caller id on ``g.user_id``.
"""

from functools import wraps

from flask import current_app, g, request
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from catalog.errors import Unauthorized


def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(
        current_app.config['SECRET_KEY'],
        salt=current_app.config.get('AUTH_TOKEN_SALT', 'catalog-auth')
    )


def issue_token(user_id: str) -> str:
    return _serializer().dumps({'user_id': str(user_id)})


def verify_token(token: str) -> str:
    max_age = current_app.config.get('AUTH_TOKEN_MAX_AGE', 86400)
    try:
        data = _serializer().loads(token, max_age=max_age)
    except SignatureExpired:
        raise Unauthorized('Token expired')
    except BadSignature:
        raise Unauthorized()

    user_id = data.get('user_id') if isinstance(data, dict) else None
    if not user_id:
        raise Unauthorized()
    return user_id


def _bearer_token() -> str:
    header = request.headers.get('Authorization', '')
    scheme, _, token = header.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        raise Unauthorized()
    return token.strip()


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        g.user_id = verify_token(_bearer_token())
        return view(*args, **kwargs)
    return wrapper
