from functools import wraps
from flask import request, g

from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.utils import decode_token
import common.extensions as extensions


BLACKLIST_KEY = "videnest:blacklist:{token}"


def _bearer_token():
    auth_header = request.headers.get('Authorization')
    if not auth_header:
        return None
    if not auth_header.startswith("Bearer "):
        raise BusinessError(APIError.AUTH_INVALID_TOKEN)
    return auth_header.split(" ")[1]


def _resolve_user_id(token):
    redis_client = extensions.redis_client
    if redis_client and redis_client.exists(BLACKLIST_KEY.format(token=token)):
        raise BusinessError(APIError.AUTH_INVALID_TOKEN)

    payload = decode_token(token)

    if payload.get('type') != 'access':
        raise BusinessError(APIError.AUTH_INVALID_TOKEN)

    return payload['sub']


def login_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = _bearer_token()
        if not token:
            raise BusinessError(APIError.AUTH_REQUIRED)

        g.user_id = _resolve_user_id(token)
        g.access_token = token
        g.is_guest = False

        return f(*args, **kwargs)
    return decorated_function

def login_optional(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = _bearer_token()

        if not token:
            g.user_id = None
            g.is_guest = True
            return f(*args, **kwargs)

        g.user_id = _resolve_user_id(token)
        g.access_token = token
        g.is_guest = False

        return f(*args, **kwargs)
    return decorated_function
