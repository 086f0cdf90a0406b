import jwt
import datetime
from flask import current_app
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from common.exception.exceptions import BusinessError
from common.enum.error_code import APIError

def get_jwt_config():
    try:
        secret_key = current_app.config.get('JWT_SECRET_KEY')
        algorithm = current_app.config.get('JWT_ALGORITHM', 'HS256')
    except RuntimeError:
        raise BusinessError(APIError.INTERNAL_SERVER_ERROR, "Application Context Error")

    if not secret_key:
        raise BusinessError(APIError.INTERNAL_SERVER_ERROR, "JWT KEY가 설정되지 않았습니다.")

    return secret_key, algorithm

def encode_token(user_id, expires_delta, token_type):
    secret_key, algorithm = get_jwt_config()

    current_time = datetime.datetime.now(datetime.timezone.utc)

    payload = {
        "sub": str(user_id),
        "iat": current_time,
        "exp": current_time + expires_delta,
        "type": token_type               # access / refresh
    }

    return jwt.encode(payload, secret_key, algorithm=algorithm)

def decode_token(encoded_token):
    secret_key, algorithm = get_jwt_config()

    try:
        return jwt.decode(encoded_token, secret_key, algorithms=[algorithm])

    except ExpiredSignatureError:
        raise BusinessError(APIError.AUTH_TOKEN_EXPIRED)

    except InvalidTokenError:
        raise BusinessError(APIError.AUTH_INVALID_TOKEN)

def remaining_seconds(payload):
    """블랙리스트 TTL 계산용: 만료까지 남은 초 (최소 1초)"""
    now = datetime.datetime.now(datetime.timezone.utc).timestamp()
    return max(1, int(payload.get('exp', now) - now))

def create_access_token(user_id):
    expires = current_app.config.get('JWT_ACCESS_TOKEN_EXPIRES', datetime.timedelta(hours=1))
    return encode_token(user_id, expires, 'access')

def create_refresh_token(user_id):
    expires = current_app.config.get('JWT_REFRESH_TOKEN_EXPIRES', datetime.timedelta(days=10))
    return encode_token(user_id, expires, 'refresh')
