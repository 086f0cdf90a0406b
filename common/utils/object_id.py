from bson import ObjectId
from bson.errors import InvalidId

from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError


def to_object_id(value, label='id'):
    """문자열 ID를 ObjectId로 변환. 형식이 잘못되면 400"""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise BusinessError(APIError.INVALID_OBJECT_ID, f"유효하지 않은 {label} 입니다.")


def to_object_id_or_none(value):
    """인증 사용자 ID처럼 없을 수도 있는 값 변환용"""
    if value is None:
        return None
    return to_object_id(value, 'user id')
