"""
Utils package
유틸리티 함수들을 모아둔 패키지

- jwt_utils: JWT 토큰 생성 및 검증
- object_id: ObjectId 변환/검증
- logging_utils: 로거 설정
"""

from common.utils.jwt_utils import (
    decode_token,
    create_access_token,
    create_refresh_token
)
from common.utils.object_id import to_object_id

__all__ = [
    'decode_token',
    'create_access_token',
    'create_refresh_token',
    'to_object_id'
]
