from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError


def ensure_visible(is_public, owner_id, requester_id,
                   unauthenticated=APIError.AUTH_REQUIRED,
                   forbidden=APIError.FORBIDDEN):
    """
    비공개 콘텐츠는 소유자만 볼 수 있다.
    - 공개: 누구나 통과
    - 비공개 + 비로그인: unauthenticated (401)
    - 비공개 + 소유자 아님: forbidden (403)
    """
    if is_public:
        return
    if requester_id is None:
        raise BusinessError(unauthenticated)
    if str(owner_id) != str(requester_id):
        raise BusinessError(forbidden)


def visible_filter(flag_field, owner_field, requester_id):
    """목록 조회 파이프라인의 $match 안에 넣는 공개 범위 조건"""
    if requester_id is None:
        return {flag_field: True}
    return {'$or': [{flag_field: True}, {owner_field: requester_id}]}
