"""
Query package
여러 컬렉션에 걸친 조회/토글 공통 로직

- toggle_relation: 좋아요/구독 같은 (actor, target) 관계 토글 + 카운터 동기화
- join_query: $lookup 기반 조인 파이프라인 빌더
- pagination: page/limit → skip/limit 변환 및 메타데이터
- visibility: 비공개 콘텐츠 접근 제어
"""

from common.query.toggle_relation import ToggleRelation
from common.query.join_query import JoinSpec, JoinQuery, resolve_sort
from common.query.pagination import Page, PageLabels, normalize_page, paginate
from common.query.visibility import ensure_visible, visible_filter

__all__ = [
    'ToggleRelation',
    'JoinSpec',
    'JoinQuery',
    'resolve_sort',
    'Page',
    'PageLabels',
    'normalize_page',
    'paginate',
    'ensure_visible',
    'visible_filter'
]
