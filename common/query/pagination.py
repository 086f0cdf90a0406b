import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pymongo.collection import Collection

from common.query.join_query import JoinQuery

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


@dataclass(frozen=True)
class PageLabels:
    """응답에서 docs / totalDocs 키를 엔드포인트별 이름으로 바꿀 때 사용"""
    docs: str = 'docs'
    total_docs: str = 'totalDocs'


@dataclass
class Page:
    docs: List[Dict[str, Any]]
    total_docs: int
    page: int
    limit: int
    labels: PageLabels = field(default_factory=PageLabels)

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_docs / self.limit) if self.limit else 0

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev_page(self) -> bool:
        return self.page > 1

    @property
    def next_page(self) -> Optional[int]:
        return self.page + 1 if self.has_next_page else None

    @property
    def prev_page(self) -> Optional[int]:
        return self.page - 1 if self.has_prev_page else None


def _positive_int(value, default):
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def normalize_page(page, limit, max_limit: int = MAX_LIMIT):
    page = _positive_int(page, DEFAULT_PAGE)
    limit = min(_positive_int(limit, DEFAULT_LIMIT), max_limit)
    return page, limit


def paginate(collection: Collection, query: JoinQuery, page, limit,
             labels: Optional[PageLabels] = None) -> Page:
    """
    count 파이프라인과 데이터 파이프라인을 각각 실행한다.
    totalPages를 넘는 page는 에러 없이 빈 docs와 정확한 메타데이터를 반환한다.
    """
    page, limit = normalize_page(page, limit)
    labels = labels or PageLabels()

    counted = list(collection.aggregate(query.count_pipeline()))
    total_docs = counted[0]['total'] if counted else 0

    docs = []
    skip = (page - 1) * limit
    if skip < total_docs:
        docs = list(collection.aggregate(query.pipeline(skip=skip, limit=limit)))

    return Page(docs=docs, total_docs=total_docs, page=page, limit=limit, labels=labels)
