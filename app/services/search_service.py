from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional

import common.extensions as extensions
from app.dto.search import SearchResultDto
from app.models.mongodb.video import VideoRepository
from app.services.video_service import video_with_owner_query
from common.query import paginate
from common.utils.logging_utils import get_logger

logger = get_logger('search_service')

#NOTE: relevance 는 텍스트 검색어가 있을 때만 의미가 있고, 없으면 최신순
SEARCH_SORTS = {
    'views': (('views', -1),),
    'date': (('created_at', -1),),
    'likes': (('likes', -1),),
}


class SearchService:

    @staticmethod
    def search_videos(page: int, limit: int, query: str = None, category: str = None,
                      start_date: Optional[date] = None, end_date: Optional[date] = None,
                      min_duration: Optional[float] = None, max_duration: Optional[float] = None,
                      sort_by: str = 'relevance') -> SearchResultDto:
        search_filter = {'is_published': True}
        text = (query or '').strip()

        if text:
            search_filter['$text'] = {'$search': text}
        if category:
            search_filter['category'] = category

        if start_date or end_date:
            created_range = {}
            if start_date:
                created_range['$gte'] = datetime.combine(start_date, time.min)
            if end_date:
                #NOTE: 종료일 당일 전체 포함
                created_range['$lte'] = datetime.combine(end_date, time.max)
            search_filter['created_at'] = created_range

        if min_duration is not None or max_duration is not None:
            duration_range = {}
            if min_duration is not None:
                duration_range['$gte'] = min_duration
            if max_duration is not None:
                duration_range['$lte'] = max_duration
            search_filter['duration'] = duration_range

        base_query = video_with_owner_query(search_filter)
        extra_stages = ()
        if sort_by in SEARCH_SORTS:
            sort = SEARCH_SORTS[sort_by]
        elif text:
            sort = (('score', {'$meta': 'textScore'}),)
            extra_stages = ({'$addFields': {'score': {'$meta': 'textScore'}}},)
        else:
            sort = (('created_at', -1),)

        search_query = replace(
            base_query,
            projection={**base_query.projection, **({'score': 1} if extra_stages else {})},
            sort=sort,
            extra_stages=extra_stages
        )

        result = paginate(VideoRepository(extensions.mongo_db).collection, search_query, page, limit)

        logger.debug(f"영상 검색: query='{text}', total={result.total_docs}")

        return SearchResultDto(
            videos=result.docs,
            total_results=result.total_docs,
            total_pages=result.total_pages,
            current_page=result.page,
            has_next_page=result.has_next_page,
            has_prev_page=result.has_prev_page
        )
