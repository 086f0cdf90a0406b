from flask_smorest import Blueprint

from app.dto.common import ApiResponse
from app.schemas.search import SearchQuerySchema, SearchResponseSchema
from app.services.search_service import SearchService
from common.decorator.rate_limit_decorators import rate_limited

search_blueprint = Blueprint(
    'search',
    __name__,
    url_prefix='/api/v1/search',
    description='영상 검색 API'
)


@search_blueprint.route('', methods=['GET'])
@rate_limited('SEARCH_RATE_LIMIT')
@search_blueprint.arguments(SearchQuerySchema, location='query')
@search_blueprint.response(200, SearchResponseSchema)
def search_videos(args):
    result = SearchService.search_videos(
        page=args['page'],
        limit=args['limit'],
        query=args.get('query'),
        category=args.get('category'),
        start_date=args.get('start_date'),
        end_date=args.get('end_date'),
        min_duration=args.get('min_duration'),
        max_duration=args.get('max_duration'),
        sort_by=args['sort_by']
    )
    return ApiResponse(200, result, "검색 결과입니다.")
