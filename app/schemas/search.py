from marshmallow import fields, validate, validates_schema, ValidationError

from app.schemas.common_schema import CamelCaseSchema, ApiResponseSchema, PaginationQuerySchema
from app.schemas.video import VideoSchema

SEARCH_SORT_OPTIONS = ('relevance', 'views', 'date', 'likes')


class SearchQuerySchema(PaginationQuerySchema):
    query = fields.String(metadata={'description': '텍스트 인덱스 검색어'})
    category = fields.String()
    start_date = fields.Date(metadata={'description': 'YYYY-MM-DD (포함)'})
    end_date = fields.Date(metadata={'description': 'YYYY-MM-DD (당일 전체 포함)'})
    min_duration = fields.Float(validate=validate.Range(min=0))
    max_duration = fields.Float(validate=validate.Range(min=0))
    sort_by = fields.String(load_default='relevance', validate=validate.OneOf(SEARCH_SORT_OPTIONS))

    @validates_schema
    def validate_ranges(self, data, **kwargs):
        start, end = data.get('start_date'), data.get('end_date')
        if start and end and start > end:
            raise ValidationError('startDate 는 endDate 보다 늦을 수 없습니다.', 'startDate')

        low, high = data.get('min_duration'), data.get('max_duration')
        if low is not None and high is not None and low > high:
            raise ValidationError('minDuration 은 maxDuration 보다 클 수 없습니다.', 'minDuration')


class SearchResultSchema(CamelCaseSchema):
    videos = fields.List(fields.Nested(VideoSchema))
    total_results = fields.Integer()
    total_pages = fields.Integer()
    current_page = fields.Integer()
    has_next_page = fields.Boolean()
    has_prev_page = fields.Boolean()


class SearchResponseSchema(ApiResponseSchema):
    data = fields.Nested(SearchResultSchema)
