from flask_smorest.fields import Upload
from marshmallow import fields, validate

from app.schemas.common_schema import (
    CamelCaseSchema, ApiResponseSchema, PageSchema, PaginationQuerySchema,
    ObjectIdField, OwnerSchema, RefField, TrimmedString
)
from app.services.video_service import VIDEO_SORT_KEYS

SORT_DIRECTIONS = ('asc', 'desc')


class VideoListQuerySchema(PaginationQuerySchema):
    query = fields.String(metadata={'description': '제목/설명 부분 일치 검색어'})
    category = fields.String()
    tags = fields.String()
    user_id = fields.String(metadata={'description': '업로더 ID'})
    sort_by = fields.String(load_default='createdAt', validate=validate.OneOf(list(VIDEO_SORT_KEYS)))
    sort_type = fields.String(load_default='desc', validate=validate.OneOf(SORT_DIRECTIONS))


class VideoUploadFormSchema(CamelCaseSchema):
    title = TrimmedString(required=True, validate=validate.Length(min=1, max=200))
    category = TrimmedString(required=True, validate=validate.Length(min=1, max=50))
    description = fields.String(load_default='', validate=validate.Length(max=5000))
    tags = fields.String(load_default=None, metadata={'description': '쉼표로 구분한 태그'})
    is_published = fields.Boolean(load_default=True)


class VideoUploadFileSchema(CamelCaseSchema):
    video_file = Upload(required=True)
    thumbnail = Upload()


class VideoUpdateFormSchema(CamelCaseSchema):
    title = TrimmedString(validate=validate.Length(min=1, max=200))
    description = fields.String(validate=validate.Length(max=5000))


class VideoThumbnailFileSchema(CamelCaseSchema):
    thumbnail = Upload()


class VideoSchema(CamelCaseSchema):
    id = ObjectIdField(attribute='_id')
    title = fields.String()
    description = fields.String()
    thumbnail = fields.String(allow_none=True)
    video_file = fields.String()
    duration = fields.Float()
    category = fields.String()
    tags = fields.List(fields.String())
    views = fields.Integer()
    likes = fields.Integer()
    is_published = fields.Boolean()
    owner = RefField(OwnerSchema)
    is_liked = fields.Boolean()
    score = fields.Float(metadata={'description': '검색 관련도 (relevance 정렬 시)'})
    created_at = fields.DateTime()
    updated_at = fields.DateTime()


class VideoPageSchema(PageSchema):
    docs = fields.List(fields.Nested(VideoSchema))


class DeletedVideoSchema(CamelCaseSchema):
    deleted_video_id = ObjectIdField()


class VideoResponseSchema(ApiResponseSchema):
    data = fields.Nested(VideoSchema)


class VideoPageResponseSchema(ApiResponseSchema):
    data = fields.Nested(VideoPageSchema)


class CategoryListResponseSchema(ApiResponseSchema):
    data = fields.List(fields.String())


class DeletedVideoResponseSchema(ApiResponseSchema):
    data = fields.Nested(DeletedVideoSchema)
