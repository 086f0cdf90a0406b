from marshmallow import fields

from app.schemas.common_schema import (
    CamelCaseSchema, ApiResponseSchema, PageSchema, ObjectIdField, OwnerSchema
)
from app.schemas.video import VideoSchema


class ToggleLikeSchema(CamelCaseSchema):
    #NOTE: 기존 클라이언트 호환을 위해 토글 응답만 소문자 isliked
    is_liked = fields.Boolean(data_key='isliked')


class LikeStatusSchema(CamelCaseSchema):
    is_liked = fields.Boolean()


class LikedCommentSchema(CamelCaseSchema):
    id = ObjectIdField(attribute='_id')
    content = fields.String()
    likes = fields.Integer()
    target_kind = fields.String()
    target_id = ObjectIdField()
    created_at = fields.DateTime()


class LikedVideoSchema(CamelCaseSchema):
    id = ObjectIdField(attribute='_id')
    video = fields.Nested(VideoSchema)
    owner = fields.Nested(OwnerSchema)
    liked_at = fields.DateTime(attribute='created_at')


class LikedCommentItemSchema(CamelCaseSchema):
    id = ObjectIdField(attribute='_id')
    comment = fields.Nested(LikedCommentSchema)
    owner = fields.Nested(OwnerSchema)
    liked_at = fields.DateTime(attribute='created_at')


class LikedVideoPageSchema(PageSchema):
    docs = fields.List(fields.Nested(LikedVideoSchema))


class LikedCommentPageSchema(PageSchema):
    docs = fields.List(fields.Nested(LikedCommentItemSchema))


class ToggleLikeResponseSchema(ApiResponseSchema):
    data = fields.Nested(ToggleLikeSchema)


class LikeStatusResponseSchema(ApiResponseSchema):
    data = fields.Nested(LikeStatusSchema)


class LikedVideoPageResponseSchema(ApiResponseSchema):
    data = fields.Nested(LikedVideoPageSchema)


class LikedCommentPageResponseSchema(ApiResponseSchema):
    data = fields.Nested(LikedCommentPageSchema)
