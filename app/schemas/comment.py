from marshmallow import fields, validate

from app.schemas.common_schema import (
    CamelCaseSchema, ApiResponseSchema, PageSchema, ObjectIdField, OwnerSchema, RefField, TrimmedString
)


class AddCommentRequestSchema(CamelCaseSchema):
    content = TrimmedString(required=True, validate=validate.Length(min=1, max=500))
    video_id = fields.String(load_default=None)
    tweet_id = fields.String(load_default=None)
    parent_comment_id = fields.String(load_default=None)


class UpdateCommentRequestSchema(CamelCaseSchema):
    content = TrimmedString(required=True, validate=validate.Length(min=1, max=500))


class CommentSchema(CamelCaseSchema):
    id = ObjectIdField(attribute='_id')
    content = fields.String()
    likes = fields.Integer()
    target_kind = fields.String()
    target_id = ObjectIdField()
    parent_comment = ObjectIdField(allow_none=True)
    owner = RefField(OwnerSchema)
    created_at = fields.DateTime()
    updated_at = fields.DateTime()


class CommentPageSchema(PageSchema):
    docs = fields.List(fields.Nested(CommentSchema))


class DeletedCommentSchema(CamelCaseSchema):
    deleted_comment_id = ObjectIdField()


class CommentResponseSchema(ApiResponseSchema):
    data = fields.Nested(CommentSchema)


class CommentPageResponseSchema(ApiResponseSchema):
    data = fields.Nested(CommentPageSchema)


class DeletedCommentResponseSchema(ApiResponseSchema):
    data = fields.Nested(DeletedCommentSchema)
