from flask_smorest.fields import Upload
from marshmallow import fields, validate

from app.schemas.common_schema import (
    CamelCaseSchema, ApiResponseSchema, PageSchema, ObjectIdField, OwnerSchema, RefField, TrimmedString
)


class CreateTweetFormSchema(CamelCaseSchema):
    content = TrimmedString(required=True, validate=validate.Length(min=1, max=280))


class TweetImageFileSchema(CamelCaseSchema):
    image = Upload()


class UpdateTweetRequestSchema(CamelCaseSchema):
    content = TrimmedString(required=True, validate=validate.Length(min=1, max=280))


class TweetSchema(CamelCaseSchema):
    id = ObjectIdField(attribute='_id')
    content = fields.String()
    image = fields.String(allow_none=True)
    likes = fields.Integer()
    owner = RefField(OwnerSchema)
    created_at = fields.DateTime()
    updated_at = fields.DateTime()


class TweetPageSchema(PageSchema):
    docs = fields.List(fields.Nested(TweetSchema))


class DeletedTweetSchema(CamelCaseSchema):
    deleted_tweet_id = ObjectIdField()


class TweetResponseSchema(ApiResponseSchema):
    data = fields.Nested(TweetSchema)


class TweetPageResponseSchema(ApiResponseSchema):
    data = fields.Nested(TweetPageSchema)


class DeletedTweetResponseSchema(ApiResponseSchema):
    data = fields.Nested(DeletedTweetSchema)
