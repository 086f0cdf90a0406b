from marshmallow import fields, validate

from app.schemas.common_schema import (
    CamelCaseSchema, ApiResponseSchema, PageSchema, ObjectIdField, OwnerSchema, RefField, TrimmedString
)
from app.schemas.video import VideoSchema


class CreatePlaylistRequestSchema(CamelCaseSchema):
    name = TrimmedString(required=True, validate=validate.Length(min=1, max=100))
    description = fields.String(load_default='', validate=validate.Length(max=500))
    is_public = fields.Boolean(load_default=True)


class UpdatePlaylistRequestSchema(CamelCaseSchema):
    name = TrimmedString(validate=validate.Length(min=1, max=100))
    description = fields.String(validate=validate.Length(max=500))
    is_public = fields.Boolean()


class PlaylistSchema(CamelCaseSchema):
    id = ObjectIdField(attribute='_id')
    name = fields.String()
    description = fields.String()
    is_public = fields.Boolean()
    video_count = fields.Integer()
    owner = RefField(OwnerSchema)
    created_at = fields.DateTime()
    updated_at = fields.DateTime()


class PlaylistDetailSchema(PlaylistSchema):
    videos = fields.List(fields.Nested(VideoSchema))


class PlaylistWithVideoIdsSchema(PlaylistSchema):
    videos = fields.List(ObjectIdField())


class PlaylistPageSchema(PageSchema):
    docs = fields.List(fields.Nested(PlaylistSchema))


class DeletedPlaylistSchema(CamelCaseSchema):
    deleted_playlist_id = ObjectIdField()


class PlaylistResponseSchema(ApiResponseSchema):
    data = fields.Nested(PlaylistWithVideoIdsSchema)


class PlaylistDetailResponseSchema(ApiResponseSchema):
    data = fields.Nested(PlaylistDetailSchema)


class PlaylistPageResponseSchema(ApiResponseSchema):
    data = fields.Nested(PlaylistPageSchema)


class DeletedPlaylistResponseSchema(ApiResponseSchema):
    data = fields.Nested(DeletedPlaylistSchema)
