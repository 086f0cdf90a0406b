from marshmallow import fields

from app.schemas.common_schema import (
    CamelCaseSchema, ApiResponseSchema, PageSchema, PaginationQuerySchema,
    ObjectIdField, OwnerSchema, RefField
)


class NotificationQuerySchema(PaginationQuerySchema):
    is_read = fields.Boolean(load_default=None, allow_none=True)


class NotificationVideoSchema(CamelCaseSchema):
    id = ObjectIdField(attribute='_id')
    title = fields.String()
    thumbnail = fields.String(allow_none=True)
    duration = fields.Float()


class NotificationCommentSchema(CamelCaseSchema):
    id = ObjectIdField(attribute='_id')
    content = fields.String()
    created_at = fields.DateTime()


class NotificationSchema(CamelCaseSchema):
    id = ObjectIdField(attribute='_id')
    type = fields.String()
    message = fields.String()
    is_read = fields.Boolean()
    read_at = fields.DateTime(allow_none=True)
    sender = RefField(OwnerSchema)
    video = RefField(NotificationVideoSchema)
    comment = RefField(NotificationCommentSchema)
    created_at = fields.DateTime()


class NotificationPageSchema(PageSchema):
    docs = fields.List(fields.Nested(NotificationSchema))
    unread_count = fields.Integer()


class ModifiedCountSchema(CamelCaseSchema):
    modified_count = fields.Integer()


class DeletedNotificationSchema(CamelCaseSchema):
    deleted_notification_id = ObjectIdField()


class NotificationResponseSchema(ApiResponseSchema):
    data = fields.Nested(NotificationSchema)


class NotificationPageResponseSchema(ApiResponseSchema):
    data = fields.Nested(NotificationPageSchema)


class ModifiedCountResponseSchema(ApiResponseSchema):
    data = fields.Nested(ModifiedCountSchema)


class DeletedNotificationResponseSchema(ApiResponseSchema):
    data = fields.Nested(DeletedNotificationSchema)
