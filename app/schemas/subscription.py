from marshmallow import fields

from app.schemas.common_schema import CamelCaseSchema, ApiResponseSchema, PageSchema, ObjectIdField


class SubscriptionStatusSchema(CamelCaseSchema):
    is_subscribed = fields.Boolean()


class SubscribedUserSchema(CamelCaseSchema):
    id = ObjectIdField(attribute='_id')
    username = fields.String()
    full_name = fields.String()
    avatar = fields.String(allow_none=True)
    subscriber_count = fields.Integer()


class SubscriptionItemSchema(CamelCaseSchema):
    id = ObjectIdField(attribute='_id')
    user = fields.Nested(SubscribedUserSchema)
    subscribed_at = fields.DateTime(attribute='created_at')


class SubscriptionPageSchema(PageSchema):
    docs = fields.List(fields.Nested(SubscriptionItemSchema))


class SubscriptionStatusResponseSchema(ApiResponseSchema):
    data = fields.Nested(SubscriptionStatusSchema)


class SubscriptionPageResponseSchema(ApiResponseSchema):
    data = fields.Nested(SubscriptionPageSchema)
