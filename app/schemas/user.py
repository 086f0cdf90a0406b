from flask_smorest.fields import Upload
from marshmallow import fields, validate, validates_schema, ValidationError

from app.schemas.common_schema import CamelCaseSchema, ApiResponseSchema, ObjectIdField, TrimmedString


class RegisterFormSchema(CamelCaseSchema):
    username = TrimmedString(required=True, validate=validate.Length(min=3, max=30),
                             metadata={'description': '사용자명 (소문자로 저장)'})
    email = fields.Email(required=True)
    full_name = TrimmedString(required=True, validate=validate.Length(min=1, max=100))
    password = fields.String(required=True, load_only=True, validate=validate.Length(min=6))


class RegisterFileSchema(CamelCaseSchema):
    avatar = Upload(metadata={'description': '프로필 이미지'})
    cover_image = Upload(metadata={'description': '커버 이미지'})


class LoginRequestSchema(CamelCaseSchema):
    username = fields.String()
    email = fields.String()
    password = fields.String(required=True, load_only=True)

    @validates_schema
    def validate_identity(self, data, **kwargs):
        if not data.get('username') and not data.get('email'):
            raise ValidationError('username 또는 email 중 하나는 필수입니다.', 'username')


class RefreshTokenRequestSchema(CamelCaseSchema):
    refresh_token = fields.String(load_default=None)


class ChangePasswordRequestSchema(CamelCaseSchema):
    old_password = fields.String(required=True, load_only=True)
    new_password = fields.String(required=True, load_only=True, validate=validate.Length(min=6))


class UpdateAccountRequestSchema(CamelCaseSchema):
    full_name = TrimmedString(required=True, validate=validate.Length(min=1, max=100))
    email = fields.Email(required=True)


class AvatarFileSchema(CamelCaseSchema):
    avatar = Upload(required=True)


class CoverImageFileSchema(CamelCaseSchema):
    cover_image = Upload(required=True)


class UserSchema(CamelCaseSchema):
    id = ObjectIdField(attribute='_id')
    username = fields.String()
    email = fields.String()
    full_name = fields.String()
    avatar = fields.String(allow_none=True)
    cover_image = fields.String(allow_none=True)
    subscriber_count = fields.Integer()
    created_at = fields.DateTime()
    updated_at = fields.DateTime()


class AuthTokenSchema(CamelCaseSchema):
    access_token = fields.String()
    refresh_token = fields.String()
    user = fields.Nested(UserSchema, allow_none=True)


class ChannelProfileSchema(CamelCaseSchema):
    id = ObjectIdField()
    username = fields.String()
    full_name = fields.String()
    email = fields.String()
    avatar = fields.String(allow_none=True)
    cover_image = fields.String(allow_none=True)
    subscribers_count = fields.Integer()
    channels_subscribed_to_count = fields.Integer()
    is_subscribed = fields.Boolean()
    created_at = fields.DateTime()


class UserResponseSchema(ApiResponseSchema):
    data = fields.Nested(UserSchema)


class AuthTokenResponseSchema(ApiResponseSchema):
    data = fields.Nested(AuthTokenSchema)


class ChannelProfileResponseSchema(ApiResponseSchema):
    data = fields.Nested(ChannelProfileSchema)
