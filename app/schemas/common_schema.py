from bson import ObjectId
from bson.errors import InvalidId
from marshmallow import Schema, fields, post_dump, EXCLUDE


def camelcase(s):
    parts = iter(s.split("_"))
    return next(parts) + "".join(i.title() for i in parts)


class CamelCaseSchema(Schema):
    """snake_case 필드를 camelCase 키로 (역)직렬화"""

    class Meta:
        unknown = EXCLUDE

    def on_bind_field(self, field_name, field_obj):
        field_obj.data_key = camelcase(field_obj.data_key or field_name)


class ObjectIdField(fields.Field):
    """ObjectId <-> 24자리 hex 문자열"""

    default_error_messages = {'invalid': '유효하지 않은 ID 형식입니다.'}

    def _serialize(self, value, attr, obj, **kwargs):
        if value is None:
            return None
        return str(value)

    def _deserialize(self, value, attr, data, **kwargs):
        try:
            return ObjectId(value)
        except (InvalidId, TypeError):
            raise self.make_error('invalid')


class TrimmedString(fields.String):
    """앞뒤 공백을 제거한 뒤 검증하는 문자열 필드"""

    def _deserialize(self, value, attr, data, **kwargs):
        return super()._deserialize(value, attr, data, **kwargs).strip()


class ApiResponseSchema(CamelCaseSchema):
    status_code = fields.Integer(metadata={'description': 'HTTP 상태 코드'})
    data = fields.Raw(allow_none=True, metadata={'description': '응답 데이터'})
    message = fields.String(metadata={'description': '안내 메시지'})
    success = fields.Boolean(metadata={'description': '성공 여부 (statusCode < 400)'})


class PageSchema(CamelCaseSchema):
    """
    Page 직렬화. 하위 클래스에서 docs 필드를 실제 항목 스키마로 덮어쓴다.
    docs / totalDocs 키는 Page.labels 에 지정된 이름으로 바뀐다.
    """
    docs = fields.List(fields.Raw())
    total_docs = fields.Integer()
    limit = fields.Integer()
    page = fields.Integer()
    total_pages = fields.Integer()
    has_next_page = fields.Boolean()
    has_prev_page = fields.Boolean()
    next_page = fields.Integer(allow_none=True)
    prev_page = fields.Integer(allow_none=True)

    @post_dump(pass_original=True)
    def apply_labels(self, data, page, **kwargs):
        labels = page.labels
        data[labels.docs] = data.pop('docs')
        data[labels.total_docs] = data.pop('totalDocs')
        return data


class PaginationQuerySchema(CamelCaseSchema):
    #NOTE: 0 이하 값은 normalize_page 에서 기본값(1/10)으로 보정된다
    page = fields.Integer(load_default=1, metadata={'description': '페이지 번호 (1부터 시작)'})
    limit = fields.Integer(load_default=10, metadata={'description': '페이지 크기 (최대 100)'})


class OwnerSchema(CamelCaseSchema):
    id = ObjectIdField(attribute='_id')
    username = fields.String()
    full_name = fields.String()
    avatar = fields.String(allow_none=True)



class RefField(fields.Field):
    """조인된 문서(dict)는 중첩 스키마로, 조인 전 참조(ObjectId)는 문자열 ID로 직렬화"""

    def __init__(self, schema_class, **kwargs):
        super().__init__(**kwargs)
        self.schema_class = schema_class

    def _serialize(self, value, attr, obj, **kwargs):
        if value is None:
            return None
        if isinstance(value, dict):
            return self.schema_class().dump(value)
        return str(value)


class EmptyResponseSchema(ApiResponseSchema):
    data = fields.Dict(allow_none=True)
