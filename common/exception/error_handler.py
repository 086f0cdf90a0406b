from flask import jsonify
from werkzeug.exceptions import HTTPException
from pymongo.errors import DuplicateKeyError, PyMongoError

from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.utils.logging_utils import get_logger

logger = get_logger('error_handler')


def error_envelope(status_code, message, errors=None):
    return jsonify({
        "statusCode": status_code,
        "data": None,
        "message": message,
        "success": False,
        "errors": errors or []
    }), status_code


def _flatten_validation_messages(messages, prefix=''):
    #NOTE: webargs 메시지 구조 {location: {field: [msg, ...]}} 를 "field: msg" 리스트로 평탄화
    flat = []
    if isinstance(messages, dict):
        for key, value in messages.items():
            if key in ('json', 'query', 'form', 'files', 'path', 'headers') and not prefix:
                flat.extend(_flatten_validation_messages(value))
            else:
                flat.extend(_flatten_validation_messages(value, f"{prefix}{key}."))
    elif isinstance(messages, (list, tuple)):
        for item in messages:
            flat.extend(_flatten_validation_messages(item, prefix))
    else:
        flat.append(f"{prefix.rstrip('.')}: {messages}" if prefix else str(messages))
    return flat


def register_error_handlers(app):
    @app.errorhandler(BusinessError)
    def handle_business_error(e):
        return error_envelope(e.error_enum.status, e.message, e.errors)

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        #NOTE: flask-smorest 요청 검증 실패(422)는 400으로 통일
        if e.code == 422:
            messages = getattr(e, 'data', {}).get('messages', {})
            return error_envelope(
                APIError.INVALID_INPUT_VALUE.status,
                APIError.INVALID_INPUT_VALUE.message,
                _flatten_validation_messages(messages)
            )
        return error_envelope(e.code, e.description or e.name)

    @app.errorhandler(DuplicateKeyError)
    def handle_duplicate_key_error(e):
        logger.warning(f"중복 키 오류: {e.details}")
        return error_envelope(APIError.DUPLICATE_KEY.status, APIError.DUPLICATE_KEY.message)

    @app.errorhandler(PyMongoError)
    def handle_db_error(e):
        logger.error(f"MongoDB 작업 실패: {e}", exc_info=True)
        return error_envelope(APIError.DB_ERROR.status, APIError.DB_ERROR.message)

    @app.errorhandler(Exception)
    def handle_internal_error(e):
        logger.error(f"처리되지 않은 예외: {e}", exc_info=True)
        return error_envelope(
            APIError.INTERNAL_SERVER_ERROR.status,
            APIError.INTERNAL_SERVER_ERROR.message
        )
