from flask import current_app

from common.extensions import limiter

RATE_LIMIT_MESSAGE = "요청이 너무 많습니다. 잠시 후 다시 시도해주세요."


def _is_failed_response(response):
    return response.status_code >= 400


def rate_limited(config_key, failures_only=False):
    """
    app.config[config_key] 의 한도("100 per 15 minutes" 형식)를 IP 단위로 적용.
    failures_only=True 이면 실패 응답(4xx/5xx)만 한도에 차감한다.
    """
    return limiter.limit(
        lambda: current_app.config[config_key],
        deduct_when=_is_failed_response if failures_only else None,
        error_message=RATE_LIMIT_MESSAGE
    )
