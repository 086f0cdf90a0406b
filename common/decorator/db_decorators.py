from functools import wraps
from flask import current_app

import common.extensions as extensions
from common.utils.logging_utils import get_logger

logger = get_logger('db_decorators')


def mongo_transactional(func):
    """
    MONGO_TRANSACTIONS_ENABLED 설정 시 함수 전체를 하나의 세션 트랜잭션으로 실행한다.
    데코레이트된 함수는 session 키워드 인자를 받아 모든 DB 호출에 넘겨야 한다.
    트랜잭션이 꺼져 있으면 session=None 으로 그대로 호출된다.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        if not current_app.config.get('MONGO_TRANSACTIONS_ENABLED'):
            return func(*args, session=None, **kwargs)

        with extensions.mongo_client.start_session() as session:
            #NOTE: with_transaction은 TransientTransactionError 발생 시 콜백을 재시도한다
            result = session.with_transaction(
                lambda s: func(*args, session=s, **kwargs)
            )
            logger.debug(f"{func.__qualname__} 트랜잭션 커밋 완료")
            return result

    return wrapper
