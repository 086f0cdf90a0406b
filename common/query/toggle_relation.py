from datetime import datetime
from typing import Any, Dict

from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from common.utils.logging_utils import get_logger

logger = get_logger('toggle_relation')


class ToggleRelation:
    """
    (actor, target) 관계 레코드를 생성/삭제하고 대상 문서의 카운터를 함께 갱신한다.

    - 관계 컬렉션에는 relation_key 필드들에 대한 unique 인덱스가 있어야 한다.
    - 카운터는 항상 $inc 로만 변경한다 (애플리케이션 레벨 read-modify-write 금지).
    - 동시에 같은 관계를 생성하려는 요청은 unique 인덱스에 막히며, 먼저 쓴 요청이 이긴다.
      진 요청은 카운터를 건드리지 않고 "관계 있음"을 반환한다.
      단, session 이 주어진 경우(트랜잭션 안)에는 DuplicateKeyError 를 그대로 올린다.
    """

    def __init__(self, relations: Collection, targets: Collection, counter_field: str):
        self.relations = relations
        self.targets = targets
        self.counter_field = counter_field

    def toggle(self, relation_key: Dict[str, Any], target_id, session=None) -> bool:
        removed = self.relations.find_one_and_delete(relation_key, session=session)
        if removed:
            self._increment(target_id, -1, session)
            return False

        now = datetime.utcnow()
        try:
            self.relations.insert_one(
                {**relation_key, 'created_at': now, 'updated_at': now},
                session=session
            )
        except DuplicateKeyError:
            #NOTE: 트랜잭션 안에서는 with_transaction 이 abort 하도록 그대로 올린다
            if session is not None:
                raise
            logger.warning(f"동시 토글 감지, 기존 관계 유지: {relation_key}")
            return True

        self._increment(target_id, 1, session)
        return True

    def status(self, relation_key: Dict[str, Any], session=None) -> bool:
        return self.relations.find_one(relation_key, {'_id': 1}, session=session) is not None

    def _increment(self, target_id, amount: int, session=None):
        self.targets.update_one(
            {'_id': target_id},
            {'$inc': {self.counter_field: amount}},
            session=session
        )
