from typing import Dict

from pymongo import UpdateOne
from pymongo.collection import Collection

import common.extensions as extensions
from app.models.mongodb.like import LikeRepository
from app.models.mongodb.subscription import SubscriptionRepository
from app.models.mongodb.user import UserRepository
from common.enum.target_kind import TargetKind
from common.utils.logging_utils import get_logger

logger = get_logger('counter_reconciliation_job')


class CounterReconciliationJob:
    """
    비정규화 카운터(likes, subscriber_count)를 관계 컬렉션 기준으로 다시 계산한다.
    관계 컬렉션(likes, subscriptions)이 원본이고, 어긋난 카운터만 덮어쓴다.
    읽은 뒤 다른 요청이 카운터를 바꿨다면 해당 문서는 이번 실행에서 건너뛴다.
    """

    def _reconcile(self, collection: Collection, counter_field: str, actual: Dict) -> int:
        operations = []
        for doc in collection.find({}, {counter_field: 1}):
            expected = actual.get(doc['_id'], 0)
            observed = doc.get(counter_field)
            if (observed or 0) != expected:
                #NOTE: 필드가 없으면 observed=None, {field: None} 은 필드 없음도 매칭한다
                operations.append(UpdateOne(
                    {'_id': doc['_id'], counter_field: observed},
                    {'$set': {counter_field: expected}}
                ))

        if not operations:
            return 0

        result = collection.bulk_write(operations, ordered=False)
        skipped = len(operations) - result.matched_count
        if skipped:
            logger.info(f"{collection.name}.{counter_field}: 동시 변경으로 {skipped}건 보정 보류")
        return result.modified_count

    def execute(self) -> Dict[str, int]:
        db = extensions.mongo_db
        likes = LikeRepository(db)

        fixed = {}
        for kind in TargetKind:
            fixed[kind.collection_name] = self._reconcile(
                db[kind.collection_name], 'likes', likes.count_by_target(kind, None)
            )

        fixed[UserRepository.COLLECTION_NAME] = self._reconcile(
            UserRepository(db).collection,
            'subscriber_count',
            SubscriptionRepository(db).count_grouped_by_channel()
        )

        drifted = {name: count for name, count in fixed.items() if count}
        if drifted:
            logger.warning(f"카운터 불일치 보정: {drifted}")
        else:
            logger.info("카운터 불일치 없음")

        return fixed
