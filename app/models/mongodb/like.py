from typing import Dict, List
from dataclasses import dataclass

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING

from common.enum.target_kind import TargetKind


@dataclass(frozen=True)
class TargetRef:
    """좋아요 대상: Video(id) | Comment(id) | Tweet(id)"""
    kind: TargetKind
    id: ObjectId

    def to_key(self) -> Dict:
        return {'target_kind': TargetKind(self.kind).value, 'target_id': self.id}


def like_relation_key(liked_by: ObjectId, target: TargetRef) -> Dict:
    """likes 컬렉션의 unique 키 (liked_by, target_kind, target_id)"""
    return {'liked_by': liked_by, **target.to_key()}


class LikeRepository:

    COLLECTION_NAME = 'likes'

    def __init__(self, db):
        self.collection = db[self.COLLECTION_NAME]

    def ensure_indexes(self):
        #NOTE: (사용자, 대상) 당 좋아요는 최대 1개. 동시 토글 경합은 이 인덱스로 막는다
        self.collection.create_index(
            [('liked_by', ASCENDING), ('target_kind', ASCENDING), ('target_id', ASCENDING)],
            unique=True,
            name='unique_like_per_target'
        )
        self.collection.create_index([('target_kind', ASCENDING), ('target_id', ASCENDING)])
        self.collection.create_index([('liked_by', ASCENDING), ('created_at', DESCENDING)])

    def delete_by_targets(self, kind: TargetKind, target_ids: List[ObjectId]) -> int:
        if not target_ids:
            return 0
        return self.collection.delete_many({
            'target_kind': TargetKind(kind).value,
            'target_id': {'$in': target_ids}
        }).deleted_count

    def count_by_target(self, kind: TargetKind, target_ids: List[ObjectId]) -> Dict[ObjectId, int]:
        """대상별 좋아요 수 (카운터 정합성 점검용)"""
        pipeline = [{'$match': {'target_kind': TargetKind(kind).value}}]
        if target_ids is not None:
            pipeline[0]['$match']['target_id'] = {'$in': target_ids}
        pipeline.append({'$group': {'_id': '$target_id', 'count': {'$sum': 1}}})
        return {doc['_id']: doc['count'] for doc in self.collection.aggregate(pipeline)}
