from datetime import datetime
from typing import Dict, List, Optional
from dataclasses import dataclass, field

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, ReturnDocument

from common.enum.target_kind import TargetKind


@dataclass
class Comment:
    """
    target_kind/target_id 로 영상 또는 트윗 중 정확히 하나를 가리킨다.
    (video, tweet 두 nullable 필드를 두지 않으므로 "대상 없음" 상태가 생길 수 없다)
    """
    owner: ObjectId
    content: str
    target_kind: TargetKind
    target_id: ObjectId

    parent_comment: Optional[ObjectId] = None

    likes: int = 0

    id: Optional[ObjectId] = None

    created_at: datetime = field(default_factory=datetime.utcnow)

    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self):
        if self.target_kind not in (TargetKind.VIDEO, TargetKind.TWEET):
            raise ValueError(f"댓글 대상이 될 수 없는 타입입니다: {self.target_kind}")

    def to_dict(self) -> Dict:
        doc = {
            'owner': self.owner,
            'content': self.content,
            'target_kind': TargetKind(self.target_kind).value,
            'target_id': self.target_id,
            'parent_comment': self.parent_comment,
            'likes': self.likes,
            'created_at': self.created_at,
            'updated_at': self.updated_at
        }
        if self.id is not None:
            doc['_id'] = self.id
        return doc

    @classmethod
    def from_dict(cls, data: Dict) -> 'Comment':
        return cls(
            id=data.get('_id'),
            owner=data['owner'],
            content=data.get('content', ''),
            target_kind=TargetKind(data['target_kind']),
            target_id=data['target_id'],
            parent_comment=data.get('parent_comment'),
            likes=data.get('likes', 0),
            created_at=data.get('created_at', datetime.utcnow()),
            updated_at=data.get('updated_at', datetime.utcnow())
        )


class CommentRepository:

    COLLECTION_NAME = 'comments'

    def __init__(self, db):
        self.collection = db[self.COLLECTION_NAME]

    def ensure_indexes(self):
        self.collection.create_index([
            ('target_kind', ASCENDING), ('target_id', ASCENDING), ('created_at', DESCENDING)
        ])
        self.collection.create_index([('owner', ASCENDING)])

    def find_by_id(self, comment_id: ObjectId) -> Optional[Comment]:
        doc = self.collection.find_one({'_id': comment_id})
        return Comment.from_dict(doc) if doc else None

    def exists(self, comment_id: ObjectId) -> bool:
        return self.collection.find_one({'_id': comment_id}, {'_id': 1}) is not None

    def insert(self, comment: Comment) -> ObjectId:
        result = self.collection.insert_one(comment.to_dict())
        comment.id = result.inserted_id
        return result.inserted_id

    def update_content(self, comment_id: ObjectId, content: str) -> Optional[Comment]:
        doc = self.collection.find_one_and_update(
            {'_id': comment_id},
            {'$set': {'content': content, 'updated_at': datetime.utcnow()}},
            return_document=ReturnDocument.AFTER
        )
        return Comment.from_dict(doc) if doc else None

    def find_ids_by_target(self, target_kind: TargetKind, target_id: ObjectId) -> List[ObjectId]:
        cursor = self.collection.find(
            {'target_kind': TargetKind(target_kind).value, 'target_id': target_id},
            {'_id': 1}
        )
        return [doc['_id'] for doc in cursor]

    def delete_many_by_ids(self, comment_ids: List[ObjectId]) -> int:
        if not comment_ids:
            return 0
        return self.collection.delete_many({'_id': {'$in': comment_ids}}).deleted_count

    def find_reply_ids(self, parent_id: ObjectId) -> List[ObjectId]:
        """답글의 답글까지 포함한 모든 하위 댓글 ID"""
        reply_ids = []
        frontier = [parent_id]
        while frontier:
            cursor = self.collection.find({'parent_comment': {'$in': frontier}}, {'_id': 1})
            frontier = [doc['_id'] for doc in cursor]
            reply_ids.extend(frontier)
        return reply_ids
