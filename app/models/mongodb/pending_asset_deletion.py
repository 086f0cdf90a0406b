from datetime import datetime
from typing import Dict, List, Optional
from dataclasses import dataclass, field

from bson import ObjectId
from pymongo import ASCENDING


@dataclass
class PendingAssetDeletion:
    """
    원격 에셋 삭제에 실패한 항목. AssetCleanupJob 이 주기적으로 재시도한다.
    """
    public_id: str
    resource_type: str

    attempts: int = 0
    last_error: Optional[str] = None

    id: Optional[ObjectId] = None

    created_at: datetime = field(default_factory=datetime.utcnow)

    @classmethod
    def from_dict(cls, data: Dict) -> 'PendingAssetDeletion':
        return cls(
            id=data.get('_id'),
            public_id=data['public_id'],
            resource_type=data.get('resource_type', 'image'),
            attempts=data.get('attempts', 0),
            last_error=data.get('last_error'),
            created_at=data.get('created_at', datetime.utcnow())
        )


class PendingAssetDeletionRepository:

    COLLECTION_NAME = 'pending_asset_deletions'

    MAX_ATTEMPTS = 10

    def __init__(self, db):
        self.collection = db[self.COLLECTION_NAME]

    def ensure_indexes(self):
        self.collection.create_index([('public_id', ASCENDING)], unique=True)

    def record_failure(self, public_id: str, resource_type: str, error: str):
        now = datetime.utcnow()
        self.collection.update_one(
            {'public_id': public_id},
            {
                '$set': {'resource_type': resource_type, 'last_error': error, 'updated_at': now},
                '$inc': {'attempts': 1},
                '$setOnInsert': {'created_at': now}
            },
            upsert=True
        )

    def find_retryable(self, limit: int = 100) -> List[PendingAssetDeletion]:
        cursor = self.collection.find(
            {'attempts': {'$lt': self.MAX_ATTEMPTS}}
        ).sort('created_at', ASCENDING).limit(limit)
        return [PendingAssetDeletion.from_dict(doc) for doc in cursor]

    def resolve(self, public_id: str):
        self.collection.delete_one({'public_id': public_id})
