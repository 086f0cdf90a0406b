from datetime import datetime
from typing import Dict, List, Optional
from dataclasses import dataclass, field

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, ReturnDocument

from common.enum.notification_type import NotificationType


@dataclass
class Notification:
    recipient: ObjectId
    type: NotificationType
    message: str

    sender: Optional[ObjectId] = None
    video: Optional[ObjectId] = None
    comment: Optional[ObjectId] = None

    is_read: bool = False
    read_at: Optional[datetime] = None

    id: Optional[ObjectId] = None

    created_at: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self) -> Dict:
        doc = {
            'recipient': self.recipient,
            'sender': self.sender,
            'type': NotificationType(self.type).value,
            'video': self.video,
            'comment': self.comment,
            'message': self.message,
            'is_read': self.is_read,
            'read_at': self.read_at,
            'created_at': self.created_at,
            'updated_at': self.created_at
        }
        if self.id is not None:
            doc['_id'] = self.id
        return doc

    @classmethod
    def from_dict(cls, data: Dict) -> 'Notification':
        return cls(
            id=data.get('_id'),
            recipient=data['recipient'],
            sender=data.get('sender'),
            type=NotificationType(data['type']),
            video=data.get('video'),
            comment=data.get('comment'),
            message=data.get('message', ''),
            is_read=data.get('is_read', False),
            read_at=data.get('read_at'),
            created_at=data.get('created_at', datetime.utcnow())
        )


class NotificationRepository:

    COLLECTION_NAME = 'notifications'

    def __init__(self, db):
        self.collection = db[self.COLLECTION_NAME]

    def ensure_indexes(self):
        self.collection.create_index([
            ('recipient', ASCENDING), ('is_read', ASCENDING), ('created_at', DESCENDING)
        ])

    def find_by_id(self, notification_id: ObjectId) -> Optional[Notification]:
        doc = self.collection.find_one({'_id': notification_id})
        return Notification.from_dict(doc) if doc else None

    def insert(self, notification: Notification) -> ObjectId:
        result = self.collection.insert_one(notification.to_dict())
        notification.id = result.inserted_id
        return result.inserted_id

    def insert_many(self, notifications: List[Notification]) -> int:
        if not notifications:
            return 0
        return len(self.collection.insert_many([n.to_dict() for n in notifications]).inserted_ids)

    def count_unread(self, recipient_id: ObjectId) -> int:
        return self.collection.count_documents({'recipient': recipient_id, 'is_read': False})

    def mark_read(self, notification_id: ObjectId) -> Optional[Notification]:
        now = datetime.utcnow()
        doc = self.collection.find_one_and_update(
            {'_id': notification_id},
            {'$set': {'is_read': True, 'read_at': now, 'updated_at': now}},
            return_document=ReturnDocument.AFTER
        )
        return Notification.from_dict(doc) if doc else None

    def mark_all_read(self, recipient_id: ObjectId) -> int:
        now = datetime.utcnow()
        return self.collection.update_many(
            {'recipient': recipient_id, 'is_read': False},
            {'$set': {'is_read': True, 'read_at': now, 'updated_at': now}}
        ).modified_count

    def delete(self, notification_id: ObjectId) -> bool:
        return self.collection.delete_one({'_id': notification_id}).deleted_count > 0

    def delete_by_video(self, video_id: ObjectId) -> int:
        return self.collection.delete_many({'video': video_id}).deleted_count
