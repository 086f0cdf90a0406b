from datetime import datetime
from typing import Dict, Optional
from dataclasses import dataclass, field

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, ReturnDocument


@dataclass
class Tweet:
    owner: ObjectId
    content: str

    image: Optional[str] = None
    image_public_id: Optional[str] = None

    likes: int = 0

    id: Optional[ObjectId] = None

    created_at: datetime = field(default_factory=datetime.utcnow)

    updated_at: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self) -> Dict:
        doc = {
            'owner': self.owner,
            'content': self.content,
            'image': self.image,
            'image_public_id': self.image_public_id,
            'likes': self.likes,
            'created_at': self.created_at,
            'updated_at': self.updated_at
        }
        if self.id is not None:
            doc['_id'] = self.id
        return doc

    @classmethod
    def from_dict(cls, data: Dict) -> 'Tweet':
        return cls(
            id=data.get('_id'),
            owner=data['owner'],
            content=data.get('content', ''),
            image=data.get('image'),
            image_public_id=data.get('image_public_id'),
            likes=data.get('likes', 0),
            created_at=data.get('created_at', datetime.utcnow()),
            updated_at=data.get('updated_at', datetime.utcnow())
        )


class TweetRepository:

    COLLECTION_NAME = 'tweets'

    def __init__(self, db):
        self.collection = db[self.COLLECTION_NAME]

    def ensure_indexes(self):
        self.collection.create_index([('owner', ASCENDING), ('created_at', DESCENDING)])

    def find_by_id(self, tweet_id: ObjectId) -> Optional[Tweet]:
        doc = self.collection.find_one({'_id': tweet_id})
        return Tweet.from_dict(doc) if doc else None

    def exists(self, tweet_id: ObjectId) -> bool:
        return self.collection.find_one({'_id': tweet_id}, {'_id': 1}) is not None

    def insert(self, tweet: Tweet) -> ObjectId:
        result = self.collection.insert_one(tweet.to_dict())
        tweet.id = result.inserted_id
        return result.inserted_id

    def update_fields(self, tweet_id: ObjectId, fields: Dict) -> Optional[Tweet]:
        doc = self.collection.find_one_and_update(
            {'_id': tweet_id},
            {'$set': {**fields, 'updated_at': datetime.utcnow()}},
            return_document=ReturnDocument.AFTER
        )
        return Tweet.from_dict(doc) if doc else None

    def delete(self, tweet_id: ObjectId) -> bool:
        return self.collection.delete_one({'_id': tweet_id}).deleted_count > 0
