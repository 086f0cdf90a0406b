from datetime import datetime
from typing import Dict, Optional
from dataclasses import dataclass, field

from bson import ObjectId
from pymongo import ASCENDING, ReturnDocument

#NOTE: 조인 결과에 노출해도 되는 사용자 필드 (password, refresh_token 제외)
USER_PUBLIC_FIELDS = ('username', 'full_name', 'avatar')


@dataclass
class User:
    username: str
    email: str
    full_name: str
    password: str

    avatar: Optional[str] = None
    avatar_public_id: Optional[str] = None
    cover_image: Optional[str] = None
    cover_image_public_id: Optional[str] = None

    refresh_token: Optional[str] = None

    subscriber_count: int = 0

    id: Optional[ObjectId] = None

    created_at: datetime = field(default_factory=datetime.utcnow)

    updated_at: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self) -> Dict:
        """MongoDB 도큐먼트로 변환"""
        doc = {
            'username': self.username,
            'email': self.email,
            'full_name': self.full_name,
            'password': self.password,
            'avatar': self.avatar,
            'avatar_public_id': self.avatar_public_id,
            'cover_image': self.cover_image,
            'cover_image_public_id': self.cover_image_public_id,
            'refresh_token': self.refresh_token,
            'subscriber_count': self.subscriber_count,
            'created_at': self.created_at,
            'updated_at': self.updated_at
        }
        if self.id is not None:
            doc['_id'] = self.id
        return doc

    @classmethod
    def from_dict(cls, data: Dict) -> 'User':
        """MongoDB 도큐먼트에서 객체 생성"""
        return cls(
            id=data.get('_id'),
            username=data['username'],
            email=data['email'],
            full_name=data.get('full_name', ''),
            password=data.get('password', ''),
            avatar=data.get('avatar'),
            avatar_public_id=data.get('avatar_public_id'),
            cover_image=data.get('cover_image'),
            cover_image_public_id=data.get('cover_image_public_id'),
            refresh_token=data.get('refresh_token'),
            subscriber_count=data.get('subscriber_count', 0),
            created_at=data.get('created_at', datetime.utcnow()),
            updated_at=data.get('updated_at', datetime.utcnow())
        )


class UserRepository:

    COLLECTION_NAME = 'users'

    def __init__(self, db):
        self.collection = db[self.COLLECTION_NAME]

    def ensure_indexes(self):
        self.collection.create_index([('username', ASCENDING)], unique=True)
        self.collection.create_index([('email', ASCENDING)], unique=True)

    def find_by_id(self, user_id: ObjectId) -> Optional[User]:
        doc = self.collection.find_one({'_id': user_id})
        return User.from_dict(doc) if doc else None

    def find_by_username(self, username: str) -> Optional[User]:
        doc = self.collection.find_one({'username': username.lower()})
        return User.from_dict(doc) if doc else None

    def find_by_username_or_email(self, username: str = None, email: str = None) -> Optional[User]:
        conditions = []
        if username:
            conditions.append({'username': username.lower()})
        if email:
            conditions.append({'email': email.lower()})
        if not conditions:
            return None
        doc = self.collection.find_one({'$or': conditions})
        return User.from_dict(doc) if doc else None

    def exists(self, user_id: ObjectId) -> bool:
        return self.collection.find_one({'_id': user_id}, {'_id': 1}) is not None

    def insert(self, user: User) -> ObjectId:
        result = self.collection.insert_one(user.to_dict())
        user.id = result.inserted_id
        return result.inserted_id

    def update_fields(self, user_id: ObjectId, fields: Dict) -> Optional[User]:
        doc = self.collection.find_one_and_update(
            {'_id': user_id},
            {'$set': {**fields, 'updated_at': datetime.utcnow()}},
            return_document=ReturnDocument.AFTER
        )
        return User.from_dict(doc) if doc else None

    def clear_refresh_token(self, user_id: ObjectId):
        self.collection.update_one(
            {'_id': user_id},
            {'$unset': {'refresh_token': ''}, '$set': {'updated_at': datetime.utcnow()}}
        )


def public_user_projection(prefix: str) -> Dict:
    """조인된 사용자 문서(prefix)에서 공개 필드만 남기는 $project 스펙"""
    return {f'{prefix}.{name}': 1 for name in ('_id',) + USER_PUBLIC_FIELDS}
