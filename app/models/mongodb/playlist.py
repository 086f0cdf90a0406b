from datetime import datetime
from typing import Dict, List, Optional
from dataclasses import dataclass, field

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, ReturnDocument


@dataclass
class Playlist:
    owner: ObjectId
    name: str

    description: str = ''

    #NOTE: 순서 있는 영상 목록, 중복은 $addToSet 으로 방지
    videos: List[ObjectId] = field(default_factory=list)

    is_public: bool = True

    id: Optional[ObjectId] = None

    created_at: datetime = field(default_factory=datetime.utcnow)

    updated_at: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self) -> Dict:
        doc = {
            'owner': self.owner,
            'name': self.name,
            'description': self.description,
            'videos': self.videos,
            'is_public': self.is_public,
            'created_at': self.created_at,
            'updated_at': self.updated_at
        }
        if self.id is not None:
            doc['_id'] = self.id
        return doc

    @classmethod
    def from_dict(cls, data: Dict) -> 'Playlist':
        return cls(
            id=data.get('_id'),
            owner=data['owner'],
            name=data['name'],
            description=data.get('description', ''),
            videos=list(data.get('videos', [])),
            is_public=data.get('is_public', True),
            created_at=data.get('created_at', datetime.utcnow()),
            updated_at=data.get('updated_at', datetime.utcnow())
        )


class PlaylistRepository:

    COLLECTION_NAME = 'playlists'

    def __init__(self, db):
        self.collection = db[self.COLLECTION_NAME]

    def ensure_indexes(self):
        self.collection.create_index([('owner', ASCENDING), ('created_at', DESCENDING)])
        self.collection.create_index([('videos', ASCENDING)])

    def find_by_id(self, playlist_id: ObjectId) -> Optional[Playlist]:
        doc = self.collection.find_one({'_id': playlist_id})
        return Playlist.from_dict(doc) if doc else None

    def insert(self, playlist: Playlist) -> ObjectId:
        result = self.collection.insert_one(playlist.to_dict())
        playlist.id = result.inserted_id
        return result.inserted_id

    def update_fields(self, playlist_id: ObjectId, fields: Dict) -> Optional[Playlist]:
        doc = self.collection.find_one_and_update(
            {'_id': playlist_id},
            {'$set': {**fields, 'updated_at': datetime.utcnow()}},
            return_document=ReturnDocument.AFTER
        )
        return Playlist.from_dict(doc) if doc else None

    def add_video(self, playlist_id: ObjectId, video_id: ObjectId) -> Optional[Playlist]:
        doc = self.collection.find_one_and_update(
            {'_id': playlist_id},
            {'$addToSet': {'videos': video_id}, '$set': {'updated_at': datetime.utcnow()}},
            return_document=ReturnDocument.AFTER
        )
        return Playlist.from_dict(doc) if doc else None

    def remove_video(self, playlist_id: ObjectId, video_id: ObjectId) -> Optional[Playlist]:
        doc = self.collection.find_one_and_update(
            {'_id': playlist_id},
            {'$pull': {'videos': video_id}, '$set': {'updated_at': datetime.utcnow()}},
            return_document=ReturnDocument.AFTER
        )
        return Playlist.from_dict(doc) if doc else None

    def pull_video_everywhere(self, video_id: ObjectId) -> int:
        """삭제된 영상을 모든 플레이리스트에서 제거"""
        return self.collection.update_many(
            {'videos': video_id},
            {'$pull': {'videos': video_id}}
        ).modified_count

    def delete(self, playlist_id: ObjectId) -> bool:
        return self.collection.delete_one({'_id': playlist_id}).deleted_count > 0
