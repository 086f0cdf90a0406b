from datetime import datetime
from typing import Dict, List, Optional
from dataclasses import dataclass, field

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, TEXT, ReturnDocument


@dataclass
class Video:
    owner: ObjectId
    title: str
    category: str

    video_file: str
    video_file_public_id: str

    thumbnail: Optional[str] = None
    thumbnail_public_id: Optional[str] = None

    description: str = ''

    tags: List[str] = field(default_factory=list)

    duration: float = 0  # 초 단위

    views: int = 0
    likes: int = 0

    is_published: bool = True

    id: Optional[ObjectId] = None

    created_at: datetime = field(default_factory=datetime.utcnow)

    updated_at: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self) -> Dict:
        """MongoDB 도큐먼트로 변환"""
        doc = {
            'owner': self.owner,
            'title': self.title,
            'description': self.description,
            'category': self.category,
            'tags': self.tags,
            'duration': self.duration,
            'video_file': self.video_file,
            'video_file_public_id': self.video_file_public_id,
            'thumbnail': self.thumbnail,
            'thumbnail_public_id': self.thumbnail_public_id,
            'views': self.views,
            'likes': self.likes,
            'is_published': self.is_published,
            'created_at': self.created_at,
            'updated_at': self.updated_at
        }
        if self.id is not None:
            doc['_id'] = self.id
        return doc

    @classmethod
    def from_dict(cls, data: Dict) -> 'Video':
        """MongoDB 도큐먼트에서 객체 생성"""
        return cls(
            id=data.get('_id'),
            owner=data['owner'],
            title=data['title'],
            description=data.get('description', ''),
            category=data.get('category', ''),
            tags=data.get('tags', []),
            duration=data.get('duration', 0),
            video_file=data.get('video_file'),
            video_file_public_id=data.get('video_file_public_id'),
            thumbnail=data.get('thumbnail'),
            thumbnail_public_id=data.get('thumbnail_public_id'),
            views=data.get('views', 0),
            likes=data.get('likes', 0),
            is_published=data.get('is_published', True),
            created_at=data.get('created_at', datetime.utcnow()),
            updated_at=data.get('updated_at', datetime.utcnow())
        )


class VideoRepository:

    COLLECTION_NAME = 'videos'

    def __init__(self, db):
        self.collection = db[self.COLLECTION_NAME]

    def ensure_indexes(self):
        self.collection.create_index([('owner', ASCENDING), ('created_at', DESCENDING)])
        self.collection.create_index([('is_published', ASCENDING), ('created_at', DESCENDING)])
        #NOTE: 검색용 텍스트 인덱스 (컬렉션당 1개만 허용)
        self.collection.create_index(
            [('title', TEXT), ('description', TEXT), ('tags', TEXT)],
            name='video_text_search',
            weights={'title': 10, 'tags': 5, 'description': 1}
        )

    def find_by_id(self, video_id: ObjectId) -> Optional[Video]:
        doc = self.collection.find_one({'_id': video_id})
        return Video.from_dict(doc) if doc else None

    def find_by_ids(self, video_ids: List[ObjectId]) -> Dict[ObjectId, Video]:
        if not video_ids:
            return {}
        return {
            doc['_id']: Video.from_dict(doc)
            for doc in self.collection.find({'_id': {'$in': video_ids}})
        }

    def exists(self, video_id: ObjectId) -> bool:
        return self.collection.find_one({'_id': video_id}, {'_id': 1}) is not None

    def insert(self, video: Video) -> ObjectId:
        result = self.collection.insert_one(video.to_dict())
        video.id = result.inserted_id
        return result.inserted_id

    def update_fields(self, video_id: ObjectId, fields: Dict) -> Optional[Video]:
        doc = self.collection.find_one_and_update(
            {'_id': video_id},
            {'$set': {**fields, 'updated_at': datetime.utcnow()}},
            return_document=ReturnDocument.AFTER
        )
        return Video.from_dict(doc) if doc else None

    def increment_views(self, video_id: ObjectId):
        self.collection.update_one({'_id': video_id}, {'$inc': {'views': 1}})

    def delete(self, video_id: ObjectId) -> bool:
        return self.collection.delete_one({'_id': video_id}).deleted_count > 0

    def distinct_categories(self) -> List[str]:
        return sorted(c for c in self.collection.distinct('category', {'is_published': True}) if c)


VIDEO_SUMMARY_FIELDS = (
    '_id', 'title', 'description', 'thumbnail', 'video_file', 'duration',
    'category', 'tags', 'views', 'likes', 'is_published', 'created_at', 'updated_at'
)


def video_projection(prefix: str = None) -> Dict:
    """영상 목록/상세 응답용 $project 스펙 (public_id 등 내부 필드 제외, owner 는 조인으로 채운다)"""
    if prefix:
        return {f'{prefix}.{name}': 1 for name in VIDEO_SUMMARY_FIELDS}
    return {name: 1 for name in VIDEO_SUMMARY_FIELDS}
