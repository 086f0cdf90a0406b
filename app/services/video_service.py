import re
from typing import Dict, List, Optional

from bson import ObjectId
from pymongo.errors import PyMongoError

import common.extensions as extensions
from app.models.mongodb.comment import CommentRepository
from app.models.mongodb.like import LikeRepository
from app.models.mongodb.notification import NotificationRepository
from app.models.mongodb.playlist import PlaylistRepository
from app.models.mongodb.user import public_user_projection
from app.models.mongodb.video import Video, VideoRepository, video_projection
from app.services.asset_service import AssetService
from app.services.like_service import LikeService
from app.services.notification_service import NotificationService
from common.enum.error_code import APIError
from common.enum.target_kind import TargetKind
from common.exception.exceptions import BusinessError
from common.query import JoinQuery, JoinSpec, Page, PageLabels, ensure_visible, paginate, resolve_sort
from common.utils import to_object_id
from common.utils.logging_utils import get_logger
from common.utils.object_id import to_object_id_or_none

logger = get_logger('video_service')

VIDEO_LABELS = PageLabels(docs='videos', total_docs='totalVideos')

VIDEO_SORT_KEYS = {
    'createdAt': 'created_at',
    'views': 'views',
    'likes': 'likes',
    'duration': 'duration',
    'title': 'title',
}


def split_tags(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [tag.strip() for tag in raw.split(',') if tag.strip()]


def video_with_owner_query(base_filter: Dict, sort=(('created_at', -1),)) -> JoinQuery:
    return JoinQuery(
        base_filter=base_filter,
        joins=(JoinSpec('users', 'owner'),),
        projection={**video_projection(), **public_user_projection('owner')},
        sort=sort
    )


class VideoService:

    @staticmethod
    def _find_owned_video(video_id: str, user_id: str) -> Video:
        video = VideoRepository(extensions.mongo_db).find_by_id(to_object_id(video_id, 'video id'))
        if not video:
            raise BusinessError(APIError.VIDEO_NOT_FOUND)
        if str(video.owner) != str(user_id):
            raise BusinessError(APIError.VIDEO_FORBIDDEN)
        return video

    @staticmethod
    def _video_view(video_oid: ObjectId) -> Dict:
        docs = list(VideoRepository(extensions.mongo_db).collection.aggregate(
            video_with_owner_query({'_id': video_oid}).pipeline(limit=1)
        ))
        if not docs:
            raise BusinessError(APIError.VIDEO_NOT_FOUND)
        return docs[0]

    @staticmethod
    def get_all_videos(page: int, limit: int, query: str = None, category: str = None,
                       tags: str = None, owner_id: str = None,
                       sort_by: str = None, sort_type: str = 'desc') -> Page:
        base_filter = {'is_published': True}

        if category:
            base_filter['category'] = category
        if tags:
            base_filter['tags'] = {'$regex': re.escape(tags.strip()), '$options': 'i'}
        if owner_id:
            base_filter['owner'] = to_object_id(owner_id, 'user id')
        if query:
            pattern = {'$regex': re.escape(query.strip()), '$options': 'i'}
            base_filter['$or'] = [{'title': pattern}, {'description': pattern}]

        sort = resolve_sort(sort_by, sort_type, VIDEO_SORT_KEYS, 'createdAt')

        return paginate(
            VideoRepository(extensions.mongo_db).collection,
            video_with_owner_query(base_filter, sort),
            page, limit, VIDEO_LABELS
        )

    @staticmethod
    def get_categories() -> List[str]:
        return VideoRepository(extensions.mongo_db).distinct_categories()

    @staticmethod
    def get_video_by_id(video_id: str, requester_id: Optional[str]) -> Dict:
        video_oid = to_object_id(video_id, 'video id')
        repo = VideoRepository(extensions.mongo_db)

        video = repo.find_by_id(video_oid)
        if not video:
            raise BusinessError(APIError.VIDEO_NOT_FOUND)

        requester_oid = to_object_id_or_none(requester_id)
        ensure_visible(video.is_published, video.owner, requester_oid, forbidden=APIError.VIDEO_PRIVATE)

        repo.increment_views(video_oid)

        view = VideoService._video_view(video_oid)
        view['is_liked'] = bool(requester_oid) and LikeService.get_like_status(TargetKind.VIDEO, video_id, requester_id)
        return view

    @staticmethod
    def upload_video(user_id: str, title: str, category: str, video_file, thumbnail=None,
                     description: str = '', tags: str = None, is_published: bool = True) -> Dict:
        owner_oid = to_object_id(user_id, 'user id')

        if video_file is None or not video_file.filename:
            raise BusinessError(APIError.ASSET_REQUIRED, "영상 파일은 필수입니다.")

        video_asset = AssetService.upload(video_file, resource_type='video')
        thumbnail_asset = None
        try:
            thumbnail_asset = AssetService.upload(thumbnail, resource_type='image')

            video = Video(
                owner=owner_oid,
                title=title.strip(),
                description=(description or '').strip(),
                category=category.strip(),
                tags=split_tags(tags),
                duration=video_asset.duration or 0,
                video_file=video_asset.url,
                video_file_public_id=video_asset.public_id,
                thumbnail=thumbnail_asset.url if thumbnail_asset else None,
                thumbnail_public_id=thumbnail_asset.public_id if thumbnail_asset else None,
                is_published=is_published
            )
            VideoRepository(extensions.mongo_db).insert(video)
        except (BusinessError, PyMongoError):
            #NOTE: DB 저장 실패 시 이미 올라간 에셋 정리
            AssetService.delete_or_defer(video_asset.public_id, 'video')
            if thumbnail_asset:
                AssetService.delete_or_defer(thumbnail_asset.public_id, 'image')
            raise

        logger.info(f"영상 업로드 완료: video={video.id}, owner={user_id}")

        if video.is_published:
            NotificationService.notify_subscribers(owner_oid, video.id, f"새 영상이 업로드되었습니다: {video.title}")

        return VideoService._video_view(video.id)

    @staticmethod
    def update_video(video_id: str, user_id: str, title: str = None,
                     description: str = None, thumbnail=None) -> Dict:
        video = VideoService._find_owned_video(video_id, user_id)

        fields = {}
        if title is not None:
            fields['title'] = title.strip()
        if description is not None:
            fields['description'] = description.strip()

        thumbnail_asset = AssetService.upload(thumbnail, resource_type='image')
        if thumbnail_asset:
            fields['thumbnail'] = thumbnail_asset.url
            fields['thumbnail_public_id'] = thumbnail_asset.public_id

        if not fields:
            raise BusinessError(APIError.INVALID_INPUT_VALUE, "수정할 항목을 하나 이상 입력해야 합니다.")

        VideoRepository(extensions.mongo_db).update_fields(video.id, fields)

        if thumbnail_asset and video.thumbnail_public_id:
            AssetService.delete_or_defer(video.thumbnail_public_id, 'image')

        return VideoService._video_view(video.id)

    @staticmethod
    def toggle_publish_status(video_id: str, user_id: str) -> Dict:
        video = VideoService._find_owned_video(video_id, user_id)
        VideoRepository(extensions.mongo_db).update_fields(video.id, {'is_published': not video.is_published})
        return VideoService._video_view(video.id)

    @staticmethod
    def delete_video(video_id: str, user_id: str) -> ObjectId:
        """
        DB 레코드(및 관련 좋아요/댓글/플레이리스트 항목/알림)를 먼저 지우고 원격 에셋을 지운다.
        에셋 삭제 실패는 pending_asset_deletions 에 남겨 AssetCleanupJob 이 재시도한다.
        """
        video = VideoService._find_owned_video(video_id, user_id)
        db = extensions.mongo_db

        comment_ids = CommentRepository(db).find_ids_by_target(TargetKind.VIDEO, video.id)
        likes = LikeRepository(db)
        likes.delete_by_targets(TargetKind.COMMENT, comment_ids)
        CommentRepository(db).delete_many_by_ids(comment_ids)
        likes.delete_by_targets(TargetKind.VIDEO, [video.id])
        PlaylistRepository(db).pull_video_everywhere(video.id)
        NotificationRepository(db).delete_by_video(video.id)
        VideoRepository(db).delete(video.id)

        logger.info(f"영상 삭제: video={video.id}, comments={len(comment_ids)}")

        AssetService.delete_or_defer(video.video_file_public_id, 'video')
        AssetService.delete_or_defer(video.thumbnail_public_id, 'image')

        return video.id
