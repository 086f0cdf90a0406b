from bson import ObjectId

import common.extensions as extensions
from app.models.mongodb.like import LikeRepository, TargetRef, like_relation_key
from app.models.mongodb.user import public_user_projection
from app.models.mongodb.video import video_projection
from app.services.notification_service import NotificationService
from common.decorator.db_decorators import mongo_transactional
from common.enum.error_code import APIError
from common.enum.notification_type import NotificationType
from common.enum.target_kind import TargetKind
from common.exception.exceptions import BusinessError
from common.query import (
    JoinQuery, JoinSpec, Page, PageLabels, ToggleRelation,
    ensure_visible, paginate, visible_filter
)
from common.utils import to_object_id
from common.utils.logging_utils import get_logger

logger = get_logger('like_service')

NOT_FOUND_BY_KIND = {
    TargetKind.VIDEO: APIError.VIDEO_NOT_FOUND,
    TargetKind.COMMENT: APIError.COMMENT_NOT_FOUND,
    TargetKind.TWEET: APIError.TWEET_NOT_FOUND,
}

LIKE_MESSAGES = {
    TargetKind.VIDEO: "회원님의 영상을 좋아합니다.",
    TargetKind.COMMENT: "회원님의 댓글을 좋아합니다.",
    TargetKind.TWEET: "회원님의 게시물을 좋아합니다.",
}

LIKED_VIDEO_LABELS = PageLabels(docs='likedVideos', total_docs='totalLikes')
LIKED_COMMENT_LABELS = PageLabels(docs='likedComments', total_docs='totalLikes')


class LikeService:

    @staticmethod
    def toggle_like(kind: TargetKind, target_id: str, user_id: str) -> bool:
        target_oid = to_object_id(target_id, f'{kind.value} id')
        user_oid = to_object_id(user_id, 'user id')

        targets = extensions.mongo_db[kind.collection_name]
        target = targets.find_one(
            {'_id': target_oid}, {'owner': 1, 'is_published': 1, 'target_kind': 1, 'target_id': 1}
        )
        if not target:
            raise BusinessError(NOT_FOUND_BY_KIND[kind])

        if kind == TargetKind.VIDEO:
            ensure_visible(target.get('is_published', True), target['owner'], user_oid,
                           forbidden=APIError.VIDEO_PRIVATE)
        elif kind == TargetKind.COMMENT:
            LikeService._ensure_comment_visible(target, user_oid)

        is_liked = LikeService._toggle(user_oid, TargetRef(kind, target_oid))

        logger.info(f"좋아요 토글: user={user_id}, {kind.value}={target_id}, is_liked={is_liked}")

        if is_liked:
            NotificationService.notify(
                recipient_id=target.get('owner'),
                sender_id=user_oid,
                notification_type=NotificationType.LIKE,
                message=LIKE_MESSAGES[kind],
                video_id=target_oid if kind == TargetKind.VIDEO else None,
                comment_id=target_oid if kind == TargetKind.COMMENT else None
            )

        return is_liked

    @staticmethod
    def _ensure_comment_visible(comment: dict, user_oid: ObjectId):
        """비공개 영상에 달린 댓글은 영상과 같은 공개 범위를 따른다"""
        if comment.get('target_kind') != TargetKind.VIDEO.value:
            return

        video = extensions.mongo_db.videos.find_one({'_id': comment['target_id']}, {'owner': 1, 'is_published': 1})
        if not video:
            raise BusinessError(APIError.VIDEO_NOT_FOUND)
        ensure_visible(video.get('is_published', True), video['owner'], user_oid,
                       forbidden=APIError.VIDEO_PRIVATE)

    @staticmethod
    @mongo_transactional
    def _toggle(user_oid: ObjectId, target: TargetRef, session=None) -> bool:
        db = extensions.mongo_db
        relation = ToggleRelation(
            relations=LikeRepository(db).collection,
            targets=db[target.kind.collection_name],
            counter_field='likes'
        )
        return relation.toggle(like_relation_key(user_oid, target), target.id, session=session)

    @staticmethod
    def get_like_status(kind: TargetKind, target_id: str, user_id: str) -> bool:
        """UI 상태 표시용. 대상이 없어도 에러 대신 False"""
        target = TargetRef(kind, to_object_id(target_id, f'{kind.value} id'))
        db = extensions.mongo_db
        relation = ToggleRelation(LikeRepository(db).collection, db[kind.collection_name], 'likes')
        return relation.status(like_relation_key(to_object_id(user_id, 'user id'), target))

    @staticmethod
    def get_liked_videos(user_id: str, page: int, limit: int) -> Page:
        user_oid = to_object_id(user_id, 'user id')

        #NOTE: 삭제된 영상을 가리키는 좋아요는 inner join 으로 목록과 totalLikes 양쪽에서 빠진다
        query = JoinQuery(
            base_filter={'liked_by': user_oid, 'target_kind': TargetKind.VIDEO.value},
            joins=(
                JoinSpec('videos', 'target_id', as_field='video'),
                JoinSpec('users', 'video.owner', as_field='owner'),
            ),
            post_filter=visible_filter('video.is_published', 'video.owner', user_oid),
            projection={
                'created_at': 1,
                **video_projection('video'),
                **public_user_projection('owner'),
            },
            sort=(('created_at', -1),)
        )

        return paginate(LikeRepository(extensions.mongo_db).collection, query, page, limit, LIKED_VIDEO_LABELS)

    @staticmethod
    def get_liked_comments(user_id: str, page: int, limit: int) -> Page:
        user_oid = to_object_id(user_id, 'user id')

        query = JoinQuery(
            base_filter={'liked_by': user_oid, 'target_kind': TargetKind.COMMENT.value},
            joins=(
                JoinSpec('comments', 'target_id', as_field='comment'),
                JoinSpec('users', 'comment.owner', as_field='owner'),
                JoinSpec('videos', 'comment.target_id', as_field='video', preserve_missing=True),
            ),
            #NOTE: 게시물 댓글은 항상 노출, 영상 댓글은 영상이 보이는 경우에만 노출
            post_filter={'$or': [
                {'comment.target_kind': TargetKind.TWEET.value},
                {'$and': [
                    {'comment.target_kind': TargetKind.VIDEO.value},
                    visible_filter('video.is_published', 'video.owner', user_oid),
                ]},
            ]},
            projection={
                'created_at': 1,
                'comment._id': 1,
                'comment.content': 1,
                'comment.likes': 1,
                'comment.target_kind': 1,
                'comment.target_id': 1,
                'comment.created_at': 1,
                **public_user_projection('owner'),
            },
            sort=(('created_at', -1),)
        )

        return paginate(LikeRepository(extensions.mongo_db).collection, query, page, limit, LIKED_COMMENT_LABELS)
