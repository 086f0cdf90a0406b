from typing import Dict, Optional

from bson import ObjectId

import common.extensions as extensions
from app.models.mongodb.comment import Comment, CommentRepository
from app.models.mongodb.like import LikeRepository
from app.models.mongodb.tweet import TweetRepository
from app.models.mongodb.user import public_user_projection
from app.models.mongodb.video import VideoRepository
from app.services.notification_service import NotificationService
from common.enum.error_code import APIError
from common.enum.notification_type import NotificationType
from common.enum.target_kind import TargetKind
from common.exception.exceptions import BusinessError
from common.query import JoinQuery, JoinSpec, Page, PageLabels, ensure_visible, paginate
from common.utils import to_object_id
from common.utils.logging_utils import get_logger
from common.utils.object_id import to_object_id_or_none

logger = get_logger('comment_service')

COMMENT_LABELS = PageLabels(docs='comments', total_docs='totalComments')

COMMENT_PROJECTION = {
    'content': 1,
    'likes': 1,
    'target_kind': 1,
    'target_id': 1,
    'parent_comment': 1,
    'created_at': 1,
    'updated_at': 1,
    **public_user_projection('owner'),
}


def comment_with_owner_query(base_filter: Dict) -> JoinQuery:
    return JoinQuery(
        base_filter=base_filter,
        joins=(JoinSpec('users', 'owner'),),
        projection=COMMENT_PROJECTION,
        sort=(('created_at', -1),)
    )


class CommentService:

    @staticmethod
    def _comment_view(comment_oid: ObjectId) -> Dict:
        docs = list(CommentRepository(extensions.mongo_db).collection.aggregate(
            comment_with_owner_query({'_id': comment_oid}).pipeline(limit=1)
        ))
        if not docs:
            raise BusinessError(APIError.COMMENT_NOT_FOUND)
        return docs[0]

    @staticmethod
    def _find_owned_comment(comment_id: str, user_id: str) -> Comment:
        comment = CommentRepository(extensions.mongo_db).find_by_id(to_object_id(comment_id, 'comment id'))
        if not comment:
            raise BusinessError(APIError.COMMENT_NOT_FOUND)
        if str(comment.owner) != str(user_id):
            raise BusinessError(APIError.COMMENT_FORBIDDEN)
        return comment

    @staticmethod
    def get_video_comments(video_id: str, requester_id: Optional[str], page: int, limit: int) -> Page:
        video = VideoRepository(extensions.mongo_db).find_by_id(to_object_id(video_id, 'video id'))
        if not video:
            raise BusinessError(APIError.VIDEO_NOT_FOUND)
        ensure_visible(video.is_published, video.owner, to_object_id_or_none(requester_id),
                       forbidden=APIError.VIDEO_PRIVATE)

        #NOTE: 최상위 댓글만 (답글은 parent_comment 로 연결)
        query = comment_with_owner_query({
            'target_kind': TargetKind.VIDEO.value,
            'target_id': video.id,
            'parent_comment': None
        })
        return paginate(CommentRepository(extensions.mongo_db).collection, query, page, limit, COMMENT_LABELS)

    @staticmethod
    def get_tweet_comments(tweet_id: str, page: int, limit: int) -> Page:
        tweet_oid = to_object_id(tweet_id, 'tweet id')
        if not TweetRepository(extensions.mongo_db).exists(tweet_oid):
            raise BusinessError(APIError.TWEET_NOT_FOUND)

        query = comment_with_owner_query({
            'target_kind': TargetKind.TWEET.value,
            'target_id': tweet_oid,
            'parent_comment': None
        })
        return paginate(CommentRepository(extensions.mongo_db).collection, query, page, limit, COMMENT_LABELS)

    @staticmethod
    def add_comment(user_id: str, content: str, video_id: str = None, tweet_id: str = None,
                    parent_comment_id: str = None) -> Dict:
        if bool(video_id) == bool(tweet_id):
            raise BusinessError(APIError.COMMENT_TARGET_INVALID)

        owner_oid = to_object_id(user_id, 'user id')
        db = extensions.mongo_db

        if video_id:
            kind = TargetKind.VIDEO
            target = VideoRepository(db).find_by_id(to_object_id(video_id, 'video id'))
            if not target:
                raise BusinessError(APIError.VIDEO_NOT_FOUND)
            if not target.is_published:
                raise BusinessError(APIError.VIDEO_NOT_PUBLISHED)
        else:
            kind = TargetKind.TWEET
            target = TweetRepository(db).find_by_id(to_object_id(tweet_id, 'tweet id'))
            if not target:
                raise BusinessError(APIError.TWEET_NOT_FOUND)

        parent_oid = None
        if parent_comment_id:
            parent = CommentRepository(db).find_by_id(to_object_id(parent_comment_id, 'comment id'))
            if not parent or parent.target_id != target.id:
                raise BusinessError(APIError.COMMENT_NOT_FOUND, "답글을 달 댓글을 찾을 수 없습니다.")
            parent_oid = parent.id

        comment = Comment(
            owner=owner_oid,
            content=content.strip(),
            target_kind=kind,
            target_id=target.id,
            parent_comment=parent_oid
        )
        CommentRepository(db).insert(comment)

        logger.info(f"댓글 작성: comment={comment.id}, {kind.value}={target.id}, owner={user_id}")

        NotificationService.notify(
            recipient_id=target.owner,
            sender_id=owner_oid,
            notification_type=NotificationType.COMMENT,
            message="회원님의 게시물에 댓글을 남겼습니다.",
            video_id=target.id if kind == TargetKind.VIDEO else None,
            comment_id=comment.id
        )

        return CommentService._comment_view(comment.id)

    @staticmethod
    def update_comment(comment_id: str, user_id: str, content: str) -> Dict:
        comment = CommentService._find_owned_comment(comment_id, user_id)
        CommentRepository(extensions.mongo_db).update_content(comment.id, content.strip())
        return CommentService._comment_view(comment.id)

    @staticmethod
    def delete_comment(comment_id: str, user_id: str) -> ObjectId:
        comment = CommentService._find_owned_comment(comment_id, user_id)
        db = extensions.mongo_db
        repo = CommentRepository(db)

        reply_ids = repo.find_reply_ids(comment.id)
        removed_ids = [comment.id] + reply_ids

        LikeRepository(db).delete_by_targets(TargetKind.COMMENT, removed_ids)
        repo.delete_many_by_ids(removed_ids)

        logger.info(f"댓글 삭제: comment={comment.id}, replies={len(reply_ids)}")
        return comment.id
