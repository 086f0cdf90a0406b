from typing import List, Optional

from bson import ObjectId

import common.extensions as extensions
from app.dto.notification import NotificationPageDto
from app.models.mongodb.notification import Notification, NotificationRepository
from app.models.mongodb.subscription import SubscriptionRepository
from app.models.mongodb.user import public_user_projection
from common.enum.error_code import APIError
from common.enum.notification_type import NotificationType
from common.exception.exceptions import BusinessError
from common.query import JoinQuery, JoinSpec, PageLabels, paginate
from common.utils import to_object_id
from common.utils.logging_utils import get_logger

logger = get_logger('notification_service')

NOTIFICATION_LABELS = PageLabels(docs='notifications', total_docs='totalNotifications')


def _hide_private_video(doc: dict, recipient_id: ObjectId):
    """비공개로 바뀐 영상은 소유자가 아니면 ID 만 남긴다"""
    video = doc.get('video')
    if not video:
        return

    is_published = video.pop('is_published', True)
    owner = video.pop('owner', None)
    if not is_published and owner != recipient_id:
        doc['video'] = {'_id': video['_id']}


class NotificationService:

    @staticmethod
    def notify(recipient_id: Optional[ObjectId], sender_id: Optional[ObjectId],
               notification_type: NotificationType, message: str,
               video_id: ObjectId = None, comment_id: ObjectId = None) -> Optional[ObjectId]:
        #NOTE: 자기 자신의 행동에는 알림을 만들지 않는다
        if recipient_id is None or recipient_id == sender_id:
            return None

        notification = Notification(
            recipient=recipient_id,
            sender=sender_id,
            type=notification_type,
            message=message,
            video=video_id,
            comment=comment_id
        )
        return NotificationRepository(extensions.mongo_db).insert(notification)

    @staticmethod
    def notify_subscribers(channel_id: ObjectId, video_id: ObjectId, message: str) -> int:
        subscriber_ids = SubscriptionRepository(extensions.mongo_db).find_subscriber_ids(channel_id)
        notifications: List[Notification] = [
            Notification(
                recipient=subscriber_id,
                sender=channel_id,
                type=NotificationType.VIDEO_UPLOAD,
                message=message,
                video=video_id
            )
            for subscriber_id in subscriber_ids
        ]
        count = NotificationRepository(extensions.mongo_db).insert_many(notifications)
        if count:
            logger.info(f"새 영상 알림 {count}건 발송: channel={channel_id}, video={video_id}")
        return count

    @staticmethod
    def get_notifications(user_id: str, page: int, limit: int, is_read: Optional[bool] = None) -> NotificationPageDto:
        recipient_id = to_object_id(user_id, 'user id')
        repo = NotificationRepository(extensions.mongo_db)

        base_filter = {'recipient': recipient_id}
        if is_read is not None:
            base_filter['is_read'] = is_read

        #NOTE: 보낸 사람/영상/댓글이 삭제되어도 알림 자체는 보여야 하므로 outer join
        query = JoinQuery(
            base_filter=base_filter,
            joins=(
                JoinSpec('users', 'sender', preserve_missing=True),
                JoinSpec('videos', 'video', preserve_missing=True),
                JoinSpec('comments', 'comment', preserve_missing=True),
            ),
            projection={
                'type': 1,
                'message': 1,
                'is_read': 1,
                'read_at': 1,
                'created_at': 1,
                **public_user_projection('sender'),
                'video._id': 1,
                'video.title': 1,
                'video.thumbnail': 1,
                'video.duration': 1,
                'video.is_published': 1,
                'video.owner': 1,
                'comment._id': 1,
                'comment.content': 1,
                'comment.created_at': 1,
            },
            sort=(('created_at', -1),)
        )

        result = paginate(repo.collection, query, page, limit, NOTIFICATION_LABELS)
        for doc in result.docs:
            _hide_private_video(doc, recipient_id)

        return NotificationPageDto(
            docs=result.docs,
            total_docs=result.total_docs,
            page=result.page,
            limit=result.limit,
            labels=result.labels,
            unread_count=repo.count_unread(recipient_id)
        )

    @staticmethod
    def _get_own_notification(notification_id: str, user_id: str) -> Notification:
        repo = NotificationRepository(extensions.mongo_db)
        notification = repo.find_by_id(to_object_id(notification_id, 'notification id'))
        if not notification:
            raise BusinessError(APIError.NOTIFICATION_NOT_FOUND)
        if notification.recipient != to_object_id(user_id, 'user id'):
            raise BusinessError(APIError.NOTIFICATION_FORBIDDEN)
        return notification

    @staticmethod
    def mark_as_read(notification_id: str, user_id: str) -> dict:
        notification = NotificationService._get_own_notification(notification_id, user_id)
        updated = NotificationRepository(extensions.mongo_db).mark_read(notification.id)
        return updated.to_dict()

    @staticmethod
    def mark_all_as_read(user_id: str) -> int:
        modified = NotificationRepository(extensions.mongo_db).mark_all_read(to_object_id(user_id, 'user id'))
        logger.info(f"알림 {modified}건 읽음 처리: user={user_id}")
        return modified

    @staticmethod
    def delete_notification(notification_id: str, user_id: str) -> ObjectId:
        notification = NotificationService._get_own_notification(notification_id, user_id)
        NotificationRepository(extensions.mongo_db).delete(notification.id)
        return notification.id
