from bson import ObjectId

import common.extensions as extensions
from app.models.mongodb.subscription import SubscriptionRepository, subscription_relation_key
from app.models.mongodb.user import UserRepository, public_user_projection
from app.services.notification_service import NotificationService
from common.decorator.db_decorators import mongo_transactional
from common.enum.error_code import APIError
from common.enum.notification_type import NotificationType
from common.exception.exceptions import BusinessError
from common.query import JoinQuery, JoinSpec, Page, PageLabels, ToggleRelation, paginate
from common.utils import to_object_id
from common.utils.logging_utils import get_logger

logger = get_logger('subscription_service')

SUBSCRIBER_LABELS = PageLabels(docs='subscribers', total_docs='totalSubscribers')
SUBSCRIBED_CHANNEL_LABELS = PageLabels(docs='subscribedChannels', total_docs='totalSubscribedChannels')


class SubscriptionService:

    @staticmethod
    def _relation() -> ToggleRelation:
        db = extensions.mongo_db
        return ToggleRelation(
            relations=SubscriptionRepository(db).collection,
            targets=UserRepository(db).collection,
            counter_field='subscriber_count'
        )

    @staticmethod
    def toggle_subscription(channel_id: str, user_id: str) -> bool:
        channel_oid = to_object_id(channel_id, 'channel id')
        subscriber_oid = to_object_id(user_id, 'user id')

        if channel_oid == subscriber_oid:
            raise BusinessError(APIError.SUBSCRIPTION_SELF)

        channel = UserRepository(extensions.mongo_db).find_by_id(channel_oid)
        if not channel:
            raise BusinessError(APIError.CHANNEL_NOT_FOUND)

        is_subscribed = SubscriptionService._toggle(subscriber_oid, channel_oid)

        logger.info(f"구독 토글: subscriber={user_id}, channel={channel_id}, is_subscribed={is_subscribed}")

        if is_subscribed:
            NotificationService.notify(
                recipient_id=channel_oid,
                sender_id=subscriber_oid,
                notification_type=NotificationType.SUBSCRIPTION,
                message="회원님의 채널을 구독했습니다."
            )

        return is_subscribed

    @staticmethod
    @mongo_transactional
    def _toggle(subscriber_oid: ObjectId, channel_oid: ObjectId, session=None) -> bool:
        return SubscriptionService._relation().toggle(
            subscription_relation_key(subscriber_oid, channel_oid), channel_oid, session=session
        )

    @staticmethod
    def get_subscription_status(channel_id: str, user_id: str) -> bool:
        key = subscription_relation_key(
            to_object_id(user_id, 'user id'),
            to_object_id(channel_id, 'channel id')
        )
        return SubscriptionService._relation().status(key)

    @staticmethod
    def get_channel_subscribers(channel_id: str, page: int, limit: int) -> Page:
        channel_oid = to_object_id(channel_id, 'channel id')
        if not UserRepository(extensions.mongo_db).exists(channel_oid):
            raise BusinessError(APIError.CHANNEL_NOT_FOUND)

        query = JoinQuery(
            base_filter={'channel': channel_oid},
            joins=(JoinSpec('users', 'subscriber', as_field='user'),),
            projection={
                'created_at': 1,
                **public_user_projection('user'),
                'user.subscriber_count': 1,
            },
            sort=(('created_at', -1),)
        )

        return paginate(SubscriptionRepository(extensions.mongo_db).collection, query, page, limit, SUBSCRIBER_LABELS)

    @staticmethod
    def get_subscribed_channels(user_id: str, page: int, limit: int) -> Page:
        subscriber_oid = to_object_id(user_id, 'user id')

        query = JoinQuery(
            base_filter={'subscriber': subscriber_oid},
            joins=(JoinSpec('users', 'channel', as_field='user'),),
            projection={
                'created_at': 1,
                **public_user_projection('user'),
                'user.subscriber_count': 1,
            },
            sort=(('created_at', -1),)
        )

        return paginate(
            SubscriptionRepository(extensions.mongo_db).collection, query, page, limit, SUBSCRIBED_CHANNEL_LABELS
        )
