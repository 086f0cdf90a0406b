from datetime import datetime, timedelta
from typing import Dict, List, Optional

from bson import ObjectId

import common.extensions as extensions
from app.dto.dashboard import (
    ChannelStatsDto, ChannelTotalsDto, GrowthMetricsDto, RecentPeriodDto,
    AdditionalMetricsDto, MonthlyViewsDto, MonthlySubscribersDto
)
from app.models.mongodb.comment import CommentRepository
from app.models.mongodb.like import LikeRepository
from app.models.mongodb.subscription import SubscriptionRepository
from app.models.mongodb.user import UserRepository
from app.models.mongodb.video import VideoRepository
from app.services.video_service import VIDEO_LABELS, VIDEO_SORT_KEYS, video_with_owner_query
from common.enum.error_code import APIError
from common.enum.target_kind import TargetKind
from common.exception.exceptions import BusinessError
from common.query import JoinQuery, JoinSpec, Page, paginate, resolve_sort
from common.utils import to_object_id
from common.utils.object_id import to_object_id_or_none

PERIOD_DAYS = 30


def growth_percentage(current, previous) -> float:
    """직전 기간 대비 증감률(%). 직전 기간 값이 0이면 0으로 정의한다."""
    if not previous:
        return 0.0
    return round((current - previous) / previous * 100, 2)


def engagement_rate(total_likes, total_views) -> float:
    if not total_views:
        return 0.0
    return round(total_likes / total_views * 100, 2)


def average_per(total, count) -> float:
    if not count:
        return 0.0
    return round(total / count, 2)


def month_key(bucket: Dict) -> str:
    return f"{bucket['year']:04d}-{bucket['month']:02d}"


class DashboardService:

    @staticmethod
    def _count(collection, query: JoinQuery) -> int:
        counted = list(collection.aggregate(query.count_pipeline()))
        return counted[0]['total'] if counted else 0

    @staticmethod
    def _sum_views(video_filter: Dict) -> int:
        result = list(VideoRepository(extensions.mongo_db).collection.aggregate([
            {'$match': video_filter},
            {'$group': {'_id': None, 'total_views': {'$sum': '$views'}}}
        ]))
        return result[0]['total_views'] if result else 0

    @staticmethod
    def _monthly_views(channel_oid: ObjectId) -> List[MonthlyViewsDto]:
        buckets = VideoRepository(extensions.mongo_db).collection.aggregate([
            {'$match': {'owner': channel_oid, 'is_published': True}},
            {'$group': {
                '_id': {'year': {'$year': '$created_at'}, 'month': {'$month': '$created_at'}},
                'total_views': {'$sum': '$views'},
                'video_count': {'$sum': 1}
            }}
        ])
        series = [
            MonthlyViewsDto(month=month_key(b['_id']), total_views=b['total_views'], video_count=b['video_count'])
            for b in buckets
        ]
        return sorted(series, key=lambda item: item.month)

    @staticmethod
    def _monthly_subscribers(channel_oid: ObjectId) -> List[MonthlySubscribersDto]:
        buckets = SubscriptionRepository(extensions.mongo_db).collection.aggregate([
            {'$match': {'channel': channel_oid}},
            {'$group': {
                '_id': {'year': {'$year': '$created_at'}, 'month': {'$month': '$created_at'}},
                'new_subscribers': {'$sum': 1}
            }}
        ])
        series = [
            MonthlySubscribersDto(month=month_key(b['_id']), new_subscribers=b['new_subscribers'])
            for b in buckets
        ]
        return sorted(series, key=lambda item: item.month)

    @staticmethod
    def get_channel_stats(channel_id: str, requester_id: str, now: Optional[datetime] = None) -> ChannelStatsDto:
        channel_oid = to_object_id(channel_id, 'channel id')
        db = extensions.mongo_db

        if not UserRepository(db).exists(channel_oid):
            raise BusinessError(APIError.CHANNEL_NOT_FOUND)
        if str(channel_oid) != str(requester_id):
            raise BusinessError(APIError.DASHBOARD_FORBIDDEN)

        videos = VideoRepository(db).collection
        subscriptions = SubscriptionRepository(db).collection
        published = {'owner': channel_oid, 'is_published': True}

        total_videos = videos.count_documents(published)
        total_views = DashboardService._sum_views(published)
        total_subscribers = subscriptions.count_documents({'channel': channel_oid})

        total_likes = DashboardService._count(LikeRepository(db).collection, JoinQuery(
            base_filter={'target_kind': TargetKind.VIDEO.value},
            joins=(JoinSpec('videos', 'target_id', as_field='video'),),
            post_filter={'video.owner': channel_oid}
        ))
        total_comments = DashboardService._count(CommentRepository(db).collection, JoinQuery(
            base_filter={'target_kind': TargetKind.VIDEO.value},
            joins=(JoinSpec('videos', 'target_id', as_field='video'),),
            post_filter={'video.owner': channel_oid}
        ))

        now = now or datetime.utcnow()
        period_start = now - timedelta(days=PERIOD_DAYS)
        previous_start = now - timedelta(days=PERIOD_DAYS * 2)

        #NOTE: 조회수는 시점 기록이 없으므로 "기간 내 업로드된 영상의 조회수"로 비교한다
        recent_views = DashboardService._sum_views({**published, 'created_at': {'$gte': period_start}})
        previous_views = DashboardService._sum_views(
            {**published, 'created_at': {'$gte': previous_start, '$lt': period_start}}
        )
        recent_subscribers = subscriptions.count_documents(
            {'channel': channel_oid, 'created_at': {'$gte': period_start}}
        )
        previous_subscribers = subscriptions.count_documents(
            {'channel': channel_oid, 'created_at': {'$gte': previous_start, '$lt': period_start}}
        )

        most_popular = videos.find_one(
            published,
            {'title': 1, 'thumbnail': 1, 'views': 1, 'likes': 1, 'created_at': 1},
            sort=[('views', -1), ('_id', -1)]
        )

        return ChannelStatsDto(
            channel_stats=ChannelTotalsDto(
                total_videos=total_videos,
                total_views=total_views,
                total_likes=total_likes,
                total_subscribers=total_subscribers,
                total_comments=total_comments
            ),
            growth_metrics=GrowthMetricsDto(
                views_growth=DashboardService._monthly_views(channel_oid),
                subscribers_growth=DashboardService._monthly_subscribers(channel_oid),
                last_30_days=RecentPeriodDto(
                    views=recent_views,
                    views_growth_percentage=growth_percentage(recent_views, previous_views),
                    new_subscribers=recent_subscribers,
                    subscriber_growth_percentage=growth_percentage(recent_subscribers, previous_subscribers)
                )
            ),
            additional_metrics=AdditionalMetricsDto(
                average_views_per_video=average_per(total_views, total_videos),
                engagement_rate=engagement_rate(total_likes, total_views),
                most_popular_video=most_popular
            )
        )

    @staticmethod
    def get_channel_videos(channel_id: str, requester_id: Optional[str], page: int, limit: int,
                           sort_by: str = None, sort_order: str = 'desc') -> Page:
        channel_oid = to_object_id(channel_id, 'channel id')
        if not UserRepository(extensions.mongo_db).exists(channel_oid):
            raise BusinessError(APIError.CHANNEL_NOT_FOUND)

        video_filter = {'owner': channel_oid}
        if to_object_id_or_none(requester_id) != channel_oid:
            video_filter['is_published'] = True

        sort = resolve_sort(sort_by, sort_order, VIDEO_SORT_KEYS, 'createdAt')

        return paginate(
            VideoRepository(extensions.mongo_db).collection,
            video_with_owner_query(video_filter, sort),
            page, limit, VIDEO_LABELS
        )
