from marshmallow import fields, validate

from app.schemas.common_schema import CamelCaseSchema, ApiResponseSchema, PaginationQuerySchema, ObjectIdField
from app.schemas.video import SORT_DIRECTIONS, VideoPageSchema
from app.services.video_service import VIDEO_SORT_KEYS


class ChannelVideosQuerySchema(PaginationQuerySchema):
    sort_by = fields.String(load_default='createdAt', validate=validate.OneOf(list(VIDEO_SORT_KEYS)))
    sort_order = fields.String(load_default='desc', validate=validate.OneOf(SORT_DIRECTIONS))


class MonthlyViewsSchema(CamelCaseSchema):
    month = fields.String()
    total_views = fields.Integer()
    video_count = fields.Integer()


class MonthlySubscribersSchema(CamelCaseSchema):
    month = fields.String()
    new_subscribers = fields.Integer()


class ChannelTotalsSchema(CamelCaseSchema):
    total_videos = fields.Integer()
    total_views = fields.Integer()
    total_likes = fields.Integer()
    total_subscribers = fields.Integer()
    total_comments = fields.Integer()


class RecentPeriodSchema(CamelCaseSchema):
    views = fields.Integer()
    views_growth_percentage = fields.Float()
    new_subscribers = fields.Integer()
    subscriber_growth_percentage = fields.Float()


class GrowthMetricsSchema(CamelCaseSchema):
    views_growth = fields.List(fields.Nested(MonthlyViewsSchema))
    subscribers_growth = fields.List(fields.Nested(MonthlySubscribersSchema))
    last_30_days = fields.Nested(RecentPeriodSchema, data_key='last30Days')


class PopularVideoSchema(CamelCaseSchema):
    id = ObjectIdField(attribute='_id')
    title = fields.String()
    thumbnail = fields.String(allow_none=True)
    views = fields.Integer()
    likes = fields.Integer()
    created_at = fields.DateTime()


class AdditionalMetricsSchema(CamelCaseSchema):
    average_views_per_video = fields.Float()
    engagement_rate = fields.Float()
    most_popular_video = fields.Nested(PopularVideoSchema, allow_none=True)


class ChannelStatsSchema(CamelCaseSchema):
    channel_stats = fields.Nested(ChannelTotalsSchema)
    growth_metrics = fields.Nested(GrowthMetricsSchema)
    additional_metrics = fields.Nested(AdditionalMetricsSchema)


class ChannelStatsResponseSchema(ApiResponseSchema):
    data = fields.Nested(ChannelStatsSchema)


class ChannelVideosResponseSchema(ApiResponseSchema):
    data = fields.Nested(VideoPageSchema)
