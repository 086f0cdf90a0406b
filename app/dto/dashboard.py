from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass
class MonthlyViewsDto:
    month: str  # YYYY-MM
    total_views: int
    video_count: int


@dataclass
class MonthlySubscribersDto:
    month: str  # YYYY-MM
    new_subscribers: int


@dataclass
class ChannelTotalsDto:
    total_videos: int
    total_views: int
    total_likes: int
    total_subscribers: int
    total_comments: int


@dataclass
class RecentPeriodDto:
    views: int
    views_growth_percentage: float
    new_subscribers: int
    subscriber_growth_percentage: float


@dataclass
class GrowthMetricsDto:
    views_growth: List[MonthlyViewsDto]
    subscribers_growth: List[MonthlySubscribersDto]
    last_30_days: RecentPeriodDto


@dataclass
class AdditionalMetricsDto:
    average_views_per_video: float
    engagement_rate: float
    most_popular_video: Optional[Dict]


@dataclass
class ChannelStatsDto:
    channel_stats: ChannelTotalsDto
    growth_metrics: GrowthMetricsDto
    additional_metrics: AdditionalMetricsDto
