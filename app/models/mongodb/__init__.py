"""
MongoDB Collections Models
MongoDB 콜렉션용 데이터 모델 및 Repository
"""

from .user import User, UserRepository, USER_PUBLIC_FIELDS, public_user_projection
from .video import Video, VideoRepository, video_projection
from .tweet import Tweet, TweetRepository
from .comment import Comment, CommentRepository
from .like import TargetRef, LikeRepository, like_relation_key
from .playlist import Playlist, PlaylistRepository
from .subscription import SubscriptionRepository, subscription_relation_key
from .notification import Notification, NotificationRepository
from .pending_asset_deletion import PendingAssetDeletion, PendingAssetDeletionRepository

ALL_REPOSITORIES = (
    UserRepository,
    VideoRepository,
    TweetRepository,
    CommentRepository,
    LikeRepository,
    PlaylistRepository,
    SubscriptionRepository,
    NotificationRepository,
    PendingAssetDeletionRepository,
)


def ensure_indexes(db):
    """앱 기동 시 모든 컬렉션 인덱스 생성 (이미 있으면 no-op)"""
    for repository_class in ALL_REPOSITORIES:
        repository_class(db).ensure_indexes()


__all__ = [
    'User',
    'UserRepository',
    'USER_PUBLIC_FIELDS',
    'public_user_projection',
    'Video',
    'VideoRepository',
    'video_projection',
    'Tweet',
    'TweetRepository',
    'Comment',
    'CommentRepository',
    'TargetRef',
    'LikeRepository',
    'like_relation_key',
    'Playlist',
    'PlaylistRepository',
    'SubscriptionRepository',
    'subscription_relation_key',
    'Notification',
    'NotificationRepository',
    'PendingAssetDeletion',
    'PendingAssetDeletionRepository',
    'ensure_indexes'
]
