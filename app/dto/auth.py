from dataclasses import dataclass
from typing import Dict, Optional


@dataclass
class AuthTokenDto:
    access_token: str
    refresh_token: str
    user: Optional[Dict] = None


@dataclass
class ChannelProfileDto:
    id: object
    username: str
    full_name: str
    email: str
    avatar: Optional[str]
    cover_image: Optional[str]
    subscribers_count: int
    channels_subscribed_to_count: int
    is_subscribed: bool
    created_at: object  # datetime 객체 (Schema가 직렬화)
