from enum import Enum


class NotificationType(str, Enum):
    LIKE = 'LIKE'
    COMMENT = 'COMMENT'
    SUBSCRIPTION = 'SUBSCRIPTION'
    VIDEO_UPLOAD = 'VIDEO_UPLOAD'
