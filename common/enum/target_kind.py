from enum import Enum


class TargetKind(str, Enum):
    """좋아요/댓글이 가리킬 수 있는 대상 종류"""
    VIDEO = 'video'
    COMMENT = 'comment'
    TWEET = 'tweet'

    @property
    def collection_name(self):
        return {
            TargetKind.VIDEO: 'videos',
            TargetKind.COMMENT: 'comments',
            TargetKind.TWEET: 'tweets',
        }[self]
