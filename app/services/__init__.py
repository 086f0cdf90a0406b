"""
Services package
비즈니스 로직을 처리하는 서비스 레이어

- user_service: 회원 인증 / 계정 / 채널 프로필
- video_service, tweet_service, comment_service: 콘텐츠 CRUD
- like_service, subscription_service: 관계 토글
- playlist_service, search_service, dashboard_service, notification_service
- asset_service: 원격 에셋 업로드/삭제
"""

__all__ = []
