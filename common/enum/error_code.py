from enum import Enum

class APIError(Enum):
    # 1. 공통 에러
    INTERNAL_SERVER_ERROR = ("C001", "서버 내부 오류가 발생했습니다.", 500)
    INVALID_INPUT_VALUE  = ("C002", "입력값이 올바르지 않습니다.", 400)
    DB_ERROR = ("C003", "DB 작업 처리 중 오류가 발생하였습니다.", 500)
    INVALID_OBJECT_ID = ("C004", "유효하지 않은 ID 형식입니다.", 400)
    DUPLICATE_KEY = ("C005", "이미 존재하는 데이터입니다.", 400)
    RESOURCE_NOT_FOUND = ("C006", "요청한 리소스를 찾을 수 없습니다.", 404)
    FORBIDDEN = ("C007", "접근 권한이 없습니다.", 403)

    # 2. 인증(Auth) 관련
    AUTH_TOKEN_EXPIRED   = ("A001", "토큰이 만료되었습니다.", 401)
    AUTH_INVALID_TOKEN   = ("A002", "유효하지 않은 토큰입니다.", 401)
    AUTH_REQUIRED = ("A003", "로그인이 필요합니다.", 401)
    AUTH_INVALID_CREDENTIALS = ("A004", "아이디 또는 비밀번호가 올바르지 않습니다.", 401)
    AUTH_DUPLICATE_USER = ("A005", "이미 가입된 사용자명 또는 이메일입니다.", 409)
    AUTH_INVALID_REFRESH_TOKEN = ("A006", "리프레시 토큰이 만료되었거나 이미 사용되었습니다.", 401)
    AUTH_INVALID_PASSWORD = ("A007", "현재 비밀번호가 올바르지 않습니다.", 400)

    # 3. 사용자(User) 관련
    USER_NOT_FOUND       = ("U001", "사용자를 찾을 수 없습니다.", 404)
    CHANNEL_NOT_FOUND    = ("U002", "채널을 찾을 수 없습니다.", 404)

    # 4. 영상(Video) 관련
    VIDEO_NOT_FOUND      = ("V001", "영상을 찾을 수 없습니다.", 404)
    VIDEO_FORBIDDEN      = ("V002", "영상에 대한 권한이 없습니다.", 403)
    VIDEO_NOT_PUBLISHED  = ("V003", "공개되지 않은 영상입니다.", 400)
    VIDEO_PRIVATE        = ("V004", "비공개 영상입니다.", 403)

    # 5. 댓글(Comment) 관련
    COMMENT_NOT_FOUND    = ("M001", "댓글을 찾을 수 없습니다.", 404)
    COMMENT_FORBIDDEN    = ("M002", "댓글에 대한 권한이 없습니다.", 403)
    COMMENT_TARGET_INVALID = ("M003", "videoId와 tweetId 중 하나만 지정해야 합니다.", 400)

    # 6. 트윗(Tweet) 관련
    TWEET_NOT_FOUND      = ("T001", "트윗을 찾을 수 없습니다.", 404)
    TWEET_FORBIDDEN      = ("T002", "트윗에 대한 권한이 없습니다.", 403)

    # 7. 플레이리스트(Playlist) 관련
    PLAYLIST_NOT_FOUND   = ("P001", "플레이리스트를 찾을 수 없습니다.", 404)
    PLAYLIST_FORBIDDEN   = ("P002", "플레이리스트에 대한 권한이 없습니다.", 403)
    PLAYLIST_PRIVATE_AUTH_REQUIRED = ("P003", "비공개 플레이리스트입니다. 로그인이 필요합니다.", 401)
    PLAYLIST_VIDEO_DUPLICATE = ("P004", "이미 플레이리스트에 추가된 영상입니다.", 400)
    PLAYLIST_VIDEO_NOT_IN_LIST = ("P005", "플레이리스트에 없는 영상입니다.", 400)
    PLAYLIST_UPDATE_EMPTY = ("P006", "수정할 항목을 하나 이상 입력해야 합니다.", 400)

    # 8. 구독(Subscription) 관련
    SUBSCRIPTION_SELF    = ("S001", "자기 자신은 구독할 수 없습니다.", 400)

    # 9. 알림(Notification) 관련
    NOTIFICATION_NOT_FOUND = ("N001", "알림을 찾을 수 없습니다.", 404)
    NOTIFICATION_FORBIDDEN = ("N002", "알림에 대한 권한이 없습니다.", 403)

    # 10. 대시보드(Dashboard) 관련
    DASHBOARD_FORBIDDEN  = ("D001", "본인 채널의 통계만 조회할 수 있습니다.", 403)

    # 11. 미디어(Asset) 관련
    ASSET_REQUIRED       = ("F001", "필수 파일이 누락되었습니다.", 400)
    ASSET_UPLOAD_FAIL    = ("F002", "파일 업로드에 실패했습니다.", 500)

    def __init__(self, code, message, status):
        self.code = code
        self.message = message
        self.status = status
