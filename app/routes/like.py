from flask import g
from flask_smorest import Blueprint

from app.dto.common import ApiResponse
from app.schemas.common_schema import PaginationQuerySchema
from app.schemas.like import (
    ToggleLikeResponseSchema, LikeStatusResponseSchema,
    LikedVideoPageResponseSchema, LikedCommentPageResponseSchema
)
from app.services.like_service import LikeService
from common.decorator.auth_decorators import login_required
from common.decorator.rate_limit_decorators import rate_limited
from common.enum.target_kind import TargetKind

like_blueprint = Blueprint(
    'likes',
    __name__,
    url_prefix='/api/v1/likes',
    description='좋아요 API'
)

#NOTE: /toggle/v|c|t/<id> 경로 약어
KIND_BY_PATH = {
    'v': TargetKind.VIDEO,
    'c': TargetKind.COMMENT,
    't': TargetKind.TWEET,
}


@like_blueprint.route('/toggle/<any(v, c, t):kind>/<string:target_id>', methods=['POST'])
@rate_limited('LIKE_RATE_LIMIT')
@login_required
@like_blueprint.response(200, ToggleLikeResponseSchema)
@like_blueprint.doc(security=[{"BearerAuth": []}])
def toggle_like(kind, target_id):
    target_kind = KIND_BY_PATH[kind]
    is_liked = LikeService.toggle_like(target_kind, target_id, g.user_id)
    message = "좋아요를 눌렀습니다." if is_liked else "좋아요를 취소했습니다."
    return ApiResponse(200, {'is_liked': is_liked}, message)


@like_blueprint.route('/status/<any(v, c, t):kind>/<string:target_id>', methods=['GET'])
@login_required
@like_blueprint.response(200, LikeStatusResponseSchema)
@like_blueprint.doc(security=[{"BearerAuth": []}])
def like_status(kind, target_id):
    is_liked = LikeService.get_like_status(KIND_BY_PATH[kind], target_id, g.user_id)
    return ApiResponse(200, {'is_liked': is_liked}, "좋아요 상태입니다.")


@like_blueprint.route('/videos', methods=['GET'])
@login_required
@like_blueprint.arguments(PaginationQuerySchema, location='query')
@like_blueprint.response(200, LikedVideoPageResponseSchema)
@like_blueprint.doc(security=[{"BearerAuth": []}])
def liked_videos(args):
    page = LikeService.get_liked_videos(g.user_id, args['page'], args['limit'])
    return ApiResponse(200, page, "좋아요한 영상 목록입니다.")


@like_blueprint.route('/comments', methods=['GET'])
@login_required
@like_blueprint.arguments(PaginationQuerySchema, location='query')
@like_blueprint.response(200, LikedCommentPageResponseSchema)
@like_blueprint.doc(security=[{"BearerAuth": []}])
def liked_comments(args):
    page = LikeService.get_liked_comments(g.user_id, args['page'], args['limit'])
    return ApiResponse(200, page, "좋아요한 댓글 목록입니다.")
