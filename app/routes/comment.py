from flask import g
from flask_smorest import Blueprint

from app.dto.common import ApiResponse
from app.schemas.comment import (
    AddCommentRequestSchema, UpdateCommentRequestSchema,
    CommentResponseSchema, CommentPageResponseSchema, DeletedCommentResponseSchema
)
from app.schemas.common_schema import PaginationQuerySchema
from app.services.comment_service import CommentService
from common.decorator.auth_decorators import login_required, login_optional
from common.decorator.rate_limit_decorators import rate_limited

comment_blueprint = Blueprint(
    'comments',
    __name__,
    url_prefix='/api/v1/comments',
    description='댓글 API'
)


@comment_blueprint.route('/<string:video_id>', methods=['GET'])
@login_optional
@comment_blueprint.arguments(PaginationQuerySchema, location='query')
@comment_blueprint.response(200, CommentPageResponseSchema)
@comment_blueprint.doc(security=[{"BearerAuth": []}])
def get_video_comments(args, video_id):
    page = CommentService.get_video_comments(video_id, g.user_id, args['page'], args['limit'])
    return ApiResponse(200, page, "댓글 목록입니다.")


@comment_blueprint.route('/t/<string:tweet_id>', methods=['GET'])
@comment_blueprint.arguments(PaginationQuerySchema, location='query')
@comment_blueprint.response(200, CommentPageResponseSchema)
def get_tweet_comments(args, tweet_id):
    page = CommentService.get_tweet_comments(tweet_id, args['page'], args['limit'])
    return ApiResponse(200, page, "댓글 목록입니다.")


@comment_blueprint.route('', methods=['POST'])
@rate_limited('COMMENT_RATE_LIMIT')
@login_required
@comment_blueprint.arguments(AddCommentRequestSchema)
@comment_blueprint.response(201, CommentResponseSchema)
@comment_blueprint.doc(security=[{"BearerAuth": []}])
def add_comment(data):
    comment = CommentService.add_comment(
        user_id=g.user_id,
        content=data['content'],
        video_id=data.get('video_id'),
        tweet_id=data.get('tweet_id'),
        parent_comment_id=data.get('parent_comment_id')
    )
    return ApiResponse(201, comment, "댓글이 등록되었습니다.")


@comment_blueprint.route('/<string:comment_id>', methods=['PATCH'])
@login_required
@comment_blueprint.arguments(UpdateCommentRequestSchema)
@comment_blueprint.response(200, CommentResponseSchema)
@comment_blueprint.doc(security=[{"BearerAuth": []}])
def update_comment(data, comment_id):
    comment = CommentService.update_comment(comment_id, g.user_id, data['content'])
    return ApiResponse(200, comment, "댓글이 수정되었습니다.")


@comment_blueprint.route('/<string:comment_id>', methods=['DELETE'])
@login_required
@comment_blueprint.response(200, DeletedCommentResponseSchema)
@comment_blueprint.doc(security=[{"BearerAuth": []}])
def delete_comment(comment_id):
    deleted_id = CommentService.delete_comment(comment_id, g.user_id)
    return ApiResponse(200, {'deleted_comment_id': deleted_id}, "댓글이 삭제되었습니다.")
