from flask import g
from flask_smorest import Blueprint

from app.dto.common import ApiResponse
from app.schemas.common_schema import PaginationQuerySchema
from app.schemas.tweet import (
    CreateTweetFormSchema, TweetImageFileSchema, UpdateTweetRequestSchema,
    TweetResponseSchema, TweetPageResponseSchema, DeletedTweetResponseSchema
)
from app.services.tweet_service import TweetService
from common.decorator.auth_decorators import login_required
from common.decorator.rate_limit_decorators import rate_limited

tweet_blueprint = Blueprint(
    'tweets',
    __name__,
    url_prefix='/api/v1/tweets',
    description='포토 게시물(트윗) API'
)


@tweet_blueprint.route('', methods=['GET'])
@tweet_blueprint.arguments(PaginationQuerySchema, location='query')
@tweet_blueprint.response(200, TweetPageResponseSchema)
def get_feed(args):
    return ApiResponse(200, TweetService.get_feed(args['page'], args['limit']), "피드입니다.")


@tweet_blueprint.route('/user/<string:user_id>', methods=['GET'])
@tweet_blueprint.arguments(PaginationQuerySchema, location='query')
@tweet_blueprint.response(200, TweetPageResponseSchema)
def get_user_tweets(args, user_id):
    page = TweetService.get_user_tweets(user_id, args['page'], args['limit'])
    return ApiResponse(200, page, "사용자 게시물 목록입니다.")


@tweet_blueprint.route('/<string:tweet_id>', methods=['GET'])
@tweet_blueprint.response(200, TweetResponseSchema)
def get_tweet(tweet_id):
    return ApiResponse(200, TweetService.get_tweet_by_id(tweet_id), "게시물 정보입니다.")


@tweet_blueprint.route('', methods=['POST'])
@rate_limited('UPLOAD_RATE_LIMIT')
@login_required
@tweet_blueprint.arguments(CreateTweetFormSchema, location='form')
@tweet_blueprint.arguments(TweetImageFileSchema, location='files')
@tweet_blueprint.response(201, TweetResponseSchema)
@tweet_blueprint.doc(security=[{"BearerAuth": []}])
def create_tweet(form, files):
    tweet = TweetService.create_tweet(g.user_id, form['content'], files.get('image'))
    return ApiResponse(201, tweet, "게시물이 등록되었습니다.")


@tweet_blueprint.route('/<string:tweet_id>', methods=['PATCH'])
@login_required
@tweet_blueprint.arguments(UpdateTweetRequestSchema)
@tweet_blueprint.response(200, TweetResponseSchema)
@tweet_blueprint.doc(security=[{"BearerAuth": []}])
def update_tweet(data, tweet_id):
    tweet = TweetService.update_tweet(tweet_id, g.user_id, data['content'])
    return ApiResponse(200, tweet, "게시물이 수정되었습니다.")


@tweet_blueprint.route('/<string:tweet_id>', methods=['DELETE'])
@login_required
@tweet_blueprint.response(200, DeletedTweetResponseSchema)
@tweet_blueprint.doc(security=[{"BearerAuth": []}])
def delete_tweet(tweet_id):
    deleted_id = TweetService.delete_tweet(tweet_id, g.user_id)
    return ApiResponse(200, {'deleted_tweet_id': deleted_id}, "게시물이 삭제되었습니다.")
