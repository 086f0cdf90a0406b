from flask import g
from flask_smorest import Blueprint

from app.dto.common import ApiResponse
from app.schemas.common_schema import PaginationQuerySchema
from app.schemas.subscription import SubscriptionStatusResponseSchema, SubscriptionPageResponseSchema
from app.services.subscription_service import SubscriptionService
from common.decorator.auth_decorators import login_required

subscription_blueprint = Blueprint(
    'subscriptions',
    __name__,
    url_prefix='/api/v1/subscriptions',
    description='채널 구독 API'
)


@subscription_blueprint.route('/c/<string:channel_id>', methods=['POST'])
@login_required
@subscription_blueprint.response(200, SubscriptionStatusResponseSchema)
@subscription_blueprint.doc(security=[{"BearerAuth": []}])
def toggle_subscription(channel_id):
    is_subscribed = SubscriptionService.toggle_subscription(channel_id, g.user_id)
    message = "채널을 구독했습니다." if is_subscribed else "구독을 취소했습니다."
    return ApiResponse(200, {'is_subscribed': is_subscribed}, message)


@subscription_blueprint.route('/status/c/<string:channel_id>', methods=['GET'])
@login_required
@subscription_blueprint.response(200, SubscriptionStatusResponseSchema)
@subscription_blueprint.doc(security=[{"BearerAuth": []}])
def subscription_status(channel_id):
    is_subscribed = SubscriptionService.get_subscription_status(channel_id, g.user_id)
    return ApiResponse(200, {'is_subscribed': is_subscribed}, "구독 상태입니다.")


@subscription_blueprint.route('/c/<string:channel_id>/subscribers', methods=['GET'])
@subscription_blueprint.arguments(PaginationQuerySchema, location='query')
@subscription_blueprint.response(200, SubscriptionPageResponseSchema)
def channel_subscribers(args, channel_id):
    page = SubscriptionService.get_channel_subscribers(channel_id, args['page'], args['limit'])
    return ApiResponse(200, page, "구독자 목록입니다.")


@subscription_blueprint.route('/subscribed', methods=['GET'])
@login_required
@subscription_blueprint.arguments(PaginationQuerySchema, location='query')
@subscription_blueprint.response(200, SubscriptionPageResponseSchema)
@subscription_blueprint.doc(security=[{"BearerAuth": []}])
def subscribed_channels(args):
    page = SubscriptionService.get_subscribed_channels(g.user_id, args['page'], args['limit'])
    return ApiResponse(200, page, "구독 중인 채널 목록입니다.")
