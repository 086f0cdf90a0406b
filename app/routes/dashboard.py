from flask import g
from flask_smorest import Blueprint

from app.dto.common import ApiResponse
from app.schemas.dashboard import ChannelVideosQuerySchema, ChannelStatsResponseSchema, ChannelVideosResponseSchema
from app.services.dashboard_service import DashboardService
from common.decorator.auth_decorators import login_required, login_optional

dashboard_blueprint = Blueprint(
    'dashboard',
    __name__,
    url_prefix='/api/v1/dashboard',
    description='채널 대시보드 API'
)


@dashboard_blueprint.route('/stats/<string:channel_id>', methods=['GET'])
@login_required
@dashboard_blueprint.response(200, ChannelStatsResponseSchema)
@dashboard_blueprint.doc(security=[{"BearerAuth": []}])
def channel_stats(channel_id):
    stats = DashboardService.get_channel_stats(channel_id, g.user_id)
    return ApiResponse(200, stats, "채널 통계입니다.")


@dashboard_blueprint.route('/videos/<string:channel_id>', methods=['GET'])
@login_optional
@dashboard_blueprint.arguments(ChannelVideosQuerySchema, location='query')
@dashboard_blueprint.response(200, ChannelVideosResponseSchema)
@dashboard_blueprint.doc(security=[{"BearerAuth": []}])
def channel_videos(args, channel_id):
    page = DashboardService.get_channel_videos(
        channel_id, g.user_id, args['page'], args['limit'], args['sort_by'], args['sort_order']
    )
    return ApiResponse(200, page, "채널 영상 목록입니다.")
