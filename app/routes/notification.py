from flask import g
from flask_smorest import Blueprint

from app.dto.common import ApiResponse
from app.schemas.notification import (
    NotificationQuerySchema, NotificationResponseSchema, NotificationPageResponseSchema,
    ModifiedCountResponseSchema, DeletedNotificationResponseSchema
)
from app.services.notification_service import NotificationService
from common.decorator.auth_decorators import login_required

notification_blueprint = Blueprint(
    'notifications',
    __name__,
    url_prefix='/api/v1/notifications',
    description='알림 API'
)


@notification_blueprint.route('', methods=['GET'])
@login_required
@notification_blueprint.arguments(NotificationQuerySchema, location='query')
@notification_blueprint.response(200, NotificationPageResponseSchema)
@notification_blueprint.doc(security=[{"BearerAuth": []}])
def get_notifications(args):
    page = NotificationService.get_notifications(g.user_id, args['page'], args['limit'], args.get('is_read'))
    return ApiResponse(200, page, "알림 목록입니다.")


@notification_blueprint.route('/read-all', methods=['PATCH'])
@login_required
@notification_blueprint.response(200, ModifiedCountResponseSchema)
@notification_blueprint.doc(security=[{"BearerAuth": []}])
def mark_all_as_read():
    modified = NotificationService.mark_all_as_read(g.user_id)
    return ApiResponse(200, {'modified_count': modified}, "모든 알림을 읽음 처리했습니다.")


@notification_blueprint.route('/<string:notification_id>/read', methods=['PATCH'])
@login_required
@notification_blueprint.response(200, NotificationResponseSchema)
@notification_blueprint.doc(security=[{"BearerAuth": []}])
def mark_as_read(notification_id):
    notification = NotificationService.mark_as_read(notification_id, g.user_id)
    return ApiResponse(200, notification, "알림을 읽음 처리했습니다.")


@notification_blueprint.route('/<string:notification_id>', methods=['DELETE'])
@login_required
@notification_blueprint.response(200, DeletedNotificationResponseSchema)
@notification_blueprint.doc(security=[{"BearerAuth": []}])
def delete_notification(notification_id):
    deleted_id = NotificationService.delete_notification(notification_id, g.user_id)
    return ApiResponse(200, {'deleted_notification_id': deleted_id}, "알림이 삭제되었습니다.")
