from flask import g
from flask_smorest import Blueprint

from app.dto.common import ApiResponse
from app.schemas.video import (
    VideoListQuerySchema, VideoUploadFormSchema, VideoUploadFileSchema,
    VideoUpdateFormSchema, VideoThumbnailFileSchema,
    VideoResponseSchema, VideoPageResponseSchema, CategoryListResponseSchema, DeletedVideoResponseSchema
)
from app.services.video_service import VideoService
from common.decorator.auth_decorators import login_required, login_optional
from common.decorator.rate_limit_decorators import rate_limited

video_blueprint = Blueprint(
    'videos',
    __name__,
    url_prefix='/api/v1/videos',
    description='영상 API'
)


@video_blueprint.route('', methods=['GET'])
@video_blueprint.arguments(VideoListQuerySchema, location='query')
@video_blueprint.response(200, VideoPageResponseSchema)
def get_all_videos(args):
    page = VideoService.get_all_videos(
        page=args['page'],
        limit=args['limit'],
        query=args.get('query'),
        category=args.get('category'),
        tags=args.get('tags'),
        owner_id=args.get('user_id'),
        sort_by=args['sort_by'],
        sort_type=args['sort_type']
    )
    return ApiResponse(200, page, "영상 목록입니다.")


@video_blueprint.route('/categories', methods=['GET'])
@video_blueprint.response(200, CategoryListResponseSchema)
def get_categories():
    return ApiResponse(200, VideoService.get_categories(), "카테고리 목록입니다.")


@video_blueprint.route('/<string:video_id>', methods=['GET'])
@login_optional
@video_blueprint.response(200, VideoResponseSchema)
@video_blueprint.doc(security=[{"BearerAuth": []}])
def get_video(video_id):
    video = VideoService.get_video_by_id(video_id, g.user_id)
    return ApiResponse(200, video, "영상 정보입니다.")


@video_blueprint.route('', methods=['POST'])
@rate_limited('UPLOAD_RATE_LIMIT')
@login_required
@video_blueprint.arguments(VideoUploadFormSchema, location='form')
@video_blueprint.arguments(VideoUploadFileSchema, location='files')
@video_blueprint.response(201, VideoResponseSchema)
@video_blueprint.doc(security=[{"BearerAuth": []}])
def upload_video(form, files):
    video = VideoService.upload_video(
        user_id=g.user_id,
        title=form['title'],
        category=form['category'],
        video_file=files.get('video_file'),
        thumbnail=files.get('thumbnail'),
        description=form['description'],
        tags=form.get('tags'),
        is_published=form['is_published']
    )
    return ApiResponse(201, video, "영상이 업로드되었습니다.")


@video_blueprint.route('/<string:video_id>', methods=['PATCH'])
@login_required
@video_blueprint.arguments(VideoUpdateFormSchema, location='form')
@video_blueprint.arguments(VideoThumbnailFileSchema, location='files')
@video_blueprint.response(200, VideoResponseSchema)
@video_blueprint.doc(security=[{"BearerAuth": []}])
def update_video(form, files, video_id):
    video = VideoService.update_video(
        video_id, g.user_id,
        title=form.get('title'),
        description=form.get('description'),
        thumbnail=files.get('thumbnail')
    )
    return ApiResponse(200, video, "영상 정보가 수정되었습니다.")


@video_blueprint.route('/toggle/publish/<string:video_id>', methods=['PATCH'])
@login_required
@video_blueprint.response(200, VideoResponseSchema)
@video_blueprint.doc(security=[{"BearerAuth": []}])
def toggle_publish(video_id):
    video = VideoService.toggle_publish_status(video_id, g.user_id)
    return ApiResponse(200, video, "공개 상태가 변경되었습니다.")


@video_blueprint.route('/<string:video_id>', methods=['DELETE'])
@login_required
@video_blueprint.response(200, DeletedVideoResponseSchema)
@video_blueprint.doc(security=[{"BearerAuth": []}])
def delete_video(video_id):
    deleted_id = VideoService.delete_video(video_id, g.user_id)
    return ApiResponse(200, {'deleted_video_id': deleted_id}, "영상이 삭제되었습니다.")
