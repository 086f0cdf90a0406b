from flask import g
from flask_smorest import Blueprint

from app.dto.common import ApiResponse
from app.schemas.common_schema import PaginationQuerySchema
from app.schemas.playlist import (
    CreatePlaylistRequestSchema, UpdatePlaylistRequestSchema,
    PlaylistResponseSchema, PlaylistDetailResponseSchema,
    PlaylistPageResponseSchema, DeletedPlaylistResponseSchema
)
from app.services.playlist_service import PlaylistService
from common.decorator.auth_decorators import login_required, login_optional

playlist_blueprint = Blueprint(
    'playlists',
    __name__,
    url_prefix='/api/v1/playlists',
    description='플레이리스트 API'
)


@playlist_blueprint.route('', methods=['POST'])
@login_required
@playlist_blueprint.arguments(CreatePlaylistRequestSchema)
@playlist_blueprint.response(201, PlaylistResponseSchema)
@playlist_blueprint.doc(security=[{"BearerAuth": []}])
def create_playlist(data):
    playlist = PlaylistService.create_playlist(
        g.user_id, data['name'], data['description'], data['is_public']
    )
    return ApiResponse(201, playlist, "플레이리스트가 생성되었습니다.")


@playlist_blueprint.route('/user/<string:user_id>', methods=['GET'])
@login_optional
@playlist_blueprint.arguments(PaginationQuerySchema, location='query')
@playlist_blueprint.response(200, PlaylistPageResponseSchema)
@playlist_blueprint.doc(security=[{"BearerAuth": []}])
def get_user_playlists(args, user_id):
    page = PlaylistService.get_user_playlists(user_id, g.user_id, args['page'], args['limit'])
    return ApiResponse(200, page, "플레이리스트 목록입니다.")


@playlist_blueprint.route('/<string:playlist_id>', methods=['GET'])
@login_optional
@playlist_blueprint.response(200, PlaylistDetailResponseSchema)
@playlist_blueprint.doc(security=[{"BearerAuth": []}])
def get_playlist(playlist_id):
    playlist = PlaylistService.get_playlist_by_id(playlist_id, g.user_id)
    return ApiResponse(200, playlist, "플레이리스트 정보입니다.")


@playlist_blueprint.route('/<string:playlist_id>', methods=['PATCH'])
@login_required
@playlist_blueprint.arguments(UpdatePlaylistRequestSchema)
@playlist_blueprint.response(200, PlaylistResponseSchema)
@playlist_blueprint.doc(security=[{"BearerAuth": []}])
def update_playlist(data, playlist_id):
    playlist = PlaylistService.update_playlist(
        playlist_id, g.user_id,
        name=data.get('name'),
        description=data.get('description'),
        is_public=data.get('is_public')
    )
    return ApiResponse(200, playlist, "플레이리스트가 수정되었습니다.")


@playlist_blueprint.route('/<string:playlist_id>', methods=['DELETE'])
@login_required
@playlist_blueprint.response(200, DeletedPlaylistResponseSchema)
@playlist_blueprint.doc(security=[{"BearerAuth": []}])
def delete_playlist(playlist_id):
    deleted_id = PlaylistService.delete_playlist(playlist_id, g.user_id)
    return ApiResponse(200, {'deleted_playlist_id': deleted_id}, "플레이리스트가 삭제되었습니다.")


@playlist_blueprint.route('/<string:playlist_id>/videos/<string:video_id>', methods=['POST'])
@login_required
@playlist_blueprint.response(200, PlaylistResponseSchema)
@playlist_blueprint.doc(security=[{"BearerAuth": []}])
def add_video(playlist_id, video_id):
    playlist = PlaylistService.add_video_to_playlist(playlist_id, video_id, g.user_id)
    return ApiResponse(200, playlist, "플레이리스트에 영상을 추가했습니다.")


@playlist_blueprint.route('/<string:playlist_id>/videos/<string:video_id>', methods=['DELETE'])
@login_required
@playlist_blueprint.response(200, PlaylistResponseSchema)
@playlist_blueprint.doc(security=[{"BearerAuth": []}])
def remove_video(playlist_id, video_id):
    playlist = PlaylistService.remove_video_from_playlist(playlist_id, video_id, g.user_id)
    return ApiResponse(200, playlist, "플레이리스트에서 영상을 제거했습니다.")
