from typing import Dict, Optional

from bson import ObjectId

import common.extensions as extensions
from app.models.mongodb.playlist import Playlist, PlaylistRepository
from app.models.mongodb.user import UserRepository, public_user_projection
from app.models.mongodb.video import VideoRepository
from app.services.video_service import video_with_owner_query
from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.query import JoinQuery, JoinSpec, Page, PageLabels, ensure_visible, paginate, visible_filter
from common.utils import to_object_id
from common.utils.logging_utils import get_logger
from common.utils.object_id import to_object_id_or_none

logger = get_logger('playlist_service')

PLAYLIST_LABELS = PageLabels(docs='playlists', total_docs='totalPlaylists')


def playlist_summary(playlist: Playlist) -> Dict:
    doc = playlist.to_dict()
    doc['video_count'] = len(playlist.videos)
    return doc


class PlaylistService:

    @staticmethod
    def _find_playlist(playlist_id: str) -> Playlist:
        playlist = PlaylistRepository(extensions.mongo_db).find_by_id(to_object_id(playlist_id, 'playlist id'))
        if not playlist:
            raise BusinessError(APIError.PLAYLIST_NOT_FOUND)
        return playlist

    @staticmethod
    def _find_owned_playlist(playlist_id: str, user_id: str) -> Playlist:
        playlist = PlaylistService._find_playlist(playlist_id)
        if str(playlist.owner) != str(user_id):
            raise BusinessError(APIError.PLAYLIST_FORBIDDEN)
        return playlist

    @staticmethod
    def create_playlist(user_id: str, name: str, description: str = '', is_public: bool = True) -> Dict:
        playlist = Playlist(
            owner=to_object_id(user_id, 'user id'),
            name=name.strip(),
            description=(description or '').strip(),
            is_public=is_public
        )
        PlaylistRepository(extensions.mongo_db).insert(playlist)

        logger.info(f"플레이리스트 생성: playlist={playlist.id}, owner={user_id}, public={is_public}")
        return playlist_summary(playlist)

    @staticmethod
    def get_user_playlists(owner_id: str, requester_id: Optional[str], page: int, limit: int) -> Page:
        owner_oid = to_object_id(owner_id, 'user id')
        requester_oid = to_object_id_or_none(requester_id)

        #NOTE: 비공개 플레이리스트는 $match 단계에서 제외해야 totalPlaylists 로도 존재가 드러나지 않는다
        base_filter = {'owner': owner_oid, **visible_filter('is_public', 'owner', requester_oid)}

        query = JoinQuery(
            base_filter=base_filter,
            joins=(JoinSpec('users', 'owner'),),
            extra_stages=({'$addFields': {'video_count': {'$size': '$videos'}}},),
            projection={
                'name': 1,
                'description': 1,
                'is_public': 1,
                'video_count': 1,
                'created_at': 1,
                'updated_at': 1,
                **public_user_projection('owner'),
            },
            sort=(('created_at', -1),)
        )

        return paginate(PlaylistRepository(extensions.mongo_db).collection, query, page, limit, PLAYLIST_LABELS)

    @staticmethod
    def get_playlist_by_id(playlist_id: str, requester_id: Optional[str]) -> Dict:
        playlist = PlaylistService._find_playlist(playlist_id)
        requester_oid = to_object_id_or_none(requester_id)

        ensure_visible(
            playlist.is_public, playlist.owner, requester_oid,
            unauthenticated=APIError.PLAYLIST_PRIVATE_AUTH_REQUIRED,
            forbidden=APIError.PLAYLIST_FORBIDDEN
        )

        videos = []
        if playlist.videos:
            query = video_with_owner_query({
                '_id': {'$in': playlist.videos},
                **visible_filter('is_published', 'owner', requester_oid)
            })
            by_id = {
                doc['_id']: doc
                for doc in VideoRepository(extensions.mongo_db).collection.aggregate(query.pipeline())
            }
            #NOTE: 플레이리스트에 담긴 순서 유지
            videos = [by_id[video_id] for video_id in playlist.videos if video_id in by_id]

        owner = UserRepository(extensions.mongo_db).find_by_id(playlist.owner)

        detail = playlist_summary(playlist)
        detail['videos'] = videos
        detail['video_count'] = len(videos)
        detail['owner'] = owner.to_dict() if owner else None
        return detail

    @staticmethod
    def add_video_to_playlist(playlist_id: str, video_id: str, user_id: str) -> Dict:
        playlist = PlaylistService._find_playlist(playlist_id)
        if not playlist.is_public and str(playlist.owner) != str(user_id):
            raise BusinessError(APIError.PLAYLIST_FORBIDDEN)

        video = VideoRepository(extensions.mongo_db).find_by_id(to_object_id(video_id, 'video id'))
        if not video:
            raise BusinessError(APIError.VIDEO_NOT_FOUND)
        if not video.is_published:
            raise BusinessError(APIError.VIDEO_NOT_PUBLISHED)
        if video.id in playlist.videos:
            raise BusinessError(APIError.PLAYLIST_VIDEO_DUPLICATE)

        updated = PlaylistRepository(extensions.mongo_db).add_video(playlist.id, video.id)

        logger.info(f"플레이리스트에 영상 추가: playlist={playlist.id}, video={video.id}, by={user_id}")
        return playlist_summary(updated)

    @staticmethod
    def remove_video_from_playlist(playlist_id: str, video_id: str, user_id: str) -> Dict:
        playlist = PlaylistService._find_owned_playlist(playlist_id, user_id)
        video_oid = to_object_id(video_id, 'video id')

        if video_oid not in playlist.videos:
            raise BusinessError(APIError.PLAYLIST_VIDEO_NOT_IN_LIST)

        updated = PlaylistRepository(extensions.mongo_db).remove_video(playlist.id, video_oid)
        return playlist_summary(updated)

    @staticmethod
    def update_playlist(playlist_id: str, user_id: str, name: str = None,
                        description: str = None, is_public: bool = None) -> Dict:
        fields = {}
        if name is not None:
            fields['name'] = name.strip()
        if description is not None:
            fields['description'] = description.strip()
        if is_public is not None:
            fields['is_public'] = is_public

        if not fields:
            raise BusinessError(APIError.PLAYLIST_UPDATE_EMPTY)

        playlist = PlaylistService._find_owned_playlist(playlist_id, user_id)
        updated = PlaylistRepository(extensions.mongo_db).update_fields(playlist.id, fields)
        return playlist_summary(updated)

    @staticmethod
    def delete_playlist(playlist_id: str, user_id: str) -> ObjectId:
        playlist = PlaylistService._find_owned_playlist(playlist_id, user_id)
        PlaylistRepository(extensions.mongo_db).delete(playlist.id)

        logger.info(f"플레이리스트 삭제: playlist={playlist.id}")
        return playlist.id
