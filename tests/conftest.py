"""
공용 fixture.
앱은 세션당 한 번 만들고 (flask-smorest Api 가 모듈 전역이므로), 테스트마다 mongomock DB 를 비운다.
"""

from datetime import datetime, timedelta

import mongomock
import pytest
from cloudinary.exceptions import Error as CloudinaryError

import common.extensions as extensions
from app import create_app
from app.models.mongodb import (
    User, UserRepository, Video, VideoRepository, Tweet, TweetRepository,
    Playlist, PlaylistRepository, LikeRepository, SubscriptionRepository,
    PendingAssetDeletionRepository
)
from app.services.user_service import hash_password
from common.storage import UploadedAsset
from common.utils import create_access_token

#NOTE: mongomock 은 text 인덱스를 지원하지 않으므로 unique 인덱스가 필요한 저장소만 생성
INDEXED_REPOSITORIES = (
    UserRepository,
    LikeRepository,
    SubscriptionRepository,
    PendingAssetDeletionRepository,
)

DEFAULT_PASSWORD = 'secret123'


class FakeAssetStorage:
    """Cloudinary 대역. 업로드/삭제 호출을 기록하고, fail_deletes 에 있는 public_id 는 삭제 실패시킨다."""

    def __init__(self):
        self.reset()

    def reset(self):
        self.uploaded = []
        self.deleted = []
        self.fail_deletes = set()
        self.video_duration = 95.0

    def upload(self, local_path, resource_type='auto'):
        public_id = f"videnest/asset-{len(self.uploaded) + 1}"
        self.uploaded.append((public_id, resource_type))
        return UploadedAsset(
            url=f"https://res.example.com/{public_id}",
            public_id=public_id,
            duration=self.video_duration if resource_type == 'video' else None
        )

    def delete(self, public_id, resource_type='image'):
        if public_id in self.fail_deletes:
            raise CloudinaryError('destroy failed')
        self.deleted.append(public_id)
        return True


@pytest.fixture(scope='session')
def app(tmp_path_factory):
    application = create_app('testing', mongo_client=mongomock.MongoClient())
    application.config['UPLOAD_FOLDER'] = str(tmp_path_factory.mktemp('uploads'))
    extensions.asset_storage = FakeAssetStorage()
    return application


@pytest.fixture(autouse=True)
def db(app):
    database = extensions.mongo_db
    for name in database.list_collection_names():
        database.drop_collection(name)
    for repository_class in INDEXED_REPOSITORIES:
        repository_class(database).ensure_indexes()
    extensions.asset_storage.reset()
    extensions.limiter.reset()

    with app.app_context():
        yield database


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def storage():
    return extensions.asset_storage


# ---------------------------------------------------------------------------
# Seed helpers
# ---------------------------------------------------------------------------

def make_user(db, username='alice', **overrides):
    user = User(
        username=username,
        email=overrides.pop('email', f'{username}@example.com'),
        full_name=overrides.pop('full_name', username.title()),
        password=hash_password(overrides.pop('password', DEFAULT_PASSWORD)),
        **overrides
    )
    UserRepository(db).insert(user)
    return user


def make_video(db, owner, title='video', **overrides):
    video = Video(
        owner=owner.id,
        title=title,
        category=overrides.pop('category', 'music'),
        video_file=f'https://res.example.com/{title}.mp4',
        video_file_public_id=overrides.pop('video_file_public_id', f'videnest/{title}'),
        **overrides
    )
    VideoRepository(db).insert(video)
    return video


def make_tweet(db, owner, content='hello', **overrides):
    tweet = Tweet(owner=owner.id, content=content, **overrides)
    TweetRepository(db).insert(tweet)
    return tweet


def make_playlist(db, owner, name='playlist', **overrides):
    playlist = Playlist(owner=owner.id, name=name, **overrides)
    PlaylistRepository(db).insert(playlist)
    return playlist


def auth_header(user):
    return {'Authorization': f'Bearer {create_access_token(user.id)}'}


def days_ago(days):
    return datetime.utcnow() - timedelta(days=days)
