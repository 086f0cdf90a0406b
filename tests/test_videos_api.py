import io

from app.models.mongodb import Comment, CommentRepository
from common.enum.target_kind import TargetKind
from tests.conftest import auth_header, days_ago, make_playlist, make_user, make_video


def _upload_form(**overrides):
    form = {
        'title': 'My first video',
        'category': 'music',
        'description': 'hello',
        'tags': 'live, jazz ,',
        'videoFile': (io.BytesIO(b'mp4-bytes'), 'clip.mp4'),
        **overrides
    }
    return form


class TestListVideos:

    def test_only_published_newest_first(self, client, db):
        owner = make_user(db, 'owner')
        make_video(db, owner, 'old', created_at=days_ago(3))
        make_video(db, owner, 'new', created_at=days_ago(1))
        make_video(db, owner, 'draft', is_published=False)

        data = client.get('/api/v1/videos').json['data']

        assert [video['title'] for video in data['videos']] == ['new', 'old']
        assert data['totalVideos'] == 2
        assert data['videos'][0]['owner']['username'] == 'owner'
        assert 'password' not in data['videos'][0]['owner']

    def test_sort_by_views_ascending(self, client, db):
        owner = make_user(db, 'owner')
        for title, views in (('b', 20), ('a', 5), ('c', 50)):
            make_video(db, owner, title, views=views)

        data = client.get('/api/v1/videos?sortBy=views&sortType=asc').json['data']

        assert [video['views'] for video in data['videos']] == [5, 20, 50]

    def test_filter_by_owner_and_category(self, client, db):
        alice = make_user(db, 'alice')
        bob = make_user(db, 'bob')
        make_video(db, alice, 'a-music')
        make_video(db, alice, 'a-game', category='gaming')
        make_video(db, bob, 'b-music')

        data = client.get(f'/api/v1/videos?userId={alice.id}&category=music').json['data']

        assert [video['title'] for video in data['videos']] == ['a-music']

    def test_unknown_sort_key_is_400(self, client, db):
        assert client.get('/api/v1/videos?sortBy=password').status_code == 400

    def test_categories_are_distinct(self, client, db):
        owner = make_user(db, 'owner')
        make_video(db, owner, 'one', category='music')
        make_video(db, owner, 'two', category='music')
        make_video(db, owner, 'three', category='gaming')

        data = client.get('/api/v1/videos/categories').json['data']

        assert sorted(data) == ['gaming', 'music']


class TestGetVideo:

    def test_increments_views_and_reports_like(self, client, db):
        owner = make_user(db, 'owner')
        viewer = make_user(db, 'viewer')
        video = make_video(db, owner, 'clip')
        client.post(f'/api/v1/likes/toggle/v/{video.id}', headers=auth_header(viewer))

        first = client.get(f'/api/v1/videos/{video.id}', headers=auth_header(viewer)).json['data']
        second = client.get(f'/api/v1/videos/{video.id}').json['data']

        assert first['views'] == 1
        assert first['isLiked'] is True
        assert second['views'] == 2
        assert second['isLiked'] is False

    def test_unpublished_video_visibility(self, client, db):
        owner = make_user(db, 'owner')
        other = make_user(db, 'other')
        video = make_video(db, owner, 'draft', is_published=False)

        anonymous = client.get(f'/api/v1/videos/{video.id}')
        stranger = client.get(f'/api/v1/videos/{video.id}', headers=auth_header(other))
        itself = client.get(f'/api/v1/videos/{video.id}', headers=auth_header(owner))

        assert anonymous.status_code == 401
        assert stranger.status_code == 403
        assert itself.status_code == 200
        assert db.videos.find_one({'_id': video.id})['views'] == 1

    def test_invalid_id_is_400(self, client, db):
        response = client.get('/api/v1/videos/not-an-object-id')

        assert response.status_code == 400
        assert response.json['success'] is False


class TestUploadVideo:

    def test_upload_stores_duration_and_tags(self, client, db, storage):
        owner = make_user(db, 'owner')

        response = client.post('/api/v1/videos', headers=auth_header(owner),
                               data=_upload_form(), content_type='multipart/form-data')

        assert response.status_code == 201
        data = response.json['data']
        assert data['duration'] == 95.0
        assert data['tags'] == ['live', 'jazz']
        assert data['owner']['username'] == 'owner'
        assert storage.uploaded == [('videnest/asset-1', 'video')]

    def test_upload_notifies_subscribers(self, client, db):
        owner = make_user(db, 'owner')
        fan = make_user(db, 'fan')
        client.post(f'/api/v1/subscriptions/c/{owner.id}', headers=auth_header(fan))

        client.post('/api/v1/videos', headers=auth_header(owner),
                    data=_upload_form(), content_type='multipart/form-data')

        notifications = list(db.notifications.find({'type': 'VIDEO_UPLOAD'}))
        assert [n['recipient'] for n in notifications] == [fan.id]

    def test_private_upload_does_not_notify(self, client, db):
        owner = make_user(db, 'owner')
        fan = make_user(db, 'fan')
        client.post(f'/api/v1/subscriptions/c/{owner.id}', headers=auth_header(fan))

        client.post('/api/v1/videos', headers=auth_header(owner),
                    data=_upload_form(isPublished='false'), content_type='multipart/form-data')

        assert db.notifications.count_documents({'type': 'VIDEO_UPLOAD'}) == 0

    def test_video_file_required(self, client, db):
        owner = make_user(db, 'owner')
        form = _upload_form()
        form.pop('videoFile')

        response = client.post('/api/v1/videos', headers=auth_header(owner),
                               data=form, content_type='multipart/form-data')

        assert response.status_code == 400

    def test_blank_title_rejected(self, client, db, storage):
        owner = make_user(db, 'owner')

        response = client.post('/api/v1/videos', headers=auth_header(owner),
                               data=_upload_form(title='   '), content_type='multipart/form-data')

        assert response.status_code == 400
        assert db.videos.count_documents({}) == 0
        assert storage.uploaded == []

    def test_requires_login(self, client, db):
        response = client.post('/api/v1/videos', data=_upload_form(), content_type='multipart/form-data')

        assert response.status_code == 401


class TestUpdateVideo:

    def test_owner_updates_title_and_thumbnail(self, client, db, storage):
        owner = make_user(db, 'owner')
        video = make_video(db, owner, 'clip', thumbnail='https://res.example.com/old',
                           thumbnail_public_id='videnest/old-thumb')

        response = client.patch(
            f'/api/v1/videos/{video.id}',
            headers=auth_header(owner),
            data={'title': 'renamed', 'thumbnail': (io.BytesIO(b'jpg'), 't.jpg')},
            content_type='multipart/form-data'
        )

        assert response.status_code == 200
        assert response.json['data']['title'] == 'renamed'
        assert response.json['data']['thumbnail'] == 'https://res.example.com/videnest/asset-1'
        assert storage.deleted == ['videnest/old-thumb']

    def test_other_user_is_403(self, client, db):
        owner = make_user(db, 'owner')
        other = make_user(db, 'other')
        video = make_video(db, owner, 'clip')

        response = client.patch(f'/api/v1/videos/{video.id}', headers=auth_header(other),
                                data={'title': 'mine now'}, content_type='multipart/form-data')

        assert response.status_code == 403

    def test_blank_title_update_rejected(self, client, db):
        owner = make_user(db, 'owner')
        video = make_video(db, owner, 'clip')

        response = client.patch(f'/api/v1/videos/{video.id}', headers=auth_header(owner),
                                data={'title': '  '}, content_type='multipart/form-data')

        assert response.status_code == 400
        assert db.videos.find_one({'_id': video.id})['title'] == 'clip'

    def test_toggle_publish(self, client, db):
        owner = make_user(db, 'owner')
        video = make_video(db, owner, 'clip')

        first = client.patch(f'/api/v1/videos/toggle/publish/{video.id}', headers=auth_header(owner))
        second = client.patch(f'/api/v1/videos/toggle/publish/{video.id}', headers=auth_header(owner))

        assert first.json['data']['isPublished'] is False
        assert second.json['data']['isPublished'] is True


class TestDeleteVideo:

    def test_delete_cascades_related_documents(self, client, db, storage):
        owner = make_user(db, 'owner')
        fan = make_user(db, 'fan')
        video = make_video(db, owner, 'clip')
        playlist = make_playlist(db, fan, videos=[video.id])
        comment = Comment(owner=fan.id, content='nice', target_kind=TargetKind.VIDEO, target_id=video.id)
        CommentRepository(db).insert(comment)
        client.post(f'/api/v1/likes/toggle/v/{video.id}', headers=auth_header(fan))
        client.post(f'/api/v1/likes/toggle/c/{comment.id}', headers=auth_header(owner))

        response = client.delete(f'/api/v1/videos/{video.id}', headers=auth_header(owner))

        assert response.status_code == 200
        assert response.json['data'] == {'deletedVideoId': str(video.id)}
        assert db.videos.count_documents({}) == 0
        assert db.comments.count_documents({}) == 0
        assert db.likes.count_documents({}) == 0
        assert db.playlists.find_one({'_id': playlist.id})['videos'] == []
        assert db.notifications.count_documents({'video': video.id}) == 0
        assert storage.deleted == ['videnest/clip']

    def test_failed_asset_delete_is_deferred(self, client, db, storage):
        owner = make_user(db, 'owner')
        video = make_video(db, owner, 'clip')
        storage.fail_deletes.add('videnest/clip')

        response = client.delete(f'/api/v1/videos/{video.id}', headers=auth_header(owner))

        assert response.status_code == 200
        assert db.videos.count_documents({}) == 0
        pending = db.pending_asset_deletions.find_one({'public_id': 'videnest/clip'})
        assert pending['resource_type'] == 'video'
        assert pending['attempts'] == 1

    def test_other_user_cannot_delete(self, client, db):
        owner = make_user(db, 'owner')
        other = make_user(db, 'other')
        video = make_video(db, owner, 'clip')

        response = client.delete(f'/api/v1/videos/{video.id}', headers=auth_header(other))

        assert response.status_code == 403
        assert db.videos.count_documents({}) == 1
