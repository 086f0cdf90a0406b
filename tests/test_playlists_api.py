from tests.conftest import auth_header, make_playlist, make_user, make_video


class TestPlaylistVisibility:

    def test_private_playlist_access_matrix(self, client, db):
        owner = make_user(db, 'owner')
        other = make_user(db, 'other')
        playlist = make_playlist(db, owner, is_public=False)
        url = f'/api/v1/playlists/{playlist.id}'

        anonymous = client.get(url)
        stranger = client.get(url, headers=auth_header(other))
        mine = client.get(url, headers=auth_header(owner))

        assert anonymous.status_code == 401
        assert anonymous.json['data'] is None
        assert stranger.status_code == 403
        assert stranger.json['data'] is None
        assert mine.status_code == 200
        assert mine.json['data']['name'] == 'playlist'

    def test_public_playlist_for_anyone(self, client, db):
        owner = make_user(db, 'owner')
        playlist = make_playlist(db, owner)

        response = client.get(f'/api/v1/playlists/{playlist.id}')

        assert response.status_code == 200
        assert response.json['data']['owner']['username'] == 'owner'
        assert 'password' not in response.json['data']['owner']

    def test_user_playlists_hide_private_from_others(self, client, db):
        owner = make_user(db, 'owner')
        other = make_user(db, 'other')
        make_playlist(db, owner, name='open')
        make_playlist(db, owner, name='secret', is_public=False)

        theirs = client.get(f'/api/v1/playlists/user/{owner.id}', headers=auth_header(other)).json['data']
        mine = client.get(f'/api/v1/playlists/user/{owner.id}', headers=auth_header(owner)).json['data']

        assert theirs['totalPlaylists'] == 1
        assert [item['name'] for item in theirs['playlists']] == ['open']
        assert mine['totalPlaylists'] == 2


class TestPlaylistVideos:

    def test_videos_keep_playlist_order(self, client, db):
        owner = make_user(db, 'owner')
        first = make_video(db, owner, title='first')
        second = make_video(db, owner, title='second')
        playlist = make_playlist(db, owner, videos=[second.id, first.id])

        data = client.get(f'/api/v1/playlists/{playlist.id}').json['data']

        assert [video['title'] for video in data['videos']] == ['second', 'first']
        assert data['videoCount'] == 2

    def test_unpublished_videos_of_others_hidden(self, client, db):
        owner = make_user(db, 'owner')
        uploader = make_user(db, 'uploader')
        visible = make_video(db, uploader, title='visible')
        hidden = make_video(db, uploader, title='hidden', is_published=False)
        playlist = make_playlist(db, owner, videos=[visible.id, hidden.id])

        data = client.get(f'/api/v1/playlists/{playlist.id}', headers=auth_header(owner)).json['data']

        assert [video['title'] for video in data['videos']] == ['visible']

    def test_add_video(self, client, db):
        owner = make_user(db, 'owner')
        video = make_video(db, owner)
        playlist = make_playlist(db, owner)

        response = client.post(f'/api/v1/playlists/{playlist.id}/videos/{video.id}', headers=auth_header(owner))

        assert response.status_code == 200
        assert response.json['data']['videos'] == [str(video.id)]
        assert response.json['data']['videoCount'] == 1

    def test_add_duplicate_is_400(self, client, db):
        owner = make_user(db, 'owner')
        video = make_video(db, owner)
        playlist = make_playlist(db, owner, videos=[video.id])

        response = client.post(f'/api/v1/playlists/{playlist.id}/videos/{video.id}', headers=auth_header(owner))

        assert response.status_code == 400
        assert db.playlists.find_one({'_id': playlist.id})['videos'] == [video.id]

    def test_add_unpublished_is_400(self, client, db):
        owner = make_user(db, 'owner')
        video = make_video(db, owner, is_published=False)
        playlist = make_playlist(db, owner)

        response = client.post(f'/api/v1/playlists/{playlist.id}/videos/{video.id}', headers=auth_header(owner))

        assert response.status_code == 400

    def test_add_to_private_playlist_of_other_is_403(self, client, db):
        owner = make_user(db, 'owner')
        other = make_user(db, 'other')
        video = make_video(db, other)
        playlist = make_playlist(db, owner, is_public=False)

        response = client.post(f'/api/v1/playlists/{playlist.id}/videos/{video.id}', headers=auth_header(other))

        assert response.status_code == 403

    def test_remove_video(self, client, db):
        owner = make_user(db, 'owner')
        video = make_video(db, owner)
        playlist = make_playlist(db, owner, videos=[video.id])
        url = f'/api/v1/playlists/{playlist.id}/videos/{video.id}'

        removed = client.delete(url, headers=auth_header(owner))
        again = client.delete(url, headers=auth_header(owner))

        assert removed.status_code == 200
        assert removed.json['data']['videos'] == []
        assert again.status_code == 400


class TestPlaylistCrud:

    def test_create_defaults_to_public(self, client, db):
        owner = make_user(db, 'owner')

        response = client.post('/api/v1/playlists', json={'name': 'mix'}, headers=auth_header(owner))

        assert response.status_code == 201
        assert response.json['statusCode'] == 201
        assert response.json['data']['isPublic'] is True
        assert response.json['data']['owner'] == str(owner.id)

    def test_create_requires_name(self, client, db):
        owner = make_user(db, 'owner')

        response = client.post('/api/v1/playlists', json={'description': 'x'}, headers=auth_header(owner))

        assert response.status_code == 400
        assert response.json['success'] is False

    def test_blank_name_rejected(self, client, db):
        owner = make_user(db, 'owner')
        playlist = make_playlist(db, owner, 'mix')

        created = client.post('/api/v1/playlists', json={'name': '   '}, headers=auth_header(owner))
        renamed = client.patch(f'/api/v1/playlists/{playlist.id}', json={'name': ' '},
                               headers=auth_header(owner))

        assert created.status_code == 400
        assert renamed.status_code == 400
        assert db.playlists.find_one({'_id': playlist.id})['name'] == 'mix'

    def test_update_requires_a_field(self, client, db):
        owner = make_user(db, 'owner')
        playlist = make_playlist(db, owner)

        empty = client.patch(f'/api/v1/playlists/{playlist.id}', json={}, headers=auth_header(owner))
        renamed = client.patch(f'/api/v1/playlists/{playlist.id}', json={'name': 'renamed'}, headers=auth_header(owner))

        assert empty.status_code == 400
        assert renamed.json['data']['name'] == 'renamed'

    def test_delete_by_non_owner_is_403(self, client, db):
        owner = make_user(db, 'owner')
        other = make_user(db, 'other')
        playlist = make_playlist(db, owner)

        forbidden = client.delete(f'/api/v1/playlists/{playlist.id}', headers=auth_header(other))
        deleted = client.delete(f'/api/v1/playlists/{playlist.id}', headers=auth_header(owner))

        assert forbidden.status_code == 403
        assert deleted.json['data'] == {'deletedPlaylistId': str(playlist.id)}
        assert db.playlists.count_documents({}) == 0
