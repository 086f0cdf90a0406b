from tests.conftest import auth_header, days_ago, make_tweet, make_user, make_video


def _add(client, user, **body):
    return client.post('/api/v1/comments', headers=auth_header(user), json=body)


class TestAddComment:

    def test_video_comment_notifies_owner(self, client, db):
        owner = make_user(db, 'owner')
        viewer = make_user(db, 'viewer')
        video = make_video(db, owner, 'clip')

        response = _add(client, viewer, content='  great  ', videoId=str(video.id))

        assert response.status_code == 201
        data = response.json['data']
        assert data['content'] == 'great'
        assert data['targetKind'] == 'video'
        assert data['owner']['username'] == 'viewer'
        notification = db.notifications.find_one({'type': 'COMMENT'})
        assert notification['recipient'] == owner.id
        assert notification['video'] == video.id

    def test_own_video_comment_does_not_notify(self, client, db):
        owner = make_user(db, 'owner')
        video = make_video(db, owner, 'clip')

        _add(client, owner, content='pinned', videoId=str(video.id))

        assert db.notifications.count_documents({}) == 0

    def test_exactly_one_target_required(self, client, db):
        user = make_user(db, 'user')
        video = make_video(db, user, 'clip')
        tweet = make_tweet(db, user)

        neither = _add(client, user, content='hi')
        both = _add(client, user, content='hi', videoId=str(video.id), tweetId=str(tweet.id))

        assert neither.status_code == 400
        assert both.status_code == 400

    def test_unpublished_video_rejects_comments(self, client, db):
        owner = make_user(db, 'owner')
        video = make_video(db, owner, 'draft', is_published=False)

        assert _add(client, owner, content='hi', videoId=str(video.id)).status_code == 400

    def test_reply_must_belong_to_same_target(self, client, db):
        owner = make_user(db, 'owner')
        first = make_video(db, owner, 'first')
        second = make_video(db, owner, 'second')
        parent_id = _add(client, owner, content='root', videoId=str(first.id)).json['data']['id']

        reply = _add(client, owner, content='reply', videoId=str(first.id), parentCommentId=parent_id)
        misplaced = _add(client, owner, content='reply', videoId=str(second.id), parentCommentId=parent_id)

        assert reply.status_code == 201
        assert reply.json['data']['parentComment'] == parent_id
        assert misplaced.status_code == 404

    def test_content_length_validated(self, client, db):
        owner = make_user(db, 'owner')
        video = make_video(db, owner, 'clip')

        response = _add(client, owner, content='x' * 501, videoId=str(video.id))

        assert response.status_code == 400

    def test_whitespace_only_content_rejected(self, client, db):
        owner = make_user(db, 'owner')
        video = make_video(db, owner, 'clip')

        response = _add(client, owner, content='   ', videoId=str(video.id))

        assert response.status_code == 400
        assert db.comments.count_documents({}) == 0


class TestListComments:

    def test_video_comments_are_top_level_newest_first(self, client, db):
        owner = make_user(db, 'owner')
        video = make_video(db, owner, 'clip')
        first_id = _add(client, owner, content='first', videoId=str(video.id)).json['data']['id']
        db.comments.update_one({'content': 'first'}, {'$set': {'created_at': days_ago(1)}})
        _add(client, owner, content='second', videoId=str(video.id))
        _add(client, owner, content='reply', videoId=str(video.id), parentCommentId=first_id)

        data = client.get(f'/api/v1/comments/{video.id}').json['data']

        assert [comment['content'] for comment in data['comments']] == ['second', 'first']
        assert data['totalComments'] == 2

    def test_private_video_comments_hidden_from_others(self, client, db):
        owner = make_user(db, 'owner')
        other = make_user(db, 'other')
        video = make_video(db, owner, 'draft', is_published=False)

        assert client.get(f'/api/v1/comments/{video.id}', headers=auth_header(other)).status_code == 403
        assert client.get(f'/api/v1/comments/{video.id}', headers=auth_header(owner)).status_code == 200

    def test_tweet_comments(self, client, db):
        user = make_user(db, 'user')
        tweet = make_tweet(db, user)
        _add(client, user, content='on tweet', tweetId=str(tweet.id))

        data = client.get(f'/api/v1/comments/t/{tweet.id}').json['data']

        assert [comment['content'] for comment in data['comments']] == ['on tweet']

    def test_missing_tweet_is_404(self, client, db):
        assert client.get('/api/v1/comments/t/65a000000000000000000000').status_code == 404


class TestModifyComment:

    def test_only_owner_can_edit(self, client, db):
        owner = make_user(db, 'owner')
        other = make_user(db, 'other')
        video = make_video(db, owner, 'clip')
        comment_id = _add(client, owner, content='draft', videoId=str(video.id)).json['data']['id']

        forbidden = client.patch(f'/api/v1/comments/{comment_id}', headers=auth_header(other),
                                 json={'content': 'hijack'})
        edited = client.patch(f'/api/v1/comments/{comment_id}', headers=auth_header(owner),
                              json={'content': 'final'})

        assert forbidden.status_code == 403
        assert edited.json['data']['content'] == 'final'

    def test_edit_to_whitespace_rejected(self, client, db):
        owner = make_user(db, 'owner')
        video = make_video(db, owner, 'clip')
        comment_id = _add(client, owner, content='keep', videoId=str(video.id)).json['data']['id']

        response = client.patch(f'/api/v1/comments/{comment_id}', headers=auth_header(owner),
                                json={'content': ' \t '})

        assert response.status_code == 400
        assert db.comments.find_one()['content'] == 'keep'

    def test_delete_removes_replies_and_their_likes(self, client, db):
        owner = make_user(db, 'owner')
        fan = make_user(db, 'fan')
        video = make_video(db, owner, 'clip')
        root_id = _add(client, owner, content='root', videoId=str(video.id)).json['data']['id']
        reply_id = _add(client, fan, content='reply', videoId=str(video.id), parentCommentId=root_id).json['data']['id']
        client.post(f'/api/v1/likes/toggle/c/{reply_id}', headers=auth_header(owner))

        response = client.delete(f'/api/v1/comments/{root_id}', headers=auth_header(owner))

        assert response.json['data'] == {'deletedCommentId': root_id}
        assert db.comments.count_documents({}) == 0
        assert db.likes.count_documents({}) == 0

    def test_delete_removes_nested_reply_chain(self, client, db):
        owner = make_user(db, 'owner')
        fan = make_user(db, 'fan')
        video = make_video(db, owner, 'clip')
        root_id = _add(client, owner, content='root', videoId=str(video.id)).json['data']['id']
        reply_id = _add(client, fan, content='reply', videoId=str(video.id), parentCommentId=root_id).json['data']['id']
        nested_id = _add(client, owner, content='nested', videoId=str(video.id),
                         parentCommentId=reply_id).json['data']['id']
        deepest_id = _add(client, fan, content='deepest', videoId=str(video.id),
                          parentCommentId=nested_id).json['data']['id']
        _add(client, fan, content='unrelated', videoId=str(video.id))
        client.post(f'/api/v1/likes/toggle/c/{deepest_id}', headers=auth_header(owner))
        client.post(f'/api/v1/likes/toggle/c/{nested_id}', headers=auth_header(fan))

        response = client.delete(f'/api/v1/comments/{root_id}', headers=auth_header(owner))

        assert response.status_code == 200
        assert [c['content'] for c in db.comments.find()] == ['unrelated']
        assert db.likes.count_documents({}) == 0
