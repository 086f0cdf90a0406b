import pytest

from tests.conftest import DEFAULT_PASSWORD, auth_header, make_user, make_video


@pytest.fixture
def tight_limits(app):
    original = {key: app.config[key] for key in ('AUTH_RATE_LIMIT', 'COMMENT_RATE_LIMIT')}
    app.config['AUTH_RATE_LIMIT'] = '2 per minute'
    app.config['COMMENT_RATE_LIMIT'] = '2 per minute'
    yield
    app.config.update(original)


class TestRateLimit:

    def test_failed_logins_are_throttled(self, client, db, tight_limits):
        make_user(db, 'alice')
        wrong = {'username': 'alice', 'password': 'not-the-password'}

        statuses = [client.post('/api/v1/users/login', json=wrong).status_code for _ in range(2)]
        blocked = client.post('/api/v1/users/login', json=wrong)

        assert statuses == [401, 401]
        assert blocked.status_code == 429
        assert blocked.json['statusCode'] == 429
        assert blocked.json['success'] is False
        assert blocked.json['data'] is None

    def test_successful_logins_are_not_counted(self, client, db, tight_limits):
        make_user(db, 'alice')
        right = {'username': 'alice', 'password': DEFAULT_PASSWORD}

        statuses = [client.post('/api/v1/users/login', json=right).status_code for _ in range(4)]

        assert statuses == [200, 200, 200, 200]

    def test_comment_creation_is_throttled(self, client, db, tight_limits):
        owner = make_user(db, 'owner')
        video = make_video(db, owner, 'clip')
        body = {'content': 'spam', 'videoId': str(video.id)}

        statuses = [
            client.post('/api/v1/comments', headers=auth_header(owner), json=body).status_code
            for _ in range(3)
        ]

        assert statuses == [201, 201, 429]
        assert db.comments.count_documents({}) == 2
