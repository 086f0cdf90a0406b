from tests.conftest import auth_header, make_user


class TestErrorEnvelope:

    def test_invalid_object_id(self, client, db):
        response = client.get('/api/v1/tweets/12345')

        assert response.status_code == 400
        assert response.json == {
            'statusCode': 400,
            'data': None,
            'message': response.json['message'],
            'success': False,
            'errors': []
        }

    def test_missing_token(self, client, db):
        response = client.get('/api/v1/notifications')

        assert response.status_code == 401
        assert response.json['success'] is False
        assert response.json['data'] is None

    def test_garbage_token(self, client, db):
        response = client.get('/api/v1/notifications', headers={'Authorization': 'Bearer not.a.jwt'})

        assert response.status_code == 401

    def test_validation_errors_are_listed(self, client, db):
        user = make_user(db, 'user')

        response = client.post('/api/v1/playlists', headers=auth_header(user), json={'description': 'x'})

        assert response.status_code == 400
        assert any(error.startswith('name') for error in response.json['errors'])

    def test_unknown_route_is_404_envelope(self, client, db):
        response = client.get('/api/v1/nothing-here')

        assert response.status_code == 404
        assert response.json['success'] is False


class TestHealth:

    def test_health(self, client):
        response = client.get('/api/v1/health')

        assert response.status_code == 200
        assert response.json['status'] == 'ok'
        assert response.json['service'] == 'videnest'
