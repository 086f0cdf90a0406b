from tests.conftest import auth_header, make_user


class TestToggleSubscription:

    def test_subscribe_then_unsubscribe(self, client, db):
        channel = make_user(db, 'channel')
        fan = make_user(db, 'fan')
        url = f'/api/v1/subscriptions/c/{channel.id}'

        on = client.post(url, headers=auth_header(fan))
        status_on = client.get(f'/api/v1/subscriptions/status/c/{channel.id}', headers=auth_header(fan))
        off = client.post(url, headers=auth_header(fan))

        assert on.json['data'] == {'isSubscribed': True}
        assert status_on.json['data'] == {'isSubscribed': True}
        assert off.json['data'] == {'isSubscribed': False}
        assert db.subscriptions.count_documents({}) == 0
        assert db.users.find_one({'_id': channel.id})['subscriber_count'] == 0

    def test_subscribe_notifies_channel(self, client, db):
        channel = make_user(db, 'channel')
        fan = make_user(db, 'fan')

        client.post(f'/api/v1/subscriptions/c/{channel.id}', headers=auth_header(fan))

        notification = db.notifications.find_one({'type': 'SUBSCRIPTION'})
        assert notification['recipient'] == channel.id
        assert notification['sender'] == fan.id

    def test_self_subscription_is_400(self, client, db):
        user = make_user(db, 'user')

        response = client.post(f'/api/v1/subscriptions/c/{user.id}', headers=auth_header(user))

        assert response.status_code == 400
        assert db.subscriptions.count_documents({}) == 0

    def test_unknown_channel_is_404(self, client, db):
        fan = make_user(db, 'fan')

        response = client.post('/api/v1/subscriptions/c/65a000000000000000000000', headers=auth_header(fan))

        assert response.status_code == 404


class TestSubscriptionLists:

    def test_channel_subscribers(self, client, db):
        channel = make_user(db, 'channel')
        fans = [make_user(db, f'fan{i}') for i in range(3)]
        for fan in fans:
            client.post(f'/api/v1/subscriptions/c/{channel.id}', headers=auth_header(fan))

        data = client.get(f'/api/v1/subscriptions/c/{channel.id}/subscribers?limit=2').json['data']

        assert data['totalSubscribers'] == 3
        assert data['totalPages'] == 2
        assert len(data['subscribers']) == 2
        assert 'password' not in data['subscribers'][0]['user']
        assert 'email' not in data['subscribers'][0]['user']

    def test_subscribed_channels(self, client, db):
        fan = make_user(db, 'fan')
        first = make_user(db, 'first')
        second = make_user(db, 'second')
        client.post(f'/api/v1/subscriptions/c/{first.id}', headers=auth_header(fan))
        client.post(f'/api/v1/subscriptions/c/{second.id}', headers=auth_header(fan))

        data = client.get('/api/v1/subscriptions/subscribed', headers=auth_header(fan)).json['data']

        usernames = {item['user']['username'] for item in data['subscribedChannels']}
        assert usernames == {'first', 'second'}
        assert all(item['user']['subscriberCount'] == 1 for item in data['subscribedChannels'])

    def test_subscribed_requires_login(self, client, db):
        assert client.get('/api/v1/subscriptions/subscribed').status_code == 401
