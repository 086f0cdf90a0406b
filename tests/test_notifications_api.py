from app.models.mongodb import Notification, NotificationRepository
from common.enum.notification_type import NotificationType
from tests.conftest import auth_header, days_ago, make_user, make_video


def _notify(db, recipient, sender=None, **overrides):
    notification = Notification(
        recipient=recipient.id,
        sender=sender.id if sender else None,
        type=overrides.pop('type', NotificationType.LIKE),
        message=overrides.pop('message', '좋아요를 눌렀습니다.'),
        **overrides
    )
    NotificationRepository(db).insert(notification)
    return notification


class TestListNotifications:

    def test_lists_own_notifications_with_unread_count(self, client, db):
        me = make_user(db, 'me')
        sender = make_user(db, 'sender')
        video = make_video(db, me, 'clip')
        _notify(db, me, sender, video=video.id, created_at=days_ago(2))
        _notify(db, me, sender, is_read=True, created_at=days_ago(1))
        _notify(db, sender, me)

        data = client.get('/api/v1/notifications', headers=auth_header(me)).json['data']

        assert data['totalNotifications'] == 2
        assert data['unreadCount'] == 1
        newest, oldest = data['notifications']
        assert newest['isRead'] is True
        assert oldest['sender']['username'] == 'sender'
        assert oldest['video']['title'] == 'clip'

    def test_is_read_filter(self, client, db):
        me = make_user(db, 'me')
        _notify(db, me)
        _notify(db, me, is_read=True)

        data = client.get('/api/v1/notifications?isRead=false', headers=auth_header(me)).json['data']

        assert data['totalNotifications'] == 1
        assert data['notifications'][0]['isRead'] is False

    def test_notification_survives_deleted_sender(self, client, db):
        me = make_user(db, 'me')
        ghost = make_user(db, 'ghost')
        _notify(db, me, ghost)
        db.users.delete_one({'_id': ghost.id})

        data = client.get('/api/v1/notifications', headers=auth_header(me)).json['data']

        assert data['totalNotifications'] == 1
        assert len(data['notifications']) == 1

    def test_unpublished_video_details_hidden_from_non_owner(self, client, db):
        me = make_user(db, 'me')
        creator = make_user(db, 'creator')
        video = make_video(db, creator, 'secret', thumbnail='https://res.example.com/secret.jpg')
        _notify(db, me, creator, type=NotificationType.VIDEO_UPLOAD, video=video.id)
        _notify(db, creator, me, video=video.id)
        db.videos.update_one({'_id': video.id}, {'$set': {'is_published': False}})

        mine = client.get('/api/v1/notifications', headers=auth_header(me)).json['data']
        owners = client.get('/api/v1/notifications', headers=auth_header(creator)).json['data']

        hidden = mine['notifications'][0]['video']
        assert hidden['id'] == str(video.id)
        assert hidden.get('title') is None
        assert hidden.get('thumbnail') is None
        assert hidden.get('duration') is None
        assert 'isPublished' not in hidden
        assert owners['notifications'][0]['video']['title'] == 'secret'

    def test_requires_login(self, client, db):
        assert client.get('/api/v1/notifications').status_code == 401


class TestUpdateNotifications:

    def test_mark_single_as_read(self, client, db):
        me = make_user(db, 'me')
        other = make_user(db, 'other')
        notification = _notify(db, me)

        forbidden = client.patch(f'/api/v1/notifications/{notification.id}/read', headers=auth_header(other))
        marked = client.patch(f'/api/v1/notifications/{notification.id}/read', headers=auth_header(me))

        assert forbidden.status_code == 403
        assert marked.json['data']['isRead'] is True
        assert marked.json['data']['readAt'] is not None

    def test_mark_all_as_read(self, client, db):
        me = make_user(db, 'me')
        _notify(db, me)
        _notify(db, me)
        _notify(db, me, is_read=True)

        response = client.patch('/api/v1/notifications/read-all', headers=auth_header(me))

        assert response.json['data'] == {'modifiedCount': 2}
        assert db.notifications.count_documents({'is_read': False}) == 0

    def test_delete(self, client, db):
        me = make_user(db, 'me')
        other = make_user(db, 'other')
        notification = _notify(db, me)

        forbidden = client.delete(f'/api/v1/notifications/{notification.id}', headers=auth_header(other))
        deleted = client.delete(f'/api/v1/notifications/{notification.id}', headers=auth_header(me))
        missing = client.delete(f'/api/v1/notifications/{notification.id}', headers=auth_header(me))

        assert forbidden.status_code == 403
        assert deleted.json['data'] == {'deletedNotificationId': str(notification.id)}
        assert missing.status_code == 404
