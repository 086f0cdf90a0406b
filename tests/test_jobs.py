from app.models.mongodb import PendingAssetDeletionRepository
from common.scheduler.jobs import AssetCleanupJob, CounterReconciliationJob
from tests.conftest import make_tweet, make_user, make_video


class ConcurrentIncrement:
    """읽기 직후, 일괄 보정 전에 다른 요청이 카운터를 올린 상황"""

    def __init__(self, collection, target_id, counter_field):
        self.collection = collection
        self.target_id = target_id
        self.counter_field = counter_field

    def __getattr__(self, name):
        return getattr(self.collection, name)

    def find(self, *args, **kwargs):
        return list(self.collection.find(*args, **kwargs))

    def bulk_write(self, operations, **kwargs):
        self.collection.update_one({'_id': self.target_id}, {'$inc': {self.counter_field: 1}})
        return self.collection.bulk_write(operations, **kwargs)


class TestCounterReconciliationJob:

    def test_fixes_drifted_counters_only(self, db):
        owner = make_user(db, 'owner', subscriber_count=7)
        fan = make_user(db, 'fan')
        drifted = make_video(db, owner, 'drifted', likes=5)
        correct = make_video(db, owner, 'correct', likes=1)
        tweet = make_tweet(db, owner, likes=0)
        for target_kind, target_id in (('video', drifted.id), ('video', correct.id), ('tweet', tweet.id)):
            db.likes.insert_one({'liked_by': fan.id, 'target_kind': target_kind, 'target_id': target_id})
        db.subscriptions.insert_one({'subscriber': fan.id, 'channel': owner.id})

        fixed = CounterReconciliationJob().execute()

        assert fixed == {'videos': 1, 'comments': 0, 'tweets': 1, 'users': 1}
        assert db.videos.find_one({'_id': drifted.id})['likes'] == 1
        assert db.tweets.find_one({'_id': tweet.id})['likes'] == 1
        assert db.users.find_one({'_id': owner.id})['subscriber_count'] == 1

    def test_second_run_is_noop(self, db):
        owner = make_user(db, 'owner', subscriber_count=3)
        CounterReconciliationJob().execute()

        assert CounterReconciliationJob().execute() == {'videos': 0, 'comments': 0, 'tweets': 0, 'users': 0}
        assert db.users.find_one({'_id': owner.id})['subscriber_count'] == 0

    def test_counter_changed_after_read_is_left_alone(self, db):
        owner = make_user(db, 'owner')
        video = make_video(db, owner, 'busy', likes=5)
        racing = ConcurrentIncrement(db.videos, video.id, 'likes')

        fixed = CounterReconciliationJob()._reconcile(racing, 'likes', {})

        assert fixed == 0
        assert db.videos.find_one({'_id': video.id})['likes'] == 6

    def test_missing_counter_field_is_filled(self, db):
        owner = make_user(db, 'owner')
        fan = make_user(db, 'fan')
        video = make_video(db, owner, 'legacy')
        db.videos.update_one({'_id': video.id}, {'$unset': {'likes': ''}})
        db.likes.insert_one({'liked_by': fan.id, 'target_kind': 'video', 'target_id': video.id})

        fixed = CounterReconciliationJob().execute()

        assert fixed['videos'] == 1
        assert db.videos.find_one({'_id': video.id})['likes'] == 1


class TestAssetCleanupJob:

    def test_resolves_deleted_assets_and_retries_failures(self, db, storage):
        repository = PendingAssetDeletionRepository(db)
        repository.record_failure('videnest/ok', 'image', 'timeout')
        repository.record_failure('videnest/still-broken', 'video', 'timeout')
        storage.fail_deletes.add('videnest/still-broken')

        resolved = AssetCleanupJob().execute()

        assert resolved == 1
        assert storage.deleted == ['videnest/ok']
        remaining = list(db.pending_asset_deletions.find())
        assert [doc['public_id'] for doc in remaining] == ['videnest/still-broken']
        assert remaining[0]['attempts'] == 2

    def test_gives_up_after_max_attempts(self, db, storage):
        db.pending_asset_deletions.insert_one({
            'public_id': 'videnest/dead',
            'resource_type': 'image',
            'attempts': PendingAssetDeletionRepository.MAX_ATTEMPTS
        })

        assert AssetCleanupJob().execute() == 0
        assert storage.deleted == []

    def test_empty_queue(self, db):
        assert AssetCleanupJob().execute() == 0
