from typing import Dict, List

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING


def subscription_relation_key(subscriber: ObjectId, channel: ObjectId) -> Dict:
    """subscriptions 컬렉션의 unique 키 (subscriber, channel)"""
    return {'subscriber': subscriber, 'channel': channel}


class SubscriptionRepository:

    COLLECTION_NAME = 'subscriptions'

    def __init__(self, db):
        self.collection = db[self.COLLECTION_NAME]

    def ensure_indexes(self):
        self.collection.create_index(
            [('subscriber', ASCENDING), ('channel', ASCENDING)],
            unique=True,
            name='unique_subscription'
        )
        self.collection.create_index([('channel', ASCENDING), ('created_at', DESCENDING)])

    def count_by_channel(self, channel_id: ObjectId) -> int:
        return self.collection.count_documents({'channel': channel_id})

    def count_by_subscriber(self, subscriber_id: ObjectId) -> int:
        return self.collection.count_documents({'subscriber': subscriber_id})

    def find_subscriber_ids(self, channel_id: ObjectId) -> List[ObjectId]:
        cursor = self.collection.find({'channel': channel_id}, {'subscriber': 1})
        return [doc['subscriber'] for doc in cursor]

    def count_grouped_by_channel(self) -> Dict[ObjectId, int]:
        """채널별 구독자 수 (카운터 정합성 점검용)"""
        pipeline = [{'$group': {'_id': '$channel', 'count': {'$sum': 1}}}]
        return {doc['_id']: doc['count'] for doc in self.collection.aggregate(pipeline)}
