from typing import Dict

from bson import ObjectId

import common.extensions as extensions
from app.models.mongodb.comment import CommentRepository
from app.models.mongodb.like import LikeRepository
from app.models.mongodb.tweet import Tweet, TweetRepository
from app.models.mongodb.user import UserRepository, public_user_projection
from app.services.asset_service import AssetService
from common.enum.error_code import APIError
from common.enum.target_kind import TargetKind
from common.exception.exceptions import BusinessError
from common.query import JoinQuery, JoinSpec, Page, PageLabels, paginate
from common.utils import to_object_id
from common.utils.logging_utils import get_logger

logger = get_logger('tweet_service')

TWEET_LABELS = PageLabels(docs='tweets', total_docs='totalTweets')


def tweet_with_owner_query(base_filter: Dict) -> JoinQuery:
    return JoinQuery(
        base_filter=base_filter,
        joins=(JoinSpec('users', 'owner'),),
        projection={
            'content': 1,
            'image': 1,
            'likes': 1,
            'created_at': 1,
            'updated_at': 1,
            **public_user_projection('owner'),
        },
        sort=(('created_at', -1),)
    )


class TweetService:

    @staticmethod
    def _tweet_view(tweet_oid: ObjectId) -> Dict:
        docs = list(TweetRepository(extensions.mongo_db).collection.aggregate(
            tweet_with_owner_query({'_id': tweet_oid}).pipeline(limit=1)
        ))
        if not docs:
            raise BusinessError(APIError.TWEET_NOT_FOUND)
        return docs[0]

    @staticmethod
    def _find_owned_tweet(tweet_id: str, user_id: str) -> Tweet:
        tweet = TweetRepository(extensions.mongo_db).find_by_id(to_object_id(tweet_id, 'tweet id'))
        if not tweet:
            raise BusinessError(APIError.TWEET_NOT_FOUND)
        if str(tweet.owner) != str(user_id):
            raise BusinessError(APIError.TWEET_FORBIDDEN)
        return tweet

    @staticmethod
    def create_tweet(user_id: str, content: str, image=None) -> Dict:
        owner_oid = to_object_id(user_id, 'user id')
        image_asset = AssetService.upload(image, resource_type='image')

        tweet = Tweet(
            owner=owner_oid,
            content=content.strip(),
            image=image_asset.url if image_asset else None,
            image_public_id=image_asset.public_id if image_asset else None
        )
        TweetRepository(extensions.mongo_db).insert(tweet)

        logger.info(f"트윗 작성: tweet={tweet.id}, owner={user_id}")
        return TweetService._tweet_view(tweet.id)

    @staticmethod
    def get_feed(page: int, limit: int) -> Page:
        return paginate(
            TweetRepository(extensions.mongo_db).collection,
            tweet_with_owner_query({}),
            page, limit, TWEET_LABELS
        )

    @staticmethod
    def get_user_tweets(user_id: str, page: int, limit: int) -> Page:
        owner_oid = to_object_id(user_id, 'user id')
        if not UserRepository(extensions.mongo_db).exists(owner_oid):
            raise BusinessError(APIError.USER_NOT_FOUND)

        return paginate(
            TweetRepository(extensions.mongo_db).collection,
            tweet_with_owner_query({'owner': owner_oid}),
            page, limit, TWEET_LABELS
        )

    @staticmethod
    def get_tweet_by_id(tweet_id: str) -> Dict:
        return TweetService._tweet_view(to_object_id(tweet_id, 'tweet id'))

    @staticmethod
    def update_tweet(tweet_id: str, user_id: str, content: str) -> Dict:
        tweet = TweetService._find_owned_tweet(tweet_id, user_id)
        TweetRepository(extensions.mongo_db).update_fields(tweet.id, {'content': content.strip()})
        return TweetService._tweet_view(tweet.id)

    @staticmethod
    def delete_tweet(tweet_id: str, user_id: str) -> ObjectId:
        tweet = TweetService._find_owned_tweet(tweet_id, user_id)
        db = extensions.mongo_db

        comment_ids = CommentRepository(db).find_ids_by_target(TargetKind.TWEET, tweet.id)
        likes = LikeRepository(db)
        likes.delete_by_targets(TargetKind.COMMENT, comment_ids)
        CommentRepository(db).delete_many_by_ids(comment_ids)
        likes.delete_by_targets(TargetKind.TWEET, [tweet.id])
        TweetRepository(db).delete(tweet.id)

        logger.info(f"트윗 삭제: tweet={tweet.id}, comments={len(comment_ids)}")

        AssetService.delete_or_defer(tweet.image_public_id, 'image')
        return tweet.id
