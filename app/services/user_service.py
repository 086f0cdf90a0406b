import bcrypt
from typing import Dict, Optional

from pymongo.errors import DuplicateKeyError
from werkzeug.datastructures import FileStorage

import common.extensions as extensions
from app.dto.auth import AuthTokenDto, ChannelProfileDto
from app.models.mongodb.subscription import SubscriptionRepository, subscription_relation_key
from app.models.mongodb.user import User, UserRepository
from app.services.asset_service import AssetService
from common.decorator.auth_decorators import BLACKLIST_KEY
from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.utils import create_access_token, create_refresh_token, decode_token, to_object_id
from common.utils.jwt_utils import remaining_seconds
from common.utils.logging_utils import get_logger
from common.utils.object_id import to_object_id_or_none

logger = get_logger('user_service')

#NOTE: 응답에 절대 포함하면 안 되는 필드
PRIVATE_USER_FIELDS = ('password', 'refresh_token', 'avatar_public_id', 'cover_image_public_id')


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')


def check_password(password: str, hashed: str) -> bool:
    if not hashed:
        return False
    return bcrypt.checkpw(password.encode('utf-8'), hashed.encode('utf-8'))


def user_view(user: User) -> Dict:
    doc = user.to_dict()
    for name in PRIVATE_USER_FIELDS:
        doc.pop(name, None)
    return doc


class UserService:

    @staticmethod
    def _get_user(user_id: str) -> User:
        user = UserRepository(extensions.mongo_db).find_by_id(to_object_id(user_id, 'user id'))
        if not user:
            raise BusinessError(APIError.USER_NOT_FOUND)
        return user

    @staticmethod
    def _issue_tokens(user: User) -> AuthTokenDto:
        access_token = create_access_token(user.id)
        refresh_token = create_refresh_token(user.id)

        updated = UserRepository(extensions.mongo_db).update_fields(user.id, {'refresh_token': refresh_token})

        return AuthTokenDto(
            access_token=access_token,
            refresh_token=refresh_token,
            user=user_view(updated or user)
        )

    @staticmethod
    def register(username: str, email: str, full_name: str, password: str,
                 avatar: Optional[FileStorage] = None, cover_image: Optional[FileStorage] = None) -> Dict:
        repository = UserRepository(extensions.mongo_db)

        username = username.strip().lower()
        email = email.strip().lower()

        if repository.find_by_username_or_email(username=username, email=email):
            raise BusinessError(APIError.AUTH_DUPLICATE_USER)

        avatar_asset = AssetService.upload(avatar)
        cover_asset = AssetService.upload(cover_image)

        user = User(
            username=username,
            email=email,
            full_name=full_name.strip(),
            password=hash_password(password),
            avatar=avatar_asset.url if avatar_asset else None,
            avatar_public_id=avatar_asset.public_id if avatar_asset else None,
            cover_image=cover_asset.url if cover_asset else None,
            cover_image_public_id=cover_asset.public_id if cover_asset else None
        )

        try:
            repository.insert(user)
        except DuplicateKeyError:
            #NOTE: 동시 가입으로 unique 인덱스에 걸린 경우 업로드한 이미지 회수
            for asset in (avatar_asset, cover_asset):
                if asset:
                    AssetService.delete_or_defer(asset.public_id)
            raise BusinessError(APIError.AUTH_DUPLICATE_USER)

        logger.info(f"회원 가입: {user.id} ({username})")
        return user_view(user)

    @staticmethod
    def login(password: str, username: str = None, email: str = None) -> AuthTokenDto:
        if not username and not email:
            raise BusinessError(APIError.INVALID_INPUT_VALUE, "username 또는 email 이 필요합니다.")

        user = UserRepository(extensions.mongo_db).find_by_username_or_email(username=username, email=email)
        if not user:
            raise BusinessError(APIError.USER_NOT_FOUND)
        if not check_password(password, user.password):
            raise BusinessError(APIError.AUTH_INVALID_CREDENTIALS)

        return UserService._issue_tokens(user)

    @staticmethod
    def logout(user_id: str, access_token: str):
        UserRepository(extensions.mongo_db).clear_refresh_token(to_object_id(user_id, 'user id'))

        if extensions.redis_client is None:
            logger.warning("Redis 사용 불가, 토큰 블랙리스트 기능 비활성화")
            return

        payload = decode_token(access_token)
        extensions.redis_client.setex(BLACKLIST_KEY.format(token=access_token), remaining_seconds(payload), "1")

    @staticmethod
    def refresh_token(incoming_refresh_token: str) -> AuthTokenDto:
        if not incoming_refresh_token:
            raise BusinessError(APIError.AUTH_REQUIRED)

        payload = decode_token(incoming_refresh_token)
        if payload.get('type') != 'refresh':
            raise BusinessError(APIError.AUTH_INVALID_REFRESH_TOKEN)

        user_oid = to_object_id_or_none(payload.get('sub'))
        user = UserRepository(extensions.mongo_db).find_by_id(user_oid) if user_oid else None
        if not user:
            raise BusinessError(APIError.AUTH_INVALID_REFRESH_TOKEN)

        #NOTE: 저장된 토큰과 다르면 이미 사용됐거나 로그아웃된 토큰
        if user.refresh_token != incoming_refresh_token:
            raise BusinessError(APIError.AUTH_INVALID_REFRESH_TOKEN)

        return UserService._issue_tokens(user)

    @staticmethod
    def get_current_user(user_id: str) -> Dict:
        return user_view(UserService._get_user(user_id))

    @staticmethod
    def change_password(user_id: str, old_password: str, new_password: str):
        user = UserService._get_user(user_id)

        if not check_password(old_password, user.password):
            raise BusinessError(APIError.AUTH_INVALID_PASSWORD)

        UserRepository(extensions.mongo_db).update_fields(user.id, {'password': hash_password(new_password)})
        logger.info(f"비밀번호 변경: {user.id}")

    @staticmethod
    def update_account(user_id: str, full_name: str, email: str) -> Dict:
        user = UserService._get_user(user_id)
        repository = UserRepository(extensions.mongo_db)

        email = email.strip().lower()
        if email != user.email:
            other = repository.find_by_username_or_email(email=email)
            if other and other.id != user.id:
                raise BusinessError(APIError.AUTH_DUPLICATE_USER)

        updated = repository.update_fields(user.id, {'full_name': full_name.strip(), 'email': email})
        return user_view(updated)

    @staticmethod
    def _replace_image(user_id: str, file: Optional[FileStorage], field_name: str) -> Dict:
        user = UserService._get_user(user_id)

        asset = AssetService.upload(file)
        if asset is None:
            raise BusinessError(APIError.ASSET_REQUIRED)

        old_public_id = getattr(user, f'{field_name}_public_id')
        updated = UserRepository(extensions.mongo_db).update_fields(user.id, {
            field_name: asset.url,
            f'{field_name}_public_id': asset.public_id
        })

        AssetService.delete_or_defer(old_public_id)
        return user_view(updated)

    @staticmethod
    def update_avatar(user_id: str, avatar: Optional[FileStorage]) -> Dict:
        return UserService._replace_image(user_id, avatar, 'avatar')

    @staticmethod
    def update_cover_image(user_id: str, cover_image: Optional[FileStorage]) -> Dict:
        return UserService._replace_image(user_id, cover_image, 'cover_image')

    @staticmethod
    def get_channel_profile(username: str, requester_id: Optional[str]) -> ChannelProfileDto:
        channel = UserRepository(extensions.mongo_db).find_by_username(username.strip())
        if not channel:
            raise BusinessError(APIError.CHANNEL_NOT_FOUND)

        subscriptions = SubscriptionRepository(extensions.mongo_db)
        requester_oid = to_object_id_or_none(requester_id)

        is_subscribed = False
        if requester_oid is not None:
            is_subscribed = subscriptions.collection.find_one(
                subscription_relation_key(requester_oid, channel.id), {'_id': 1}
            ) is not None

        return ChannelProfileDto(
            id=channel.id,
            username=channel.username,
            full_name=channel.full_name,
            email=channel.email,
            avatar=channel.avatar,
            cover_image=channel.cover_image,
            subscribers_count=subscriptions.count_by_channel(channel.id),
            channels_subscribed_to_count=subscriptions.count_by_subscriber(channel.id),
            is_subscribed=is_subscribed,
            created_at=channel.created_at
        )
