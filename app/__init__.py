"""
VideNest Application
Flask 기반 영상/포토 공유 플랫폼 백엔드
"""

import logging
from urllib.parse import quote_plus

import redis
import sentry_sdk
from flask import Flask
from flask_cors import CORS
from pymongo import MongoClient
from sentry_sdk.integrations.flask import FlaskIntegration
from sentry_sdk.integrations.pymongo import PyMongoIntegration
from sentry_sdk.integrations.redis import RedisIntegration

import common.extensions as extensions
from common.extensions import api, limiter
from common.utils.logging_utils import setup_logger


def _mongo_uri(app):
    if app.config.get('MONGO_URI'):
        return app.config['MONGO_URI']

    host = app.config.get('MONGO_HOST', 'localhost')
    port = app.config.get('MONGO_PORT', 27017)
    username = app.config.get('MONGO_USERNAME')
    password = app.config.get('MONGO_PASSWORD')

    if username and password:
        return f"mongodb://{quote_plus(username)}:{quote_plus(password)}@{host}:{port}/"
    return f"mongodb://{host}:{port}/"


def _init_mongo(app, logger, mongo_client=None):
    if mongo_client is None:
        logger.info("MongoDB 연결 시도")
        try:
            mongo_client = MongoClient(
                _mongo_uri(app),
                timeoutMS=app.config['MONGO_TIMEOUT_MS'],
                serverSelectionTimeoutMS=5000,
                connectTimeoutMS=5000
            )
            mongo_client.admin.command('ping')
            logger.info("MongoDB 연결 성공")
        except Exception as e:
            logger.error(f"MongoDB 연결 실패: {e}")
            raise

    extensions.mongo_client = mongo_client
    extensions.mongo_db = mongo_client[app.config['MONGO_DB_NAME']]

    if app.config.get('MONGO_ENSURE_INDEXES'):
        from app.models.mongodb import ensure_indexes
        ensure_indexes(extensions.mongo_db)
        logger.info("MongoDB 인덱스 확인 완료")


def _init_redis(app, logger):
    extensions.redis_client = None
    if not app.config.get('REDIS_ENABLED'):
        logger.info("Redis 비활성화: 토큰 블랙리스트를 사용하지 않습니다")
        return

    try:
        if app.config.get('REDIS_URL'):
            logger.info("Redis 연결 시도: REDIS_URL 사용")
            client = redis.from_url(app.config['REDIS_URL'], decode_responses=True, socket_connect_timeout=5)
        else:
            redis_password = app.config.get('REDIS_PASSWORD') or None
            logger.info(f"Redis 연결 시도: {app.config['REDIS_HOST']}:{app.config['REDIS_PORT']}")
            client = redis.Redis(
                host=app.config['REDIS_HOST'],
                port=app.config['REDIS_PORT'],
                db=app.config['REDIS_DB'],
                password=redis_password,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5
            )

        client.ping()
        extensions.redis_client = client
        logger.info("Redis 연결 성공")

    except redis.AuthenticationError as e:
        logger.warning(f"Redis 인증 실패: {e}")
        logger.warning("Redis 설정에서 REDIS_PASSWORD를 확인하세요")
    except redis.RedisError as e:
        logger.warning(f"Redis 연결 실패: {e}")
        logger.warning("로그아웃 토큰 블랙리스트 기능이 비활성화됩니다")


def create_app(config_name='default', mongo_client=None):
    """
    Application Factory Pattern
    mongo_client 를 넘기면 (테스트의 mongomock 등) 연결/ping 을 건너뛴다.
    """
    app = Flask(__name__)

    from common.config.config import config
    config_class = config.get(config_name, config['default'])
    app.config.from_object(config_class)

    app.json.ensure_ascii = False

    if app.config.get('SENTRY_DSN'):
        sentry_sdk.init(
            dsn=app.config['SENTRY_DSN'],
            integrations=[
                FlaskIntegration(),
                PyMongoIntegration(),
                RedisIntegration(),
            ],
            environment=app.config.get('SENTRY_ENVIRONMENT', 'development'),
            traces_sample_rate=app.config.get('SENTRY_TRACES_SAMPLE_RATE', 0.2),
            send_default_pii=False,
            attach_stacktrace=True,
        )

    log_level = getattr(logging, app.config.get('LOG_LEVEL', 'INFO'))
    logger = setup_logger(app, log_level, app.config.get('LOG_DIR'))

    missing = [key for key in getattr(config_class, 'REQUIRED_SETTINGS', []) if not app.config.get(key)]
    if missing:
        raise RuntimeError(f"필수 환경변수 누락: {missing}")

    app.config['API_TITLE'] = 'VideNest API'
    app.config['API_VERSION'] = 'v1'
    app.config['OPENAPI_VERSION'] = '3.0.3'
    app.config['OPENAPI_URL_PREFIX'] = '/'
    app.config['OPENAPI_SWAGGER_UI_PATH'] = '/swagger'
    app.config['OPENAPI_SWAGGER_UI_URL'] = 'https://cdn.jsdelivr.net/npm/swagger-ui-dist/'
    app.config['OPENAPI_REDOC_PATH'] = '/redoc'
    app.config['OPENAPI_REDOC_URL'] = 'https://cdn.jsdelivr.net/npm/redoc@latest/bundles/redoc.standalone.js'

    # JWT Bearer 토큰 인증을 위한 보안 스킴 설정
    app.config['API_SPEC_OPTIONS'] = {
        'components': {
            'securitySchemes': {
                'BearerAuth': {
                    'type': 'http',
                    'scheme': 'bearer',
                    'bearerFormat': 'JWT',
                    'description': 'JWT 액세스 토큰을 입력하세요 (Bearer 접두어 없이)'
                }
            }
        }
    }

    CORS(app,
         supports_credentials=True,
         origins=app.config['CORS_ORIGINS'],
         allow_headers=["Content-Type", "Authorization", "Accept", "X-Requested-With"],
         expose_headers=["Authorization", "Content-Type"],
         methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
         max_age=3600)

    api.init_app(app)
    limiter.init_app(app)

    _init_mongo(app, logger, mongo_client)
    _init_redis(app, logger)

    from common.storage import CloudinaryAssetStorage
    extensions.asset_storage = CloudinaryAssetStorage(
        cloud_name=app.config.get('CLOUDINARY_CLOUD_NAME'),
        api_key=app.config.get('CLOUDINARY_API_KEY'),
        api_secret=app.config.get('CLOUDINARY_API_SECRET')
    )

    if app.config.get('SCHEDULER_ENABLED'):
        from common.scheduler import init_scheduler
        init_scheduler(app)

    from app.routes import ALL_BLUEPRINTS
    for blueprint in ALL_BLUEPRINTS:
        api.register_blueprint(blueprint)

    from common.exception.error_handler import register_error_handlers
    register_error_handlers(app)

    return app
