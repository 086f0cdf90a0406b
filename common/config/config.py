import os
from datetime import timedelta


def _env_flag(name, default='false'):
    return os.getenv(name, default).lower() in ('1', 'true', 'yes', 'on')


class Config:
    SECRET_KEY = os.getenv('SECRET_KEY')

    MONGO_URI = os.getenv('MONGO_URI')
    MONGO_USERNAME = os.getenv('MONGO_USERNAME')
    MONGO_PASSWORD = os.getenv('MONGO_PASSWORD')
    MONGO_HOST = os.getenv('MONGO_HOST', 'localhost')
    MONGO_PORT = int(os.getenv('MONGO_PORT', 27017))
    MONGO_DB_NAME = os.getenv('MONGO_DB_NAME', 'videnest')

    #NOTE: 모든 DB 작업에 적용되는 기본 deadline (pymongo timeoutMS)
    MONGO_TIMEOUT_MS = int(os.getenv('MONGO_TIMEOUT_MS', 10000))
    #NOTE: 레플리카셋 환경에서만 켤 것 (standalone mongod는 트랜잭션 미지원)
    MONGO_TRANSACTIONS_ENABLED = _env_flag('MONGO_TRANSACTIONS_ENABLED')
    MONGO_ENSURE_INDEXES = _env_flag('MONGO_ENSURE_INDEXES', 'true')

    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY')
    JWT_ALGORITHM = 'HS256'
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=1)
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(days=10)

    REDIS_HOST = os.getenv('REDIS_HOST', 'localhost')
    REDIS_PORT = int(os.getenv('REDIS_PORT', 6379))
    REDIS_DB = int(os.getenv('REDIS_DB', 0))
    REDIS_PASSWORD = os.getenv('REDIS_PASSWORD')
    REDIS_URL = os.getenv('REDIS_URL')
    REDIS_ENABLED = _env_flag('REDIS_ENABLED', 'true')

    CLOUDINARY_CLOUD_NAME = os.getenv('CLOUDINARY_CLOUD_NAME')
    CLOUDINARY_API_KEY = os.getenv('CLOUDINARY_API_KEY')
    CLOUDINARY_API_SECRET = os.getenv('CLOUDINARY_API_SECRET')

    CORS_ORIGINS = [o.strip() for o in os.getenv('CORS_ORIGINS', 'http://localhost:5173').split(',') if o.strip()]

    SENTRY_DSN = os.getenv('SENTRY_DSN')
    SENTRY_ENVIRONMENT = os.getenv('SENTRY_ENVIRONMENT', 'development')
    SENTRY_TRACES_SAMPLE_RATE = float(os.getenv('SENTRY_TRACES_SAMPLE_RATE', 0.2))

    SCHEDULER_ENABLED = _env_flag('SCHEDULER_ENABLED', 'true')

    #NOTE: RATELIMIT_* 는 Flask-Limiter 가 직접 읽는 설정, *_RATE_LIMIT 은 라우트별 한도
    RATELIMIT_ENABLED = _env_flag('RATELIMIT_ENABLED', 'true')
    RATELIMIT_STORAGE_URI = os.getenv('RATELIMIT_STORAGE_URI', 'memory://')
    RATELIMIT_DEFAULT = os.getenv('RATELIMIT_DEFAULT', '3000 per 15 minutes')
    RATELIMIT_HEADERS_ENABLED = True
    AUTH_RATE_LIMIT = os.getenv('AUTH_RATE_LIMIT', '100 per 15 minutes')
    UPLOAD_RATE_LIMIT = os.getenv('UPLOAD_RATE_LIMIT', '1000 per hour')
    COMMENT_RATE_LIMIT = os.getenv('COMMENT_RATE_LIMIT', '1000 per hour')
    LIKE_RATE_LIMIT = os.getenv('LIKE_RATE_LIMIT', '2000 per hour')
    SEARCH_RATE_LIMIT = os.getenv('SEARCH_RATE_LIMIT', '1000 per 15 minutes')

    MAX_CONTENT_LENGTH = 100 * 1024 * 1024
    BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
    UPLOAD_FOLDER = os.getenv('UPLOAD_FOLDER', os.path.join(BASE_DIR, 'uploads'))

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = 'DEBUG'


class ProductionConfig(Config):
    DEBUG = False
    LOG_LEVEL = 'WARNING'
    REQUIRED_SETTINGS = ['JWT_SECRET_KEY', 'MONGO_DB_NAME', 'CLOUDINARY_CLOUD_NAME']


class TestingConfig(Config):
    TESTING = True
    MONGO_DB_NAME = 'videnest_test'
    MONGO_TRANSACTIONS_ENABLED = False
    MONGO_ENSURE_INDEXES = False
    JWT_SECRET_KEY = 'videnest-test-secret'
    REDIS_ENABLED = False
    SCHEDULER_ENABLED = False
    SENTRY_DSN = None
    LOG_LEVEL = 'WARNING'
    LOG_DIR = None


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig,
}
