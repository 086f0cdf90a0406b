from flask_smorest import Api
from flask_apscheduler import APScheduler
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

api = Api()

redis_client = None

mongo_client = None
mongo_db = None

asset_storage = None

scheduler = APScheduler()

limiter = Limiter(key_func=get_remote_address)
