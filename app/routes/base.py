from datetime import datetime

from flask_smorest import Blueprint

base_blueprint = Blueprint(
    'health',
    __name__,
    url_prefix='/api/v1/health',
    description='헬스 체크'
)


@base_blueprint.route('', methods=['GET'])
def health_check():
    return {
        "status": "ok",
        "service": "videnest",
        "time": datetime.now().isoformat()
    }
