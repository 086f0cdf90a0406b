import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

ROOT_LOGGER_NAME = 'videnest'

LOG_FORMAT = '[%(asctime)s] %(levelname)s in %(name)s (%(filename)s:%(lineno)d): %(message)s'


def setup_logger(app=None, log_level=None, log_dir='logs'):
    """
    'videnest' 루트 로거에 핸들러를 붙인다.
    get_logger()로 만든 하위 로거들은 전파(propagate)로 같은 핸들러를 사용하고,
    app이 주어지면 Flask app.logger도 같은 핸들러를 공유한다.
    """
    if log_level is None:
        log_level = logging.INFO

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(log_level)

    if not logger.handlers:
        formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

        #NOTE: 콘솔 핸들러 - stdout으로 출력
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        if log_dir:
            #NOTE: 파일 핸들러 - 10MB 단위 로테이션, 최대 5개 파일
            path = Path(log_dir)
            path.mkdir(exist_ok=True)

            file_handler = RotatingFileHandler(
                path / 'videnest.log',
                maxBytes=10 * 1024 * 1024,
                backupCount=5,
                encoding='utf-8'
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)

            #NOTE: 에러 로그 별도 파일 저장
            error_handler = RotatingFileHandler(
                path / 'error.log',
                maxBytes=10 * 1024 * 1024,
                backupCount=5,
                encoding='utf-8'
            )
            error_handler.setLevel(logging.ERROR)
            error_handler.setFormatter(formatter)

            logger.addHandler(file_handler)
            logger.addHandler(error_handler)

    if app:
        app.logger.setLevel(log_level)
        for handler in logger.handlers:
            if handler not in app.logger.handlers:
                app.logger.addHandler(handler)

    return logger


def get_logger(name=None):
    if name:
        return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')
    return logging.getLogger(ROOT_LOGGER_NAME)
