"""
Scheduler 초기화 및 설정
APScheduler를 사용한 백그라운드 작업 스케줄링
"""
from flask import Flask
from common.extensions import scheduler


def init_scheduler(app: Flask):
    """
    스케줄러 초기화 및 앱에 등록
    """
    app.config['SCHEDULER_API_ENABLED'] = False
    app.config['SCHEDULER_TIMEZONE'] = app.config.get('SCHEDULER_TIMEZONE', 'UTC')

    scheduler.init_app(app)

    from common.scheduler.tasks import register_scheduled_tasks
    register_scheduled_tasks()

    if not scheduler.running:
        scheduler.start()


__all__ = ['init_scheduler']
