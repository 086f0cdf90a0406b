"""
스케줄 작업 정의 및 등록
- 좋아요/구독자 카운터 정합성 보정
- 삭제 실패한 원격 에셋 재시도
"""

from common.extensions import scheduler
from common.scheduler.jobs import CounterReconciliationJob, AssetCleanupJob
from common.utils.logging_utils import get_logger

logger = get_logger('scheduler_tasks')


def register_scheduled_tasks():
    """
    모든 스케줄 작업을 등록하는 함수
    """
    # 매일 새벽 4시에 카운터 정합성 보정
    scheduler.add_job(
        id='reconcile_counters',
        func=execute_counter_reconciliation_job,
        trigger='cron',
        hour=4,
        minute=0,
        replace_existing=True
    )

    # 매시 정각에 원격 에셋 삭제 재시도
    scheduler.add_job(
        id='cleanup_pending_assets',
        func=execute_asset_cleanup_job,
        trigger='cron',
        minute=0,
        replace_existing=True
    )

    logger.info("모든 스케줄 작업이 등록되었습니다.")
    logger.info("카운터 정합성 보정: 매일 04:00")
    logger.info("원격 에셋 삭제 재시도: 매시 정각")


def execute_counter_reconciliation_job():
    """카운터 정합성 보정 Job 실행 (Flask 앱 컨텍스트 내에서)"""
    with scheduler.app.app_context():
        try:
            logger.info("카운터 정합성 보정 작업 시작")
            CounterReconciliationJob().execute()
            logger.info("카운터 정합성 보정 작업 완료")
        except Exception as e:
            logger.error(f"카운터 정합성 보정 작업 실패: {str(e)}", exc_info=True)


def execute_asset_cleanup_job():
    """원격 에셋 삭제 재시도 Job 실행 (Flask 앱 컨텍스트 내에서)"""
    with scheduler.app.app_context():
        try:
            AssetCleanupJob().execute()
        except Exception as e:
            logger.error(f"원격 에셋 삭제 재시도 작업 실패: {str(e)}", exc_info=True)
