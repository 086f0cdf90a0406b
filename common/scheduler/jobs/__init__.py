"""
스케줄러 Job 클래스 모듈
"""

from .counter_reconciliation_job import CounterReconciliationJob
from .asset_cleanup_job import AssetCleanupJob

__all__ = [
    'CounterReconciliationJob',
    'AssetCleanupJob'
]
