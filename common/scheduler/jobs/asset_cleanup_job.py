from cloudinary.exceptions import Error as CloudinaryError

import common.extensions as extensions
from app.models.mongodb.pending_asset_deletion import PendingAssetDeletionRepository
from common.utils.logging_utils import get_logger

logger = get_logger('asset_cleanup_job')


class AssetCleanupJob:

    def __init__(self, batch_size: int = 100):
        self.batch_size = batch_size

    def execute(self) -> int:
        repository = PendingAssetDeletionRepository(extensions.mongo_db)
        pending_items = repository.find_retryable(self.batch_size)

        if not pending_items:
            return 0

        resolved = 0
        for pending in pending_items:
            try:
                deleted = extensions.asset_storage.delete(pending.public_id, resource_type=pending.resource_type)
            except CloudinaryError as e:
                repository.record_failure(pending.public_id, pending.resource_type, str(e))
                continue

            if deleted:
                repository.resolve(pending.public_id)
                resolved += 1
            else:
                repository.record_failure(pending.public_id, pending.resource_type, 'destroy 응답이 ok/not found 가 아님')

        logger.info(f"원격 에셋 정리: {resolved}/{len(pending_items)}건 삭제")
        return resolved
