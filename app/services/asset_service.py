from typing import Optional

from cloudinary.exceptions import Error as CloudinaryError
from flask import current_app
from werkzeug.datastructures import FileStorage

import common.extensions as extensions
from app.models.mongodb.pending_asset_deletion import PendingAssetDeletionRepository
from common.storage import UploadedAsset, stage_upload, discard_staged
from common.utils.logging_utils import get_logger

logger = get_logger('asset_service')


class AssetService:

    @staticmethod
    def upload(file: Optional[FileStorage], resource_type: str = 'image') -> Optional[UploadedAsset]:
        """로컬에 임시 저장 → 원격 업로드 → 임시 파일 삭제"""
        if file is None or not file.filename:
            return None

        staged_path = stage_upload(file, current_app.config['UPLOAD_FOLDER'])
        try:
            return extensions.asset_storage.upload(staged_path, resource_type=resource_type)
        finally:
            discard_staged(staged_path)

    @staticmethod
    def delete_or_defer(public_id: Optional[str], resource_type: str = 'image') -> bool:
        """
        원격 에셋 삭제를 한 번 시도한다. 실패하면 pending_asset_deletions 에 기록하고
        AssetCleanupJob 이 재시도한다. 호출한 요청은 실패시키지 않는다.
        """
        if not public_id:
            return True

        try:
            if extensions.asset_storage.delete(public_id, resource_type=resource_type):
                return True
            error = 'destroy 응답이 ok/not found 가 아님'
        except CloudinaryError as e:
            error = str(e)

        logger.warning(f"원격 에셋 삭제 실패, 재시도 대기열에 등록: {public_id} ({error})")
        PendingAssetDeletionRepository(extensions.mongo_db).record_failure(public_id, resource_type, error)
        return False
