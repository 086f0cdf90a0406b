from dataclasses import dataclass
from typing import Optional

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.utils.logging_utils import get_logger

logger = get_logger('asset_storage')


@dataclass
class UploadedAsset:
    url: str
    public_id: str
    duration: Optional[float] = None  # 영상일 때만 (초)


class CloudinaryAssetStorage:
    """
    Cloudinary 업로드/삭제 래퍼.
    upload 실패는 요청 전체 실패(500)로 처리하고, delete 실패는 호출자가 재시도 대상으로 기록한다.
    """

    def __init__(self, cloud_name, api_key, api_secret):
        cloudinary.config(
            cloud_name=cloud_name,
            api_key=api_key,
            api_secret=api_secret,
            secure=True
        )

    def upload(self, local_path: str, resource_type: str = 'auto') -> UploadedAsset:
        try:
            result = cloudinary.uploader.upload(local_path, resource_type=resource_type)
        except CloudinaryError as e:
            logger.error(f"Cloudinary 업로드 실패: {e}")
            raise BusinessError(APIError.ASSET_UPLOAD_FAIL)

        logger.info(f"Cloudinary 업로드 완료: {result.get('public_id')}")
        return UploadedAsset(
            url=result['secure_url'],
            public_id=result['public_id'],
            duration=result.get('duration')
        )

    def delete(self, public_id: str, resource_type: str = 'image') -> bool:
        """삭제 성공(또는 이미 없음)이면 True. 통신 오류는 CloudinaryError 로 전파된다."""
        result = cloudinary.uploader.destroy(public_id, resource_type=resource_type, invalidate=True)
        return result.get('result') in ('ok', 'not found')
