from common.storage.asset_storage import CloudinaryAssetStorage, UploadedAsset
from common.storage.file_staging import stage_upload, discard_staged

__all__ = [
    'CloudinaryAssetStorage',
    'UploadedAsset',
    'stage_upload',
    'discard_staged'
]
