import os
import uuid
from pathlib import Path
from typing import Optional

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from common.utils.logging_utils import get_logger

logger = get_logger('file_staging')


def stage_upload(file: FileStorage, upload_folder: str) -> str:
    """업로드 파일을 로컬 임시 경로(uuid 파일명)에 저장하고 경로를 반환"""
    Path(upload_folder).mkdir(parents=True, exist_ok=True)

    ext = Path(secure_filename(file.filename or '')).suffix.lower()
    staged_path = os.path.join(upload_folder, f"{uuid.uuid4()}{ext}")
    file.save(staged_path)

    return staged_path


def discard_staged(path: Optional[str]):
    if not path:
        return
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"임시 업로드 파일 삭제 실패: {path} ({e})")
