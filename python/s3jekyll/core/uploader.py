"""S3アップロード実行クラス"""
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from botocore.exceptions import ClientError, NoCredentialsError
from ..utils.file_utils import UploadTask
from ..utils.logger import LoggerManager


PUBLIC_READ = "public-read"


@dataclass
class UploadResult:
    """アップロード結果"""
    file_path: str
    success: bool
    error: Optional[str] = None


@dataclass
class UploadFailure:
    path: str
    error: str


@dataclass
class UploadSummary:
    """1回の実行の集計（ワーカースレッドから更新される）"""
    uploaded: int = 0
    skipped: int = 0
    failed: List[UploadFailure] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def ok(self) -> bool:
        return not self.failed

    def add_skipped(self):
        with self._lock:
            self.skipped += 1

    def add_result(self, result: UploadResult):
        with self._lock:
            if result.success:
                self.uploaded += 1
            else:
                self.failed.append(UploadFailure(result.file_path, result.error or "unknown error"))


class UploadExecutor:
    """ファイル1件のアップロード"""

    def __init__(self, s3_client, bucket: str):
        self.s3_client = s3_client
        self.bucket = bucket
        self.logger = LoggerManager.get_logger()

    def upload(self, task: UploadTask) -> UploadResult:
        """ファイルを開いて put_object する。例外は失敗結果として返す"""
        try:
            with open(task.path, "rb") as body:
                params: Dict[str, Any] = {
                    'Bucket': self.bucket,
                    'Key': task.key,
                    'Body': body,
                    'ContentLength': task.size,
                    'ACL': PUBLIC_READ,
                }
                if task.content_type:
                    params['ContentType'] = task.content_type
                self.s3_client.put_object(**params)

            self.logger.info(f"Successfully uploaded {task.path} to {self.bucket}/{task.key}")
            return UploadResult(task.path, success=True)

        except FileNotFoundError:
            error = f"File not found: {task.path}"
            self.logger.error(error)
            return UploadResult(task.path, success=False, error=error)
        except PermissionError:
            error = f"Permission denied for file: {task.path}"
            self.logger.error(error)
            return UploadResult(task.path, success=False, error=error)
        except (NoCredentialsError, ClientError) as e:
            self.logger.error(f"AWS error uploading {task.path}: {e}")
            return UploadResult(task.path, success=False, error=str(e))
        except Exception as e:
            self.logger.error(f"Unexpected error uploading {task.path}: {e}")
            return UploadResult(task.path, success=False, error=str(e))
