"""S3クライアント管理"""
import boto3
from typing import Optional
from botocore.exceptions import NoCredentialsError
from ..models.config import Config
from ..utils.logger import LoggerManager


DEFAULT_REGION = "us-east-1"


class S3ClientManager:
    """S3クライアントの作成と管理"""

    def __init__(self, config: Config):
        self.config = config
        self.logger = LoggerManager.get_logger()
        self._client: Optional[boto3.client] = None

    @property
    def region(self) -> str:
        return self.config.region or DEFAULT_REGION

    def get_client(self) -> boto3.client:
        """S3クライアントを取得（必要に応じて作成）"""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _create_client(self) -> boto3.client:
        """設定のアクセスキーでS3クライアントを作成"""
        try:
            s3_client = boto3.client(
                's3',
                region_name=self.region,
                aws_access_key_id=self.config.access,
                aws_secret_access_key=self.config.secret,
            )
            self.logger.info(f"S3 client created for bucket {self.config.bucket} ({self.region})")
            return s3_client

        except NoCredentialsError:
            self.logger.error("AWS credentials not available.")
            raise
        except Exception as e:
            self.logger.error(f"Error creating S3 client: {e}")
            raise
