"""s3jekyll パッケージ"""
from typing import Optional
from .models.config import Config, ConfigFile, DEFAULT_CONCURRENCY
from .utils.logger import LoggerManager
from .utils.progress import ProgressReporter
from .core.s3_client import S3ClientManager
from .core.dispatcher import UploadDispatcher
from .core.uploader import UploadSummary


class S3Jekyll:
    """環境名を受け取り、設定を読み込んでアップロードするメインクラス"""

    def __init__(self, env: str = "production", concurrency: int = DEFAULT_CONCURRENCY,
                 directory: Optional[str] = None, progress: Optional[ProgressReporter] = None,
                 s3_client=None):
        self.env = env
        self.concurrency = concurrency
        self.config_file = ConfigFile(directory)
        self.progress = progress or ProgressReporter()
        self.s3_client = s3_client
        self.logger = LoggerManager.get_logger()

    def load_config(self) -> Config:
        """設定を読み込んで検証（雛形作成時・不備がある場合は例外）"""
        config = self.config_file.load(self.env)
        config.concurrency = self.concurrency
        config.validate()
        self.logger.info(f"Loaded configuration for '{self.env}'")
        return config

    def run(self) -> UploadSummary:
        """アップロードを実行"""
        config = self.load_config()

        s3_client = self.s3_client
        if s3_client is None:
            s3_client = S3ClientManager(config).get_client()

        dispatcher = UploadDispatcher(s3_client, config, self.progress)
        summary = dispatcher.run()
        self.progress.report(summary)
        return summary


__all__ = ['S3Jekyll', 'Config', 'ConfigFile', 'UploadSummary']
