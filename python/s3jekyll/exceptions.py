"""s3jekyll の例外定義"""
from typing import Optional


class S3JekyllError(Exception):
    """s3jekyll の基底例外"""


class ConfigError(S3JekyllError):
    """設定ファイルに関するエラー"""


class MissingFieldError(ConfigError):
    """必須フィールドが空"""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class ConfigInvalidError(ConfigError):
    """設定ファイルのパースに失敗"""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Invalid configuration file {path}: {reason}")
        self.path = path
        self.reason = reason


class ConfigCreatedError(S3JekyllError):
    """設定ファイルが存在しなかったため雛形を作成した"""

    def __init__(self, path: str):
        super().__init__(
            f"Config file didn't exist. Example created at {path}; edit it and re-run."
        )
        self.path = path


class IgnorePatternError(S3JekyllError):
    """不正な ignore パターン"""

    def __init__(self, pattern: str, reason: Optional[str] = None):
        message = f"Invalid ignore pattern {pattern!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.pattern = pattern


class SourceDirectoryError(S3JekyllError):
    """アップロード元ディレクトリが存在しない"""

    def __init__(self, path: str):
        super().__init__(f"Source directory not found: {path}")
        self.path = path
