"""ロギング設定ユーティリティ"""
import logging
import os
import sys
from typing import List, Optional, TextIO
from ..models.config import LoggingConfig


LOGGER_NAME = "s3jekyll"
# boto3 / botocore のログも同じハンドラーに流す
SDK_LOGGER_NAMES = ("boto3", "botocore", "s3transfer")


class LoggerManager:
    """ロガーの設定と管理

    stdout は進捗表示に使うので、コンソール出力は stderr に出す。
    SDK のログは DEBUG 指定時のみ詳細を出し、それ以外は WARNING 以上に絞る。
    """

    _logger: Optional[logging.Logger] = None

    @classmethod
    def setup(cls, config: LoggingConfig, stream: Optional[TextIO] = None) -> logging.Logger:
        """ロガーをセットアップ"""
        if cls._logger is not None:
            return cls._logger

        log_level = getattr(logging, config.level.upper(), logging.WARNING)
        handlers = cls._create_handlers(config, stream if stream is not None else sys.stderr)

        logger = logging.getLogger(LOGGER_NAME)
        cls._attach(logger, log_level, handlers)

        sdk_level = logging.DEBUG if log_level <= logging.DEBUG else max(log_level, logging.WARNING)
        for name in SDK_LOGGER_NAMES:
            cls._attach(logging.getLogger(name), sdk_level, handlers)

        cls._logger = logger
        return logger

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """設定済みのロガーを取得"""
        if cls._logger is None:
            raise RuntimeError("Logger not initialized. Call setup() first.")
        return cls._logger

    @classmethod
    def reset(cls) -> None:
        """セットアップ済みのロガーを破棄（再設定用）"""
        if cls._logger is None:
            return
        for handler in cls._logger.handlers:
            handler.close()
        for name in (LOGGER_NAME,) + SDK_LOGGER_NAMES:
            logger = logging.getLogger(name)
            logger.handlers = []
            logger.propagate = True
            logger.setLevel(logging.NOTSET)
        cls._logger = None

    @staticmethod
    def _create_handlers(config: LoggingConfig, stream: TextIO) -> List[logging.Handler]:
        formatter = logging.Formatter(config.format, datefmt="%Y-%m-%d %H:%M:%S")

        console_handler = logging.StreamHandler(stream)
        console_handler.setFormatter(formatter)
        handlers: List[logging.Handler] = [console_handler]

        if config.file:
            log_dir = os.path.dirname(config.file)
            if log_dir and not os.path.exists(log_dir):
                os.makedirs(log_dir)

            file_handler = logging.FileHandler(config.file, encoding="utf-8")
            file_handler.setFormatter(formatter)
            handlers.append(file_handler)

        return handlers

    @staticmethod
    def _attach(logger: logging.Logger, level: int, handlers: List[logging.Handler]) -> None:
        logger.setLevel(level)
        logger.handlers = list(handlers)
        logger.propagate = False
