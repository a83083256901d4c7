"""s3jekyll コアモジュール"""
from .s3_client import S3ClientManager
from .uploader import UploadExecutor, UploadResult, UploadSummary
from .dispatcher import UploadDispatcher

__all__ = [
    'S3ClientManager',
    'UploadExecutor',
    'UploadResult',
    'UploadSummary',
    'UploadDispatcher'
]
