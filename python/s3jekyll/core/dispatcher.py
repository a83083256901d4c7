"""ディレクトリを走査してアップロードを並列実行"""
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

from ..models.config import Config
from ..utils.file_utils import build_task, check_pattern, is_ignored, walk_files
from ..utils.logger import LoggerManager
from ..utils.progress import ProgressReporter
from .uploader import UploadExecutor, UploadResult, UploadSummary


class UploadDispatcher:
    """config.source 以下のファイルをワーカープールでアップロード

    走査は呼び出し元スレッドで行い、アップロードは最大 concurrency 本の
    ワーカーで実行する。投入待ちは workers * 2 件までで、それを超えると
    走査側がブロックする。
    """

    def __init__(self, s3_client, config: Config, progress: Optional[ProgressReporter] = None):
        self.config = config
        self.executor = UploadExecutor(s3_client, config.bucket)
        self.progress = progress or ProgressReporter()
        self.logger = LoggerManager.get_logger()

    @property
    def max_workers(self) -> int:
        # 0 以下はデッドロックになるので 1 に丸める
        return max(1, self.config.concurrency)

    def run(self) -> UploadSummary:
        """アップロードを実行して集計を返す"""
        for pattern in self.config.ignores:
            check_pattern(pattern)

        summary = UploadSummary()
        workers = self.max_workers
        slots = threading.BoundedSemaphore(workers * 2)

        self.logger.info(
            f"Uploading {self.config.source} to {self.config.bucket}/{self.config.prefix} "
            f"with {workers} workers"
        )

        pool = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="s3jekyll-upload")
        try:
            for path in walk_files(self.config.source, lambda e: self._on_walk_error(e, summary)):
                if is_ignored(self.config.ignores, path):
                    self.logger.debug(f"Skipping ignored file: {path}")
                    summary.add_skipped()
                    continue

                try:
                    task = build_task(path, self.config.source, self.config.prefix)
                except OSError as e:
                    self.logger.error(f"Cannot read {path}: {e}")
                    summary.add_result(UploadResult(path, success=False, error=str(e)))
                    continue

                self.logger.debug(f"Queueing {task.name} as {task.key} ({task.size} bytes)")
                slots.acquire()
                future = pool.submit(self.executor.upload, task)
                future.add_done_callback(
                    lambda f, path=path: self._on_done(f, path, summary, slots)
                )
        except BaseException:
            # 投入済みで未着手のものは破棄し、実行中のものは完了を待つ
            pool.shutdown(wait=True, cancel_futures=True)
            raise

        pool.shutdown(wait=True)

        self.logger.info(
            f"Upload completed: {summary.uploaded} uploaded, {summary.skipped} skipped, "
            f"{len(summary.failed)} failed"
        )
        return summary

    def _on_done(self, future: Future, path: str, summary: UploadSummary,
                 slots: threading.BoundedSemaphore):
        slots.release()
        if future.cancelled():
            return
        result = future.result()
        summary.add_result(result)
        if result.success:
            self.progress.uploaded(path)

    def _on_walk_error(self, error: OSError, summary: UploadSummary):
        # 一覧を取れないディレクトリは失敗として数える
        path = error.filename or self.config.source
        self.logger.error(f"Cannot list directory {path}: {error}")
        summary.add_result(UploadResult(path, success=False, error=str(error)))
