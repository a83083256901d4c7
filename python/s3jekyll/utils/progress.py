"""アップロード進捗の表示"""
import sys
import threading
from typing import Optional, TextIO, TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.uploader import UploadSummary


class ProgressReporter:
    """完了したアップロードを1行ずつ出力する（複数スレッドから呼ばれる）"""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stdout
        self.lock = threading.Lock()

    def uploaded(self, path: str):
        """アップロード完了"""
        self._write(path)

    def report(self, summary: 'UploadSummary'):
        """最終結果を表示"""
        lines = [
            f"uploaded: {summary.uploaded}, skipped: {summary.skipped}, "
            f"failed: {len(summary.failed)}"
        ]
        for failure in summary.failed:
            lines.append(f"  FAILED {failure.path}: {failure.error}")
        self._write("\n".join(lines))

    def _write(self, text: str):
        with self.lock:
            print(text, file=self.stream, flush=True)
