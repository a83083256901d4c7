"""テスト共通のフィクスチャと S3 のフェイク"""
import json
import threading
from typing import Dict, Iterable, Optional

import pytest
from botocore.exceptions import ClientError

from s3jekyll.models.config import LoggingConfig
from s3jekyll.utils.logger import LoggerManager


class FakeS3Client:
    """put_object だけを実装したメモリ上の S3"""

    def __init__(self, fail_keys: Iterable[str] = (), barrier: Optional[threading.Barrier] = None,
                 gate: Optional[threading.Event] = None):
        self.objects: Dict[str, Dict] = {}
        self.fail_keys = set(fail_keys)
        self.barrier = barrier
        # gate がセットされるまで put_object を止める
        self.gate = gate
        self.calls = 0
        self.in_flight = 0
        self.max_in_flight = 0
        self.lock = threading.Lock()

    def put_object(self, Bucket, Key, Body, ContentLength, ACL, ContentType=None):
        with self.lock:
            self.calls += 1
            call_number = self.calls
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            return self._put(call_number, Bucket, Key, Body, ContentLength, ACL, ContentType)
        finally:
            with self.lock:
                self.in_flight -= 1

    def _put(self, call_number, Bucket, Key, Body, ContentLength, ACL, ContentType):
        if self.gate is not None:
            self.gate.wait(timeout=10)
        # 最初の呼び出し群は並列に走っていないと通過できない
        if self.barrier is not None and call_number <= self.barrier.parties:
            self.barrier.wait()
        if Key in self.fail_keys:
            raise ClientError(
                {"Error": {"Code": "InternalError", "Message": "simulated transport error"}},
                "PutObject",
            )
        data = Body.read()
        with self.lock:
            self.objects[Key] = {
                "bucket": Bucket,
                "body": data,
                "length": ContentLength,
                "acl": ACL,
                "content_type": ContentType,
            }
        return {"ResponseMetadata": {"HTTPStatusCode": 200}}


@pytest.fixture(autouse=True)
def logger():
    LoggerManager.reset()
    yield LoggerManager.setup(LoggingConfig(level="DEBUG"))
    LoggerManager.reset()


@pytest.fixture
def fake_s3():
    return FakeS3Client()


@pytest.fixture
def site(tmp_path):
    """src/a.txt, src/b.tmp, src/sub/c.txt"""
    src = tmp_path / "src"
    (src / "sub").mkdir(parents=True)
    (src / "a.txt").write_text("alpha")
    (src / "b.tmp").write_text("temp")
    (src / "sub" / "c.txt").write_text("charlie")
    return src


@pytest.fixture
def write_config(tmp_path):
    def _write(env="production", **values):
        data = {"access": "AKIA", "secret": "s3cr3t", "bucket": "example-bucket", "from": "src"}
        data.update(values)
        path = tmp_path / f".{env}.s3.json"
        path.write_text(json.dumps(data))
        return path
    return _write
