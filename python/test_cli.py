#!/usr/bin/env python3
"""コマンドラインのテスト"""
import json

import pytest

from conftest import FakeS3Client
from s3jekyll import S3Jekyll
from s3jekyll.cli import build_parser, main
from s3jekyll.core.s3_client import S3ClientManager
from s3jekyll.exceptions import ConfigCreatedError, MissingFieldError
from s3jekyll.utils.logger import LoggerManager


@pytest.fixture
def workdir(tmp_path, monkeypatch, site):
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def use_client(monkeypatch):
    def _use(client):
        monkeypatch.setattr(S3ClientManager, "get_client", lambda self: client)
        return client
    return _use


def test_empty_environment_prints_usage(workdir, capsys):
    assert main(["--to", ""]) == 0
    assert "usage:" in capsys.readouterr().out
    assert not list(workdir.glob(".*.s3.json"))


def test_first_run_creates_scaffold_and_stops(workdir, capsys, use_client):
    client = use_client(FakeS3Client())

    assert main(["--to", "staging"]) == 1

    out = capsys.readouterr().out
    assert "Example created" in out
    assert ".staging.s3.json" in out
    data = json.loads((workdir / ".staging.s3.json").read_text())
    assert data == {"access": "", "secret": "", "bucket": "", "from": "_site"}
    assert client.calls == 0


def test_validation_failure_exits_zero(workdir, write_config, capsys, use_client):
    client = use_client(FakeS3Client())
    write_config(bucket="")

    assert main([]) == 0

    assert "missing bucket name" in capsys.readouterr().out
    assert client.calls == 0


def test_successful_run(workdir, write_config, capsys, use_client):
    client = use_client(FakeS3Client())
    write_config(to="out/", ignores=["*.tmp"])

    assert main(["-n", "2"]) == 0

    out = capsys.readouterr().out
    assert "src/a.txt" in out
    assert "src/sub/c.txt" in out
    assert "uploaded: 2, skipped: 1, failed: 0" in out
    assert sorted(client.objects) == ["out/a.txt", "out/sub/c.txt"]


def test_partial_failure_exits_non_zero(workdir, write_config, capsys, use_client):
    use_client(FakeS3Client(fail_keys=["out/sub/c.txt"]))
    write_config(env="staging", to="out/")

    assert main(["--to", "staging", "-n", "0"]) == 1

    out = capsys.readouterr().out
    assert "uploaded: 2, skipped: 0, failed: 1" in out
    assert "FAILED src/sub/c.txt" in out


def test_malformed_config_exits_non_zero(workdir, capsys):
    (workdir / ".production.s3.json").write_text("{")

    assert main([]) == 1
    assert "Invalid configuration file" in capsys.readouterr().err


def test_malformed_ignore_pattern_exits_non_zero(workdir, write_config, capsys, use_client):
    client = use_client(FakeS3Client())
    write_config(ignores=["[abc"])

    assert main([]) == 1
    assert "Invalid ignore pattern" in capsys.readouterr().err
    assert client.calls == 0


def test_missing_source_exits_non_zero(workdir, write_config, capsys, use_client):
    use_client(FakeS3Client())
    write_config(**{"from": "does-not-exist"})

    assert main([]) == 1
    assert "Source directory not found" in capsys.readouterr().err


def test_negative_concurrency_is_rejected(workdir, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["-n", "-1"])
    assert excinfo.value.code == 2


def test_orchestrator_applies_concurrency(workdir, write_config):
    write_config()
    config = S3Jekyll("production", concurrency=3, directory=str(workdir)).load_config()
    assert config.concurrency == 3


def test_orchestrator_raises_for_scaffold_and_missing_fields(workdir, write_config):
    with pytest.raises(ConfigCreatedError):
        S3Jekyll("staging", directory=str(workdir)).run()

    write_config(access="")
    with pytest.raises(MissingFieldError):
        S3Jekyll("production", directory=str(workdir), s3_client=FakeS3Client()).run()


def test_unwritable_log_file_exits_non_zero(workdir, capsys):
    LoggerManager.reset()
    (workdir / "blocker").write_text("not a directory")

    assert main(["--log-file", str(workdir / "blocker" / "s3jekyll.log")]) == 1
    assert "cannot open log file" in capsys.readouterr().err


def test_log_level_is_case_insensitive_and_checked(workdir):
    assert build_parser().parse_args(["--log-level", "debug"]).log_level == "DEBUG"
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--log-level", "chatty"])
