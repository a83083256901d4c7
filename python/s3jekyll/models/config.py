"""設定管理用のデータクラス"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
import json
import os

from ..exceptions import ConfigCreatedError, ConfigInvalidError, MissingFieldError


DEFAULT_CONCURRENCY = 10
DEFAULT_SOURCE = "_site"


@dataclass
class LoggingConfig:
    """ロギング設定"""
    level: str = "WARNING"
    format: str = "%(asctime)s - %(levelname)s - %(message)s"
    file: Optional[str] = None


@dataclass
class Config:
    """環境ごとの設定

    JSON上のキー "from" / "to" は Python の予約語と衝突するため
    source / prefix として保持する。
    """
    access: str = ""
    secret: str = ""
    bucket: str = ""
    source: str = DEFAULT_SOURCE
    prefix: str = ""
    region: str = ""
    # 実行時に指定（ファイルには保存しない）
    concurrency: int = DEFAULT_CONCURRENCY
    ignores: List[str] = field(default_factory=list)

    # (JSONキー, 属性名, 型, 空のとき書き出しを省略するか)
    _FIELDS = (
        ("access", "access", str, False),
        ("secret", "secret", str, False),
        ("bucket", "bucket", str, False),
        ("from", "source", str, False),
        ("to", "prefix", str, True),
        ("region", "region", str, True),
        ("ignores", "ignores", list, True),
    )

    # 検証順序は固定
    _REQUIRED = (
        ("access", "missing access key"),
        ("secret", "missing secret key"),
        ("bucket", "missing bucket name"),
        ("source", "missing from"),
    )

    @classmethod
    def blank(cls) -> 'Config':
        """雛形用の空設定"""
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """JSONオブジェクトから設定を作成（未知のキーは無視）"""
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")

        kwargs: Dict[str, Any] = {}
        for key, attr, expected, _ in cls._FIELDS:
            value = data.get(key)
            if value is None:
                continue
            if not isinstance(value, expected):
                raise TypeError(
                    f"field {key!r} must be {expected.__name__}, got {type(value).__name__}"
                )
            if expected is list:
                for item in value:
                    if not isinstance(item, str):
                        raise TypeError(f"field {key!r} must contain only strings")
                value = list(value)
            kwargs[attr] = value
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """JSONに書き出す辞書（キー順は固定、concurrency は含めない）"""
        data: Dict[str, Any] = {}
        for key, attr, _, omit_empty in self._FIELDS:
            value = getattr(self, attr)
            if omit_empty and not value:
                continue
            data[key] = list(value) if isinstance(value, list) else value
        return data

    def validate(self) -> None:
        """必須フィールドの検証。最初に見つかった欠落を報告する"""
        for attr, message in self._REQUIRED:
            if not getattr(self, attr):
                raise MissingFieldError(attr, message)


class ConfigFile:
    """環境ごとの設定ファイル (.<env>.s3.json) の読み書き"""

    SUFFIX = ".s3.json"

    def __init__(self, directory: Optional[str] = None):
        self.directory = directory

    def path_for(self, env: str) -> str:
        """環境名から設定ファイルのパスを決定"""
        directory = self.directory if self.directory is not None else os.getcwd()
        return os.path.join(directory, f".{env}{self.SUFFIX}")

    def open_or_create(self, env: str) -> Tuple[bool, Config]:
        """設定ファイルを読み込む。存在しなければ雛形を書き出す

        Returns:
            (既存だったか, 設定) のタプル
        """
        path = self.path_for(env)
        if os.path.exists(path):
            return True, self._read(path)

        config = Config.blank()
        self._write(path, config)
        return False, config

    def load(self, env: str) -> Config:
        """設定を読み込む。雛形を作成した場合は ConfigCreatedError"""
        existed, config = self.open_or_create(env)
        if not existed:
            raise ConfigCreatedError(self.path_for(env))
        return config

    def _read(self, path: str) -> Config:
        with open(path, "r", encoding="utf-8") as file:
            content = file.read()

        try:
            return Config.from_dict(json.loads(content))
        except json.JSONDecodeError as e:
            raise ConfigInvalidError(path, str(e)) from e
        except TypeError as e:
            raise ConfigInvalidError(path, str(e)) from e

    def _write(self, path: str, config: Config) -> None:
        with open(path, "w", encoding="utf-8") as file:
            file.write(json.dumps(config.to_dict(), indent=4))
            file.write("\n")
