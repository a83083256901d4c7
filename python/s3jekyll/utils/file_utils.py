"""ファイル操作関連のユーティリティ"""
import functools
import mimetypes
import os
import re
from dataclasses import dataclass
from typing import Callable, Generator, Iterable, Optional, Pattern, Tuple

from ..exceptions import IgnorePatternError, SourceDirectoryError


@dataclass
class UploadTask:
    """アップロード対象のファイル1件"""
    path: str
    key: str
    size: int
    content_type: Optional[str] = None

    @property
    def name(self) -> str:
        return os.path.basename(self.path)


def _class_char(pattern: str, i: int) -> Tuple[str, int]:
    """文字クラス内の1文字を読む（"\\" はエスケープ）"""
    if i >= len(pattern):
        raise IgnorePatternError(pattern, "unterminated character class")
    c = pattern[i]
    if c in "-]":
        raise IgnorePatternError(pattern, "invalid character class")
    if c == "\\":
        i += 1
        if i >= len(pattern):
            raise IgnorePatternError(pattern, "trailing backslash")
        c = pattern[i]
    return c, i + 1


def _translate_class(pattern: str, i: int) -> Tuple[str, int]:
    """"[" の直後から "]" までを正規表現の文字クラスに変換"""
    negate = i < len(pattern) and pattern[i] in "!^"
    if negate:
        i += 1

    items = []
    while True:
        if i < len(pattern) and pattern[i] == "]" and items:
            i += 1
            break
        lo, i = _class_char(pattern, i)
        if i < len(pattern) and pattern[i] == "-":
            hi, i = _class_char(pattern, i + 1)
            if lo > hi:
                raise IgnorePatternError(pattern, f"invalid range {lo}-{hi}")
            items.append(f"{re.escape(lo)}-{re.escape(hi)}")
        else:
            items.append(re.escape(lo))

    return ("[^" if negate else "[") + "".join(items) + "]", i


@functools.lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> Pattern[str]:
    """glob パターンを正規表現に変換

    "*" / "?" / "[...]"（否定は "!" または "^"）を使える。
    "\\" は次の1文字をエスケープする。不正なパターンは IgnorePatternError。
    """
    parts = []
    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        i += 1
        if c == "*":
            parts.append("[^/]*")
        elif c == "?":
            parts.append("[^/]")
        elif c == "\\":
            if i >= n:
                raise IgnorePatternError(pattern, "trailing backslash")
            parts.append(re.escape(pattern[i]))
            i += 1
        elif c == "[":
            char_class, i = _translate_class(pattern, i)
            parts.append(char_class)
        else:
            parts.append(re.escape(c))
    return re.compile("".join(parts), re.DOTALL)


def check_pattern(pattern: str) -> None:
    """glob パターンの構文チェック"""
    compile_pattern(pattern)


def is_ignored(patterns: Iterable[str], path: str) -> bool:
    """ファイル名（パスの最後の要素）が ignore パターンのいずれかに一致するか"""
    file_name = os.path.basename(path)

    for pattern in patterns:
        if compile_pattern(pattern).fullmatch(file_name):
            return True

    return False


def to_remote_key(local_path: str, from_root: str, to_prefix: Optional[str] = None) -> str:
    """ローカルパスから S3 のキーを作成

    from_root は先頭一致ではなく最初の1箇所だけを置換する。
    パスの途中に同じ文字列があるとそちらが消えることに注意。
    """
    remainder = local_path.replace(from_root, "", 1) if from_root else local_path
    if remainder.startswith(os.sep) or remainder.startswith("/"):
        remainder = remainder[1:]
    return (to_prefix or "") + remainder.replace(os.sep, "/")


def guess_content_type(path: str) -> Optional[str]:
    content_type, _ = mimetypes.guess_type(path)
    return content_type


def walk_files(directory: str,
               onerror: Optional[Callable[[OSError], None]] = None) -> Generator[str, None, None]:
    """ディレクトリ配下のファイルパスを再帰的に列挙（ディレクトリ自体は返さない）

    一覧を取得できなかったディレクトリは onerror に渡す。
    onerror がなければそのまま例外を送出する。
    """
    if not os.path.isdir(directory):
        raise SourceDirectoryError(directory)

    def _raise(error: OSError):
        raise error

    for root, dirs, files in os.walk(directory, onerror=onerror or _raise):
        dirs.sort()
        for file in sorted(files):
            yield os.path.join(root, file)


def build_task(path: str, from_root: str, to_prefix: Optional[str] = None) -> UploadTask:
    """ファイルパスから UploadTask を作成"""
    return UploadTask(
        path=path,
        key=to_remote_key(path, from_root, to_prefix),
        size=os.path.getsize(path),
        content_type=guess_content_type(path),
    )
