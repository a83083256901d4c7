"""コマンドラインエントリーポイント"""
import argparse
import sys
from typing import List, Optional

from . import S3Jekyll
from .exceptions import (
    ConfigCreatedError,
    ConfigInvalidError,
    IgnorePatternError,
    MissingFieldError,
    SourceDirectoryError,
)
from .models.config import DEFAULT_CONCURRENCY, LoggingConfig
from .utils.logger import LoggerManager


def non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be a non-negative integer: {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="s3jekyll",
        description="Upload a generated site directory to an S3 bucket.",
    )
    parser.add_argument("--to", default="production",
                        help="name of the environment to push (default: production)")
    parser.add_argument("-n", dest="concurrency", type=non_negative_int,
                        default=DEFAULT_CONCURRENCY,
                        help=f"number of concurrent uploads (default: {DEFAULT_CONCURRENCY})")
    parser.add_argument("--log-level", default="WARNING", type=str.upper,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="log level (default: WARNING)")
    parser.add_argument("--log-file", default=None, help="also write logs to this file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """メイン関数。終了コードを返す"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.to:
        parser.print_usage()
        return 0

    try:
        logger = LoggerManager.setup(LoggingConfig(level=args.log_level, file=args.log_file))
    except OSError as e:
        print(f"Error: cannot open log file {args.log_file}: {e}", file=sys.stderr)
        return 1

    try:
        summary = S3Jekyll(args.to, args.concurrency).run()
    except MissingFieldError as e:
        # 検証エラーはメッセージを表示して正常終了
        print(e)
        return 0
    except ConfigCreatedError as e:
        print(e)
        return 1
    except (ConfigInvalidError, IgnorePatternError, SourceDirectoryError) as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        logger.error(f"Cannot read or create configuration: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0 if summary.ok else 1
