#!/usr/bin/env python3
"""s3jekyll - エントリーポイント"""
import sys

from s3jekyll.cli import main


if __name__ == "__main__":
    sys.exit(main())
