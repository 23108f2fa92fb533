"""Plain terminal output helpers for CLI commands."""

from __future__ import annotations

import sys
from typing import Any


def header(text: str) -> None:
    print(text)
    print("=" * len(text))


def subheader(text: str) -> None:
    print(text)


def key_value(key: str, value: Any, indent: int = 0) -> None:
    print(f"{' ' * indent}{key}: {value}")


def info(text: str) -> None:
    print(text)


def success(text: str) -> None:
    print(f"ok: {text}")


def warning(text: str) -> None:
    print(f"warning: {text}", file=sys.stderr)


def error(text: str) -> None:
    print(f"error: {text}", file=sys.stderr)
