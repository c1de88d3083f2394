"""Postmeta public API."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from postmeta.post import Document, Post, PostHeaderParser, parse_header

try:
    __version__ = version("postmeta")
except PackageNotFoundError:  # pragma: no cover - during source-only use
    __version__ = "unknown"

__all__ = ["Document", "Post", "PostHeaderParser", "__version__", "parse_header"]
