"""Lexical helpers for `[//]: # "key: value"` comment lines."""

from __future__ import annotations

import re

from postmeta.post.coerce import split_list
from postmeta.post.types import COMMENT_PREFIXES


def is_metadata_line(line: str) -> bool:
    return line.startswith(COMMENT_PREFIXES)


def _payload(line: str) -> str:
    for prefix in COMMENT_PREFIXES:
        if line.startswith(prefix):
            return line[len(prefix) :]
    return line


def recognize(line: str) -> str | None:
    """Return the key token a comment line declares, without validating it.

    ``[//]: # "title: My Post"`` gives ``"title"``. Lines without an opening
    quote or without a colon after it give ``None``.
    """
    payload = _payload(line)
    quote_idx = payload.find('"')
    if quote_idx < 0:
        return None
    colon_idx = payload.find(":", quote_idx + 1)
    if colon_idx < 0:
        return None
    key = payload[quote_idx + 1 : colon_idx].strip()
    return key or None


def _value_pattern(key: str) -> re.Pattern[str]:
    return re.compile(rf'{re.escape(key)}\s*:\s*(.*?)"')


def extract_value(line: str, key: str) -> str | None:
    """Capture everything after ``key:`` up to the next double quote."""
    match = _value_pattern(key).search(line)
    if match is None:
        return None
    return match.group(1)


def extract_values(
    line: str, key: str, delimiter: str = ",", *, trim: bool = False
) -> list[str] | None:
    raw = extract_value(line, key)
    if raw is None:
        return None
    return split_list(raw, delimiter, trim=trim)
