"""Data model for post headers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

from postmeta.errors import DocumentLoadError, InvalidSettingError

# Stands in for "never set" on date fields.
MIN_DATETIME = datetime.min

COMMENT_PREFIXES: tuple[str, ...] = ("[//]: #", "[//]:#")


class PropertyKey(str, Enum):
    TITLE = "title"
    SLUG = "slug"
    PUB_DATE = "pubDate"
    LAST_MODIFIED = "lastModified"
    EXCERPT = "excerpt"
    CATEGORIES = "categories"
    IS_PUBLISHED = "isPublished"


class _SettingEnum(str, Enum):
    @classmethod
    def from_value(cls, value: object, setting_name: str):
        if isinstance(value, cls):
            return value
        normalized = str(value or "").strip().lower()
        for item in cls:
            if item.value == normalized:
                return item
        raise InvalidSettingError(
            setting_name, value, tuple(item.value for item in cls)
        )


class DuplicatePolicy(_SettingEnum):
    """Which declaration wins when a scalar key appears more than once."""

    LAST_WINS = "last"
    FIRST_WINS = "first"


class UnknownKeyPolicy(_SettingEnum):
    """What the scan does with a comment line whose key is not registered."""

    SKIP = "skip"
    STOP = "stop"


# --- Config. ---
@dataclass(frozen=True, slots=True)
class ParserConfig:
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.LAST_WINS
    unknown_key_policy: UnknownKeyPolicy = UnknownKeyPolicy.SKIP
    category_delimiter: str = ","
    trim_categories: bool = False

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> ParserConfig:
        delimiter = str(settings.get("category_delimiter", ",") or "")
        if len(delimiter) != 1:
            raise InvalidSettingError("category_delimiter", delimiter)
        return cls(
            duplicate_policy=DuplicatePolicy.from_value(
                settings.get("duplicate_policy", "last"), "duplicate_policy"
            ),
            unknown_key_policy=UnknownKeyPolicy.from_value(
                settings.get("unknown_key_policy", "skip"), "unknown_key_policy"
            ),
            category_delimiter=delimiter,
            trim_categories=_get_bool(settings, "trim_categories", False),
        )


def _get_bool(settings: Mapping[str, Any], key: str, default: bool) -> bool:
    value = settings.get(key, default)
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
    raise InvalidSettingError(key, value, ("true", "false"))


# --- Input. ---
@dataclass(frozen=True, slots=True)
class Document:
    """Raw document text, optionally remembering where it was read from."""

    content: str | None
    source: Path | None = None

    @classmethod
    def from_path(cls, path: Path | str, encoding: str = "utf-8") -> Document:
        source = Path(path).expanduser()
        try:
            content = source.read_text(encoding=encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentLoadError(
                f"Could not read document {source}: {exc}",
                hint="Check the path and the configured encoding.",
            ) from exc
        return cls(content=content, source=source)


# --- Result. ---
@dataclass(slots=True)
class Post:
    title: str = ""
    slug: str = ""
    pub_date: datetime = MIN_DATETIME
    last_modified: datetime = MIN_DATETIME
    excerpt: str = ""
    categories: list[str] = field(default_factory=list)
    is_published: bool = False
    declared_keys: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "slug": self.slug,
            "pubDate": _render_date(self.pub_date),
            "lastModified": _render_date(self.last_modified),
            "excerpt": self.excerpt,
            "categories": list(self.categories),
            "isPublished": self.is_published,
        }


def _render_date(value: datetime) -> str | None:
    if value == MIN_DATETIME:
        return None
    return value.isoformat()
