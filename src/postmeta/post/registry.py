"""Table of known header keys and how each one lands on a Post."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Any

from postmeta.post.coerce import coerce_text, parse_bool, parse_date
from postmeta.post.extract import extract_value, extract_values
from postmeta.post.types import DuplicatePolicy, ParserConfig, Post, PropertyKey

Extractor = Callable[[str, str], Any]


class AssignMode(str, Enum):
    OVERWRITE = "overwrite"
    APPEND = "append"


@dataclass(frozen=True, slots=True)
class PropertyHandler:
    key: str
    field_name: str
    extract: Extractor
    assign: AssignMode = AssignMode.OVERWRITE

    def apply(self, line: str, post: Post) -> None:
        value = self.extract(line, self.key)
        if self.assign is AssignMode.APPEND:
            getattr(post, self.field_name).extend(value)
        else:
            setattr(post, self.field_name, value)


def scalar(coerce: Callable[[str | None], Any]) -> Extractor:
    """Build an extractor that coerces the single raw value of a key."""

    def _extract(line: str, key: str) -> Any:
        return coerce(extract_value(line, key))

    return _extract


def _extract_list(line: str, key: str, *, delimiter: str, trim: bool) -> list[str]:
    return extract_values(line, key, delimiter, trim=trim) or []


class PropertyRegistry:
    """Maps header keys to handlers and applies them to a Post.

    The duplicate policy only governs overwrite handlers; append handlers
    always accumulate.
    """

    def __init__(
        self,
        handlers: Iterable[PropertyHandler] = (),
        duplicate_policy: DuplicatePolicy = DuplicatePolicy.LAST_WINS,
    ) -> None:
        self._handlers: dict[str, PropertyHandler] = {}
        self.duplicate_policy = duplicate_policy
        for handler in handlers:
            self.register(handler)

    def register(self, handler: PropertyHandler) -> None:
        self._handlers[handler.key] = handler

    def get(self, key: str) -> PropertyHandler | None:
        return self._handlers.get(key)

    def keys(self) -> tuple[str, ...]:
        return tuple(self._handlers)

    def __contains__(self, key: object) -> bool:
        return key in self._handlers

    def dispatch(self, key: str, line: str, post: Post) -> bool:
        handler = self._handlers.get(key)
        if handler is None:
            return False
        already_declared = key in post.declared_keys
        if (
            already_declared
            and handler.assign is AssignMode.OVERWRITE
            and self.duplicate_policy is DuplicatePolicy.FIRST_WINS
        ):
            return True
        handler.apply(line, post)
        if not already_declared:
            post.declared_keys.append(key)
        return True


def default_handlers(config: ParserConfig) -> list[PropertyHandler]:
    return [
        PropertyHandler(PropertyKey.TITLE.value, "title", scalar(coerce_text)),
        PropertyHandler(PropertyKey.SLUG.value, "slug", scalar(coerce_text)),
        PropertyHandler(PropertyKey.PUB_DATE.value, "pub_date", scalar(parse_date)),
        PropertyHandler(
            PropertyKey.LAST_MODIFIED.value, "last_modified", scalar(parse_date)
        ),
        PropertyHandler(PropertyKey.EXCERPT.value, "excerpt", scalar(coerce_text)),
        PropertyHandler(
            PropertyKey.CATEGORIES.value,
            "categories",
            partial(
                _extract_list,
                delimiter=config.category_delimiter,
                trim=config.trim_categories,
            ),
            assign=AssignMode.APPEND,
        ),
        PropertyHandler(
            PropertyKey.IS_PUBLISHED.value, "is_published", scalar(parse_bool)
        ),
    ]


def default_registry(config: ParserConfig | None = None) -> PropertyRegistry:
    config = config or ParserConfig()
    return PropertyRegistry(
        default_handlers(config), duplicate_policy=config.duplicate_policy
    )
