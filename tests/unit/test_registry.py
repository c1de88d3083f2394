from __future__ import annotations

from datetime import datetime

from postmeta.post.coerce import coerce_text, parse_date
from postmeta.post.registry import (
    AssignMode,
    PropertyHandler,
    PropertyRegistry,
    default_registry,
    scalar,
)
from postmeta.post.types import DuplicatePolicy, ParserConfig, Post, PropertyKey


def test_default_registry_covers_known_keys() -> None:
    registry = default_registry()
    assert set(registry.keys()) == {key.value for key in PropertyKey}
    assert registry.get("categories").assign is AssignMode.APPEND
    assert registry.get("title").assign is AssignMode.OVERWRITE


def test_dispatch_unknown_key_is_noop() -> None:
    registry = default_registry()
    post = Post()
    assert registry.dispatch("johnny", '[//]: # "johnny: B"', post) is False
    assert post == Post()


def test_dispatch_writes_coerced_values() -> None:
    registry = default_registry()
    post = Post()
    registry.dispatch("pubDate", '[//]: # "pubDate: 13/10/2017 18:59"', post)
    registry.dispatch("isPublished", '[//]: # "isPublished: TRUE"', post)
    assert post.pub_date == datetime(2017, 10, 13, 18, 59)
    assert post.is_published is True
    assert post.declared_keys == ["pubDate", "isPublished"]


def test_dispatch_last_wins_by_default() -> None:
    registry = default_registry()
    post = Post()
    registry.dispatch("title", '[//]: # "title: first"', post)
    registry.dispatch("title", '[//]: # "title: second"', post)
    assert post.title == "second"
    assert post.declared_keys == ["title"]


def test_dispatch_first_wins() -> None:
    registry = default_registry(ParserConfig(duplicate_policy=DuplicatePolicy.FIRST_WINS))
    post = Post()
    registry.dispatch("title", '[//]: # "title: first"', post)
    registry.dispatch("title", '[//]: # "title: second"', post)
    assert post.title == "first"


def test_categories_append_under_either_policy() -> None:
    for policy in DuplicatePolicy:
        registry = default_registry(ParserConfig(duplicate_policy=policy))
        post = Post()
        registry.dispatch("categories", '[//]: # "categories: a, b"', post)
        registry.dispatch("categories", '[//]: # "categories: c"', post)
        assert post.categories == ["a", " b", "c"]


def test_categories_use_configured_delimiter_and_trim() -> None:
    registry = default_registry(ParserConfig(category_delimiter="|", trim_categories=True))
    post = Post()
    registry.dispatch("categories", '[//]: # "categories: a | b, c |d"', post)
    assert post.categories == ["a", "b, c", "d"]


def test_register_adds_key_without_touching_defaults() -> None:
    registry = default_registry()
    registry.register(PropertyHandler("summary", "excerpt", scalar(coerce_text)))
    post = Post()
    assert registry.dispatch("summary", '[//]: # "summary: short"', post) is True
    assert post.excerpt == "short"
    assert "title" in registry


def test_register_replaces_existing_handler() -> None:
    registry = PropertyRegistry(
        [PropertyHandler("pubDate", "pub_date", scalar(parse_date))]
    )
    registry.register(
        PropertyHandler(
            "pubDate", "pub_date", lambda line, key: datetime(2000, 1, 1)
        )
    )
    post = Post()
    registry.dispatch("pubDate", '[//]: # "pubDate: 13/10/2017 18:59"', post)
    assert post.pub_date == datetime(2000, 1, 1)


def test_registries_do_not_share_posts() -> None:
    registry = default_registry()
    first, second = Post(), Post()
    registry.dispatch("categories", '[//]: # "categories: a"', first)
    assert second.categories == []
