"""Header scanner turning leading metadata comments into a Post."""

from __future__ import annotations

import logging
import re

from postmeta.errors import InvalidInputError
from postmeta.post.extract import is_metadata_line, recognize
from postmeta.post.registry import PropertyRegistry, default_registry
from postmeta.post.types import Document, ParserConfig, Post, UnknownKeyPolicy

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class PostHeaderParser:
    """Reads the leading run of ``[//]: # "key: value"`` lines of a document.

    Every comment line at the top of the document is treated as a post
    property. The first line that is not such a comment ends the header and
    nothing after it is looked at.

    ``registry`` defaults to the seven known keys built from ``config``; when a
    registry is passed in, its own duplicate policy applies.
    """

    def __init__(
        self,
        document: Document | str | None,
        *,
        config: ParserConfig | None = None,
        registry: PropertyRegistry | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        content = document.content if isinstance(document, Document) else document
        if content is None:
            raise InvalidInputError(
                "Document content is required.",
                hint="Pass the document text, or a Document loaded from a file.",
            )
        self._content = content
        self._config = config or ParserConfig()
        self._registry = (
            registry if registry is not None else default_registry(self._config)
        )
        self._logger = logger or logging.getLogger("postmeta.parser")
        self.post = Post()

    @property
    def content(self) -> str:
        return self._content

    def parse(self) -> Post:
        post = Post()
        for lineno, line in enumerate(_LINE_BREAK.split(self._content), start=1):
            if not is_metadata_line(line):
                self._logger.debug("Header ends at line %d", lineno)
                break
            key = recognize(line)
            if key is not None and self._registry.dispatch(key, line, post):
                continue
            if self._config.unknown_key_policy is UnknownKeyPolicy.STOP:
                self._logger.debug(
                    "Unknown header key %r at line %d; stopping", key, lineno
                )
                break
            self._logger.debug(
                "Unknown header key %r at line %d; skipping", key, lineno
            )
        self.post = post
        return post


def parse_header(
    document: Document | str | None,
    *,
    config: ParserConfig | None = None,
    registry: PropertyRegistry | None = None,
) -> Post:
    return PostHeaderParser(document, config=config, registry=registry).parse()
