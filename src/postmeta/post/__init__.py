from .coerce import DATE_FORMATS, parse_bool, parse_date, split_list
from .extract import extract_value, extract_values, recognize
from .parser import PostHeaderParser, parse_header
from .registry import (
    AssignMode,
    PropertyHandler,
    PropertyRegistry,
    default_registry,
    scalar,
)
from .types import (
    MIN_DATETIME,
    Document,
    DuplicatePolicy,
    ParserConfig,
    Post,
    PropertyKey,
    UnknownKeyPolicy,
)

__all__ = [
    "AssignMode",
    "DATE_FORMATS",
    "Document",
    "DuplicatePolicy",
    "MIN_DATETIME",
    "ParserConfig",
    "Post",
    "PostHeaderParser",
    "PropertyHandler",
    "PropertyKey",
    "PropertyRegistry",
    "UnknownKeyPolicy",
    "default_registry",
    "extract_value",
    "extract_values",
    "parse_bool",
    "parse_date",
    "parse_header",
    "recognize",
    "scalar",
    "split_list",
]
