# src/postmeta/errors.py
from __future__ import annotations


class PostmetaError(Exception):
    """Base exception for all postmeta errors."""

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class InvalidInputError(PostmetaError):
    """Raised when the parser is given no document content."""


class DocumentLoadError(PostmetaError):
    """Raised when a document cannot be read from disk."""


class ConfigError(PostmetaError):
    """Raised when config is missing or invalid."""


class MissingSettingError(ConfigError):
    """Raised when a required configuration value is absent."""

    def __init__(self, setting_name: str, message: str | None = None) -> None:
        detail = message or f"Missing required setting: {setting_name}"
        super().__init__(detail)
        self.setting_name = setting_name


class InvalidSettingError(ConfigError):
    """Raised when a configuration value is outside its allowed choices."""

    def __init__(
        self, setting_name: str, value: object, choices: tuple[str, ...] = ()
    ) -> None:
        detail = f"Invalid value for {setting_name}: {value!r}"
        hint = f"Use one of: {', '.join(choices)}." if choices else None
        super().__init__(detail, hint=hint)
        self.setting_name = setting_name
        self.value = value
