"""Configuration loading utilities for postmeta."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

try:  # Python >=3.11
    import tomllib  # type: ignore[import-not-found]
except ModuleNotFoundError:  # pragma: no cover - fallback for <3.11
    tomllib = None  # type: ignore[assignment]

_ENV_PREFIX = "POSTMETA_"
_DEFAULT_CONFIG = Path("~/.postmeta/config.toml")


_DEFAULT_SETTINGS: dict[str, Any] = {
    "duplicate_policy": "last",
    "unknown_key_policy": "skip",
    "category_delimiter": ",",
    "trim_categories": False,
    "encoding": "utf-8",
    "verbose_logging": False,
}


def _default_config_path() -> Path:
    return _DEFAULT_CONFIG.expanduser()


def _render_value(value: Any) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return str(value)
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _build_default_config_template(settings: Mapping[str, Any]) -> str:
    return "\n".join(
        [
            "# Postmeta configuration",
            "",
            "# Header scan",
            "# duplicate_policy: \"last\" or \"first\" declaration of a key wins",
            f"duplicate_policy = {_render_value(settings['duplicate_policy'])}",
            "# unknown_key_policy: \"skip\" unknown comment keys or \"stop\" the header",
            f"unknown_key_policy = {_render_value(settings['unknown_key_policy'])}",
            "",
            "# Categories",
            f"category_delimiter = {_render_value(settings['category_delimiter'])}",
            f"trim_categories = {_render_value(settings['trim_categories'])}",
            "",
            "# Files & logging",
            f"encoding = {_render_value(settings['encoding'])}",
            f"verbose_logging = {_render_value(settings['verbose_logging'])}",
            "",
        ]
    )


def coerce_setting_value(key: str, value: str) -> Any:
    """Convert a raw string to the type of the setting's default."""
    default = _DEFAULT_SETTINGS.get(key)
    if isinstance(default, bool):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    if isinstance(default, int):
        try:
            return int(value)
        except ValueError:
            return default
    return value


def _resolve_config_path(cli_options: Mapping[str, Any] | None) -> Path:
    cli_options = dict(cli_options or {})
    raw_config_path = cli_options.get("config_path")
    return Path(raw_config_path).expanduser() if raw_config_path else _default_config_path()


def update_config_value(config_path: Path, key: str, value: Any) -> bool:
    rendered = f"{key} = {_render_value(value)}"
    if not config_path.exists():
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(rendered + "\n", encoding="utf-8")
        return True

    text = config_path.read_text(encoding="utf-8")
    pattern = re.compile(rf"^\s*{re.escape(key)}\s*=")
    lines = text.splitlines()
    for idx, line in enumerate(lines):
        if pattern.match(line):
            if line.strip() == rendered:
                return False
            lines[idx] = rendered
            updated = "\n".join(lines)
            if text.endswith("\n"):
                updated += "\n"
            config_path.write_text(updated, encoding="utf-8")
            return True

    updated = text.rstrip("\n") + "\n" + rendered + "\n"
    config_path.write_text(updated, encoding="utf-8")
    return True


def _load_file_config(path: Path) -> dict[str, Any]:
    if tomllib is None or not path.is_file():
        return {}
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))  # type: ignore[union-attr]
    except (OSError, ValueError):
        return {}


def _load_env_config() -> dict[str, Any]:
    config: dict[str, Any] = {}
    for env_key, raw_value in os.environ.items():
        if env_key.startswith(_ENV_PREFIX):
            normalized = env_key[len(_ENV_PREFIX) :].lower()
            config[normalized] = coerce_setting_value(normalized, raw_value)
    return config


def _cli_config(cli_options: Mapping[str, Any]) -> dict[str, Any]:
    return {
        key: value
        for key, value in cli_options.items()
        if value is not None and key in _DEFAULT_SETTINGS
    }


def get_config(cli_options: Mapping[str, Any] | None = None) -> dict[str, Any]:
    cli_options = dict(cli_options or {})
    config_path = _resolve_config_path(cli_options)

    merged: dict[str, Any] = dict(_DEFAULT_SETTINGS)
    merged.update(_load_file_config(config_path))
    merged.update(_load_env_config())
    merged.update(_cli_config(cli_options))

    merged["config_path"] = str(config_path)
    return merged


def get_config_with_sources(
    cli_options: Mapping[str, Any] | None = None,
) -> dict[str, tuple[Any, str]]:
    """Like :func:`get_config`, but pairs every value with where it came from."""
    cli_options = dict(cli_options or {})
    config_path = _resolve_config_path(cli_options)

    merged: dict[str, tuple[Any, str]] = {
        key: (value, "default") for key, value in _DEFAULT_SETTINGS.items()
    }
    for source, layer in (
        ("file", _load_file_config(config_path)),
        ("env", _load_env_config()),
        ("cli", _cli_config(cli_options)),
    ):
        for key, value in layer.items():
            merged[key] = (value, source)
    return merged


@dataclass(slots=True)
class InitResult:
    config_path: Path
    config_created: bool
    config_updated_keys: list[str]


def initialize_config(cli_options: Mapping[str, Any] | None = None) -> InitResult:
    config_path = _resolve_config_path(cli_options)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    cli_options = dict(cli_options or {})
    init_settings = dict(_DEFAULT_SETTINGS)
    init_settings.update(_cli_config(cli_options))

    config_created = False
    config_updated_keys: list[str] = []
    if not config_path.exists():
        config_path.write_text(
            _build_default_config_template(init_settings), encoding="utf-8"
        )
        config_created = True
    else:
        existing_content = config_path.read_text(encoding="utf-8")
        missing_keys = [
            key for key in _DEFAULT_SETTINGS if f"{key} =" not in existing_content
        ]
        if missing_keys:
            config_updated_keys = list(missing_keys)
            with config_path.open("a", encoding="utf-8") as handle:
                handle.write(
                    "\n# Added by postmeta init to ensure required defaults.\n"
                )
                for key in missing_keys:
                    handle.write(f"{key} = {_render_value(init_settings[key])}\n")

    return InitResult(
        config_path=config_path.resolve(),
        config_created=config_created,
        config_updated_keys=config_updated_keys,
    )
