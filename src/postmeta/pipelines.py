"""pipelines"""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from postmeta import config
from postmeta.errors import ConfigError, MissingSettingError
from postmeta.logging import get_logger
from postmeta.post import Document, ParserConfig, Post, PostHeaderParser


def _merge_config(cli_options: Mapping[str, Any] | None) -> dict[str, Any]:
    return config.get_config(cli_options or {})


def _format_value(value: Any) -> str:
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, bool):
        return str(value).lower()
    if value is None:
        return "(unset)"
    if isinstance(value, list):
        return "[" + ", ".join(_format_value(item) for item in value) + "]"
    return str(value)


def run_parse(cli_options: Mapping[str, Any] | None = None) -> Post:
    """
    Parse command
    """

    settings = _merge_config(cli_options)
    logger = get_logger("postmeta.parse", bool(settings.get("verbose_logging", False)))

    raw_path = (cli_options or {}).get("path")
    if not raw_path:
        raise MissingSettingError("path", "Missing required argument: PATH")

    parser_config = ParserConfig.from_settings(settings)
    document = Document.from_path(Path(raw_path), encoding=str(settings["encoding"]))
    logger.debug("Parsing header of %s", document.source)

    parser = PostHeaderParser(
        document,
        config=parser_config,
        logger=get_logger("postmeta.parser", bool(settings.get("verbose_logging", False))),
    )
    post = parser.parse()
    logger.debug("Declared keys: %s", ", ".join(post.declared_keys) or "(none)")

    data = post.to_dict()
    if (cli_options or {}).get("json"):
        print(json.dumps(data, ensure_ascii=False, indent=2))
    else:
        for key, value in data.items():
            print(f"{key} = {_format_value(value)}")
    return post


def run_init(cli_options: Mapping[str, Any] | None = None):
    logger = get_logger("postmeta.init", False)
    init_result = config.initialize_config(cli_options or {})
    if init_result.config_created:
        logger.info("Config created at %s", init_result.config_path)
    elif init_result.config_updated_keys:
        logger.info(
            "Config updated at %s (added: %s)",
            init_result.config_path,
            ", ".join(init_result.config_updated_keys),
        )
    else:
        logger.info("Config already exists at %s", init_result.config_path)
    print(f"Config: {init_result.config_path}")
    return init_result


def run_config_show(cli_options: Mapping[str, Any] | None = None) -> int:
    settings = config.get_config_with_sources(cli_options or {})
    config_path = config._resolve_config_path(cli_options)
    print("Effective configuration:")
    print(f"  (config file: {config_path})")
    for key, (value, source) in settings.items():
        print(f"  {key} = {_format_value(value)} ({source})")
    return 0


def run_config_set(cli_options: Mapping[str, Any] | None = None) -> bool:
    logger = get_logger("postmeta.config", False)
    options = dict(cli_options or {})
    key = options.get("key")
    raw_value = options.get("value")
    if not key or raw_value is None:
        raise MissingSettingError("key", "Both KEY and VALUE are required.")
    if key not in config._DEFAULT_SETTINGS:
        raise ConfigError(
            f"Unknown setting: {key}",
            hint="Run `postmeta config show` to list the available settings.",
        )

    value = config.coerce_setting_value(key, str(raw_value))
    # Reject values the parser would refuse before they reach the file.
    ParserConfig.from_settings({**config._DEFAULT_SETTINGS, key: value})

    config_path = config._resolve_config_path(options)
    if config.update_config_value(config_path, key, value):
        logger.info("Config updated: %s=%s", key, _format_value(value))
        return True
    logger.info("Config already set: %s=%s", key, _format_value(value))
    return False
