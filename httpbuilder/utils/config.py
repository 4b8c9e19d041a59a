"""Configuration utilities.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
import logging
import os
from enum import Enum, auto
from pathlib import Path
from typing import IO, Any, Dict, List, Mapping, Optional, Union

import yaml

from httpbuilder.middleware.cors import CorsConfig, CorsConfigCallback

logger = logging.getLogger(__name__)

Document = Union[str, bytes, IO[str], IO[bytes]]

# Null spellings left as strings by yaml.BaseLoader
YAML_NULLS = ("", "~", "null", "Null", "NULL")


class ConfigSource(Enum):
    """Configuration sources."""

    JSON = auto()
    YAML = auto()
    DICT = auto()
    ENV = auto()


def _read(document: Document) -> Union[str, bytes]:
    if isinstance(document, (str, bytes)):
        return document
    return document.read()


def _apply(data: Mapping[str, Any], source: ConfigSource) -> CorsConfigCallback:
    # Validate once against a scratch config so bad documents fail here
    CorsConfig().update(data)

    def callback(config: CorsConfig) -> None:
        logger.debug(f"Applying CORS config from {source.name}")
        config.update(data)

    return callback


def from_dict(data: Mapping[str, Any]) -> CorsConfigCallback:
    """Create a config callback from a decoded document."""
    return _apply(data, ConfigSource.DICT)


def from_json(document: Document) -> CorsConfigCallback:
    """Create a config callback from a JSON document.

    Raises:
        json.JSONDecodeError: on malformed JSON
        TypeError: if the document does not have the CORS config shape
    """
    return _apply(json.loads(_read(document)), ConfigSource.JSON)


def from_yaml(document: Document) -> CorsConfigCallback:
    """Create a config callback from a YAML document.

    Scalars are kept as strings, so ``[true]`` decodes to ``["true"]``. An
    empty document keeps every default and a null field is cleared.

    Raises:
        yaml.YAMLError: on malformed YAML
        TypeError: if the document does not have the CORS config shape
    """
    data = yaml.load(_read(document), Loader=yaml.BaseLoader)
    if data is None:
        data = {}
    if isinstance(data, dict):
        data = {
            key: None if value in YAML_NULLS else value
            for key, value in data.items()
        }
    return _apply(data, ConfigSource.YAML)


def from_file(path: Union[str, Path]) -> CorsConfigCallback:
    """Create a config callback from a JSON or YAML file."""
    path_obj = Path(path)
    suffix = path_obj.suffix.lower()

    if suffix == ".json":
        with open(path_obj, "r") as f:
            return from_json(f)
    if suffix in (".yaml", ".yml"):
        with open(path_obj, "r") as f:
            return from_yaml(f)

    raise ValueError(f"Unknown config format: {path}")


def from_env(prefix: str = "HTTPBUILDER_CORS_") -> CorsConfigCallback:
    """Create a config callback from environment variables.

    ``HTTPBUILDER_CORS_ALLOW_METHODS=GET,POST`` sets ``allowMethods``; an
    empty value sets an empty list.
    """
    env_keys = {
        attr.upper(): key for key, attr in CorsConfig.FIELD_NAMES.items()
    }
    data: Dict[str, List[str]] = {}

    for key, value in os.environ.items():
        if not key.startswith(prefix):
            continue

        doc_key = env_keys.get(key[len(prefix):].upper())
        if doc_key is None:
            logger.debug(f"Ignoring unknown CORS env variable: {key}")
            continue

        data[doc_key] = [item.strip() for item in value.split(",") if item.strip()]

    return _apply(data, ConfigSource.ENV)


def chain(*callbacks: Optional[CorsConfigCallback]) -> CorsConfigCallback:
    """Combine callbacks, applied in argument order."""

    def callback(config: CorsConfig) -> None:
        for cb in callbacks:
            if cb is not None:
                cb(config)

    return callback


def load_cors_config(
    path: Optional[Union[str, Path]] = None,
    env_prefix: str = "HTTPBUILDER_CORS_",
) -> CorsConfig:
    """Load CORS configuration from multiple sources.

    Priority (highest to lowest):
    1. Environment variables
    2. Config file (if provided)
    3. Defaults
    """
    config = CorsConfig()

    # Load from file if provided
    if path:
        path_obj = Path(path)
        if path_obj.exists():
            if path_obj.suffix.lower() in (".json", ".yaml", ".yml"):
                from_file(path_obj)(config)
            else:
                logger.warning(f"Unknown config format: {path}")

    # Override with environment variables
    from_env(env_prefix)(config)

    return config


__all__ = [
    "ConfigSource",
    "from_dict",
    "from_json",
    "from_yaml",
    "from_file",
    "from_env",
    "chain",
    "load_cors_config",
]
