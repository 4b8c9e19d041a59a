"""Utils module - Configuration loading."""

from httpbuilder.utils.config import (
    ConfigSource,
    chain,
    from_dict,
    from_env,
    from_file,
    from_json,
    from_yaml,
    load_cors_config,
)

__all__ = [
    "ConfigSource",
    "chain",
    "from_dict",
    "from_env",
    "from_file",
    "from_json",
    "from_yaml",
    "load_cors_config",
]
