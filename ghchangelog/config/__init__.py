"""Configuration module."""

from .settings import (
    ALL_LABELS,
    Options,
    get_config,
    load_json_config,
    find_config_file,
    create_sample_config,
    is_in_array,
)

__all__ = [
    "ALL_LABELS",
    "Options",
    "get_config",
    "load_json_config",
    "find_config_file",
    "create_sample_config",
    "is_in_array",
]
