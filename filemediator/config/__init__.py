"""
Configuration for the read-file mediator.

Handles:
- ReadFileConfig (the immutable per-mediator settings)
- YAML loading (config/read_file.yaml)
"""

from .read_file import (
    ReadFileConfig,
    ConfigLoader,
    TEXT_PLAIN,
    XML,
)

__all__ = [
    "ReadFileConfig",
    "ConfigLoader",
    "TEXT_PLAIN",
    "XML",
]
