"""quorumsim.core

Core primitives: configuration, errors, logging.
"""

from .config import Config
from .exceptions import (
    ConfigError,
    InvariantError,
    QuorumSimError,
    RepresentationError,
    SpecFormatError,
    UnknownFlagValueError,
)

__all__ = [
    "Config",
    "ConfigError",
    "InvariantError",
    "QuorumSimError",
    "RepresentationError",
    "SpecFormatError",
    "UnknownFlagValueError",
]
