"""quorumsim.core.exceptions

Errors are part of the interface.

Every error here is fatal for the batch. There is no per-configuration retry.
"""

from __future__ import annotations


class QuorumSimError(Exception):
    """Base exception for quorumsim."""


class ConfigError(QuorumSimError):
    """Configuration is missing, invalid, or inconsistent."""


class SpecFormatError(QuorumSimError, ValueError):
    """Sweep string does not match `v`, `v1,v2,..` or `start-stop[:step]`."""


class RepresentationError(QuorumSimError, TypeError):
    """Relative and absolute quantities were mixed in one operation."""


class UnknownFlagValueError(QuorumSimError, ValueError):
    """Selector value outside its known set."""


class InvariantError(QuorumSimError):
    """A resolved configuration failed a correctness precondition."""
