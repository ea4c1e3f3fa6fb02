"""quorumsim — probability-of-compromise sweeps for quorum-based groups.

Flexible parameter strings in, one row per concrete configuration out.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.3.0"
