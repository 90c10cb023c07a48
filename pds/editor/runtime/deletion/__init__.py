"""Rate-limited bulk deletion.

Architecture:
    - definitions.py: DeletionPolicy (quota, retry and delay settings)
    - window.py: RateLimitWindow, the mutable per-run quota counter
    - deleter.py: RateLimitedDeleter, the ordered delete loop
"""

from __future__ import annotations

from .definitions import DeletionPolicy
from .deleter import ProgressSink, RateLimitedDeleter
from .window import RateLimitWindow

__all__ = ["DeletionPolicy", "ProgressSink", "RateLimitedDeleter", "RateLimitWindow"]
