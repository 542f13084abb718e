"""
Lifecycle states of a sniping run.

A run starts WATCHING, moves to PURCHASING on the first qualifying pair and
ends in TERMINATED (broadcast accepted) or FAILED. STOPPED means the
operator interrupted the watch before any purchase. There is no way back to
WATCHING.
"""

from __future__ import annotations

from enum import Enum


class SniperState(str, Enum):
    WATCHING = "watching"
    PURCHASING = "purchasing"
    TERMINATED = "terminated"
    FAILED = "failed"
    STOPPED = "stopped"
