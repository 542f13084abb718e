"""
Uniswap protocol versions watched and routed by the sniper.
"""

from __future__ import annotations

from enum import Enum


class UniswapVersion(str, Enum):
    """Protocol version of a factory, pool or route."""

    V2 = "v2"
    V3 = "v3"

    @property
    def creation_event(self) -> str:
        """Name of the event the version's factory emits for a new market."""
        return "PairCreated" if self is UniswapVersion.V2 else "PoolCreated"
