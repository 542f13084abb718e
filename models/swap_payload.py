"""
Result of the routing step: the chosen route and an unsigned transaction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from enums.uniswap_version import UniswapVersion


@dataclass
class SwapRoute:
    version: UniswapVersion
    path: List[str]
    amount_in: int
    amount_out: int
    fees: List[int] = field(default_factory=list)

    @property
    def hops(self) -> int:
        return len(self.path) - 1

    def describe(self) -> str:
        if self.version is UniswapVersion.V3:
            legs = [f"{a} -({fee})-> " for a, fee in zip(self.path, self.fees)]
            return f"{self.version.value}: " + "".join(legs) + self.path[-1]
        return f"{self.version.value}: " + " -> ".join(self.path)


@dataclass
class SwapPayload:
    route: SwapRoute
    amount_out_min: int
    deadline: int
    transaction: Dict[str, Any]
