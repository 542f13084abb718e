"""
Domain model for a "new market" notification from a Uniswap factory.

V2 factories emit ``PairCreated(token0, token1, pair, index)`` and V3
factories ``PoolCreated(token0, token1, fee, tickSpacing, pool)``. Both are
reduced to the same shape here.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from enums.uniswap_version import UniswapVersion
from utils.web3_utils import normalize_address


class PairCreatedEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    version: UniswapVersion
    token0: str
    token1: str
    pair_address: str
    fee: Optional[int] = None
    block_number: Optional[int] = None
    tx_hash: Optional[str] = None

    @classmethod
    def from_log(cls, version: UniswapVersion, log: Mapping[str, Any]) -> "PairCreatedEvent":
        """Build from a web3 ``EventData`` (decoded log)."""
        args = log["args"]
        tx_hash = log.get("transactionHash")
        return cls(
            version=version,
            token0=normalize_address(args["token0"]),
            token1=normalize_address(args["token1"]),
            pair_address=normalize_address(args["pair"] if version is UniswapVersion.V2 else args["pool"]),
            fee=args.get("fee") if version is UniswapVersion.V3 else None,
            block_number=log.get("blockNumber"),
            tx_hash=tx_hash.to_0x_hex() if hasattr(tx_hash, "to_0x_hex") else tx_hash,
        )

    def contains(self, token: str) -> bool:
        target = normalize_address(token)
        return target in (self.token0, self.token1)

    def other_token(self, token: str) -> str:
        """The token of the pair that is not ``token``."""
        return self.token1 if normalize_address(token) == self.token0 else self.token0
