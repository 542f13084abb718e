"""
Per-network Uniswap deployment addresses.

``TESTNET=true`` selects Sepolia, anything else Ethereum mainnet.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

# Tiers de fee V3 (en centésimas de bip)
V3_FEE_TIERS: Tuple[int, ...] = (100, 500, 3000, 10000)
V3_HOP_FEE_TIERS: Tuple[int, ...] = (500, 3000, 10000)


@dataclass(frozen=True)
class NetworkConstants:
    name: str
    chain_id: int
    weth: str
    v2_router: str
    v3_swap_router: str
    v3_quoter: str
    intermediaries: Tuple[str, ...]


MAINNET = NetworkConstants(
    name="mainnet",
    chain_id=1,
    weth="0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",
    v2_router="0x7a250d5630B4cF539739dF2C5dAcb4c659F2488D",
    v3_swap_router="0x68b3465833fb72A70ecDF485E0e4C7bD8665Fc45",
    v3_quoter="0x61fFE014bA17989E743c5F6cB21bF9697530B21e",
    intermediaries=(
        "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",  # USDC
        "0xdAC17F958D2ee523a2206206994597C13D831ec7",  # USDT
        "0x6B175474E89094C44Da98b954EedeAC495271d0F",  # DAI
    ),
)

SEPOLIA = NetworkConstants(
    name="sepolia",
    chain_id=11155111,
    weth="0xfFf9976782d46CC05630D1f6eBAb18b2324d6B14",
    v2_router="0xeE567Fe1712Faf6149d80dA1E6934E354124CfE3",
    v3_swap_router="0x3bFA4769FB09eefC5a80d6E87c3B9C650f7Ae48E",
    v3_quoter="0xEd1f6473345F45b75F8179591dd5bA1888cf2FB3",
    intermediaries=(
        "0x1c7D4B196Cb0C7B01d743Fbc6116a902379C7238",  # USDC
    ),
)


def network_constants(testnet: bool) -> NetworkConstants:
    return SEPOLIA if testnet else MAINNET
