"""
Address and unit helpers shared by the sniper services.

Everything here is pure: no provider is needed, so the helpers are safe to
call while validating configuration and inside event callbacks.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Sequence, Union

from web3 import Web3

Number = Union[str, int, Decimal]


def normalize_address(address: str) -> str:
    """Return the EIP-55 checksum form of ``address``.

    Accepts any casing, including a mixed case whose checksum does not match.
    Applying it twice yields the same value. Raises
    ``ValueError`` when ``address`` is not a 20-byte hex address.
    """
    if not isinstance(address, str) or not Web3.is_address(address.lower()):
        raise ValueError(f"Dirección inválida: {address!r}")
    return Web3.to_checksum_address(address)


def same_address(a: str, b: str) -> bool:
    return normalize_address(a) == normalize_address(b)


def gwei_to_wei(amount: Number) -> int:
    return int(Web3.to_wei(Decimal(str(amount)), "gwei"))


def ether_to_wei(amount: Number) -> int:
    return int(Web3.to_wei(Decimal(str(amount)), "ether"))


def encode_v3_path(tokens: Sequence[str], fees: Sequence[int]) -> bytes:
    """Pack a Uniswap V3 path: ``token (20 bytes) | fee (3 bytes) | token ...``."""
    if len(tokens) != len(fees) + 1 or len(tokens) < 2:
        raise ValueError("Un path V3 necesita len(tokens) == len(fees) + 1 >= 2")
    out = bytes.fromhex(normalize_address(tokens[0])[2:])
    for fee, token in zip(fees, tokens[1:]):
        out += int(fee).to_bytes(3, "big") + bytes.fromhex(normalize_address(token)[2:])
    return out
