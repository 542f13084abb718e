"""
Validated, immutable configuration of one sniping run.

Built once at startup from environment variables and ``config.yaml``.
Any malformed value raises ``pydantic.ValidationError`` before a single RPC
call is made.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Optional

from eth_account import Account
from pydantic import BaseModel, ConfigDict, Field, field_validator

from utils.constants import NetworkConstants, network_constants
from utils.web3_utils import ether_to_wei, gwei_to_wei, normalize_address


def _positive_decimal(value: object, field: str) -> str:
    try:
        parsed = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValueError(f"{field} no es un decimal válido: {value!r}") from None
    if not parsed.is_finite() or parsed <= 0:
        raise ValueError(f"{field} debe ser > 0: {value!r}")
    return str(value).strip()


class SniperConfig(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    token_address: str
    factory_v2_address: str
    factory_v3_address: str
    rpc_endpoint: str
    private_key: str = Field(repr=False)
    purchase_amount: str
    gas_price: str
    slippage: float
    testnet: bool

    deadline_minutes: int = Field(default=20, gt=0)
    poll_interval_secs: float = Field(default=2.0, gt=0)
    rpc_timeout_secs: float = Field(default=30.0, gt=0)
    disable_multihops: bool = False
    dry_run: bool = False
    telegram_token: Optional[str] = Field(default=None, repr=False)
    telegram_chat_id: Optional[int] = None

    @field_validator("token_address", "factory_v2_address", "factory_v3_address")
    @classmethod
    def _checksum(cls, v: str) -> str:
        return normalize_address(v)

    @field_validator("rpc_endpoint")
    @classmethod
    def _rpc(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"RPC_ENDPOINT debe ser http(s): {v!r}")
        return v

    @field_validator("private_key")
    @classmethod
    def _key(cls, v: str) -> str:
        try:
            Account.from_key(v)
        except Exception:
            raise ValueError("PRIVATE_KEY malformada") from None
        return v

    @field_validator("purchase_amount", mode="before")
    @classmethod
    def _amount(cls, v: object) -> str:
        return _positive_decimal(v, "PURCHASE_AMOUNT")

    @field_validator("gas_price", mode="before")
    @classmethod
    def _gas(cls, v: object) -> str:
        return _positive_decimal(v, "GAS_PRICE")

    @field_validator("slippage")
    @classmethod
    def _slippage(cls, v: float) -> float:
        if not 0 <= v < 1:
            raise ValueError(f"SLIPPAGE es una fracción en [0, 1): {v!r}")
        return v

    @property
    def purchase_amount_wei(self) -> int:
        return ether_to_wei(self.purchase_amount)

    @property
    def gas_price_wei(self) -> int:
        return gwei_to_wei(self.gas_price)

    @property
    def network(self) -> NetworkConstants:
        return network_constants(self.testnet)
