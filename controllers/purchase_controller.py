"""
Purchase executor: turn a qualifying pair into one broadcast swap.

Routing is delegated to a :class:`services.router_service.SwapRouter`; this
controller only picks the token to buy, forces the operator's gas price on
the routed transaction and hands it to the signer. Nothing is retried.
"""

from __future__ import annotations

from typing import Optional, Sequence

from enums.uniswap_version import UniswapVersion
from models.sniper_config import SniperConfig
from services.router_service import SwapRouter
from services.telegram_service import TelegramService
from utils.log_config import logger_manager, log_function
from utils.web3_utils import normalize_address

logger = logger_manager.setup_logger(__name__)

# campos de gas EIP-1559 incompatibles con gasPrice
_FEE_MARKET_FIELDS = ("maxFeePerGas", "maxPriorityFeePerGas", "type", "accessList")

ALL_VERSIONS: Sequence[UniswapVersion] = (UniswapVersion.V2, UniswapVersion.V3)


def apply_gas_price(tx: dict, gas_price_wei: int) -> dict:
    """Return a copy of ``tx`` priced as a legacy tx at ``gas_price_wei``.

    Whatever gas pricing the routing step produced is dropped, so the
    ceiling always wins.
    """
    priced = dict(tx)
    for key in _FEE_MARKET_FIELDS:
        priced.pop(key, None)
    priced["gasPrice"] = int(gas_price_wei)
    return priced


class PurchaseController:
    def __init__(
        self,
        web3_service,
        router: SwapRouter,
        config: SniperConfig,
        notifier: Optional[TelegramService] = None,
        versions: Sequence[UniswapVersion] = ALL_VERSIONS,
    ) -> None:
        self.web3_service = web3_service
        self.router = router
        self.config = config
        self.notifier = notifier
        self.versions = tuple(versions)
        self.target_token = normalize_address(config.token_address)

    def resolve_target(self, token0: str, token1: str) -> str:
        """The configured target, provided it is one of the pair's tokens."""
        pair = (normalize_address(token0), normalize_address(token1))
        if self.target_token not in pair:
            raise ValueError(f"El par {pair} no contiene el token objetivo {self.target_token}")
        return self.target_token

    @log_function
    def submit_purchase(self, token0: str, token1: str) -> str:
        desired = self.resolve_target(token0, token1)

        payload = self.router.quote_and_build(
            from_token=self.config.network.weth,
            to_token=desired,
            amount_in=self.config.purchase_amount_wei,
            slippage=self.config.slippage,
            deadline_minutes=self.config.deadline_minutes,
            versions=self.versions,
            disable_multihops=self.config.disable_multihops,
            recipient=self.web3_service.address,
        )

        tx = apply_gas_price(payload.transaction, self.config.gas_price_wei)
        tx_hash = self.web3_service.sign_and_send(tx)
        logger.info(f"Transaction sent: {tx_hash}")

        if self.notifier is not None:
            # la tx ya está emitida: un aviso fallido no la convierte en fallo
            try:
                self.notifier.notify_purchase(
                    token_address=desired,
                    tx_hash=tx_hash,
                    route=payload.route.describe(),
                    amount_eth=self.web3_service.wei_to_eth(payload.route.amount_in),
                )
            except Exception as e:
                logger.error(f"Aviso de compra no enviado ({tx_hash}): {e}")
        return tx_hash
