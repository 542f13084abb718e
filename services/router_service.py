"""
Quote and build Uniswap swaps from the base currency into a token.

The routing itself is done on-chain: V2 quotes come from
``Router02.getAmountsOut`` and V3 quotes from ``QuoterV2.quoteExactInput``.
This module only enumerates candidate paths (direct, or one hop through a
well-known intermediary), keeps the best quote and encodes the router call.
"""

from __future__ import annotations

from decimal import ROUND_DOWN, Decimal
from time import time
from typing import List, Optional, Protocol, Sequence, Tuple

from web3.exceptions import BadFunctionCallOutput, ContractLogicError

from enums.uniswap_version import UniswapVersion
from models.swap_payload import SwapPayload, SwapRoute
from utils.constants import V3_FEE_TIERS, V3_HOP_FEE_TIERS, NetworkConstants
from utils.load_abi import load_v2_router_abi, load_v3_quoter_abi, load_v3_swap_router_abi
from utils.log_config import logger_manager, log_function
from utils.web3_utils import encode_v3_path, normalize_address, same_address

logger = logger_manager.setup_logger(__name__)

# revert de la pool o contrato sin código: el path no cotiza
_NO_QUOTE_ERRORS = (ContractLogicError, BadFunctionCallOutput)


class NoRouteError(RuntimeError):
    """No candidate path produced a quote for the requested swap."""


class SwapRouter(Protocol):
    def quote_and_build(
        self,
        from_token: str,
        to_token: str,
        amount_in: int,
        slippage: float,
        deadline_minutes: int,
        versions: Sequence[UniswapVersion],
        disable_multihops: bool,
        recipient: str,
    ) -> SwapPayload:
        ...


def apply_slippage(amount_out: int, slippage: float) -> int:
    """Minimum output accepted for ``amount_out`` under ``slippage`` (fraction)."""
    factor = Decimal(1) - Decimal(str(slippage))
    return int((Decimal(int(amount_out)) * factor).to_integral_value(rounding=ROUND_DOWN))


class UniswapRouterService:
    def __init__(self, web3_service, network: NetworkConstants) -> None:
        self.web3_service = web3_service
        self.network = network
        self.weth = normalize_address(network.weth)
        self.intermediaries = [normalize_address(a) for a in network.intermediaries]

        self._v2_router = web3_service.contract(network.v2_router, load_v2_router_abi())
        self._v3_router = web3_service.contract(network.v3_swap_router, load_v3_swap_router_abi())
        self._quoter = web3_service.contract(network.v3_quoter, load_v3_quoter_abi())

    # ---------- candidatos ----------
    def _hops_for(self, token: str, disable_multihops: bool) -> List[str]:
        if disable_multihops:
            return []
        return [h for h in self.intermediaries if h not in (self.weth, token)]

    def v2_paths(self, token: str, disable_multihops: bool) -> List[List[str]]:
        paths = [[self.weth, token]]
        paths += [[self.weth, hop, token] for hop in self._hops_for(token, disable_multihops)]
        return paths

    def v3_paths(self, token: str, disable_multihops: bool) -> List[Tuple[List[str], List[int]]]:
        paths = [([self.weth, token], [fee]) for fee in V3_FEE_TIERS]
        for hop in self._hops_for(token, disable_multihops):
            for fee_in in V3_HOP_FEE_TIERS:
                for fee_out in V3_HOP_FEE_TIERS:
                    paths.append(([self.weth, hop, token], [fee_in, fee_out]))
        return paths

    # ---------- quotes ----------
    def quote_v2(self, path: List[str], amount_in: int) -> Optional[int]:
        try:
            amounts = self._v2_router.functions.getAmountsOut(int(amount_in), path).call()
        except _NO_QUOTE_ERRORS as e:
            logger.debug(f"v2 sin cotización para {path}: {e}")
            return None
        out = int(amounts[-1]) if amounts else 0
        return out if out > 0 else None

    def quote_v3(self, path: List[str], fees: List[int], amount_in: int) -> Optional[int]:
        try:
            result = self._quoter.functions.quoteExactInput(encode_v3_path(path, fees), int(amount_in)).call()
        except _NO_QUOTE_ERRORS as e:
            logger.debug(f"v3 sin cotización para {path} fees={fees}: {e}")
            return None
        out = int(result[0])
        return out if out > 0 else None

    @log_function
    def best_route(
        self,
        token: str,
        amount_in: int,
        versions: Sequence[UniswapVersion],
        disable_multihops: bool,
    ) -> SwapRoute:
        best: Optional[SwapRoute] = None

        if UniswapVersion.V2 in versions:
            for path in self.v2_paths(token, disable_multihops):
                out = self.quote_v2(path, amount_in)
                if out and (best is None or out > best.amount_out):
                    best = SwapRoute(UniswapVersion.V2, path, amount_in, out)

        if UniswapVersion.V3 in versions:
            for path, fees in self.v3_paths(token, disable_multihops):
                out = self.quote_v3(path, fees, amount_in)
                if out and (best is None or out > best.amount_out):
                    best = SwapRoute(UniswapVersion.V3, path, amount_in, out, fees)

        if best is None:
            raise NoRouteError(
                f"Sin ruta con liquidez {self.weth} -> {token} "
                f"(versions={[v.value for v in versions]}, multihops={not disable_multihops})"
            )
        logger.info(f"Mejor ruta {best.describe()} saltos={best.hops} out={best.amount_out}")
        return best

    # ---------- builders ----------
    def _build_v2(self, route: SwapRoute, amount_out_min: int, recipient: str, deadline: int) -> dict:
        func = self._v2_router.functions.swapExactETHForTokens(
            int(amount_out_min), route.path, recipient, deadline
        )
        return func.build_transaction(self.web3_service.base_tx_params(value=route.amount_in))

    def _build_v3(self, route: SwapRoute, amount_out_min: int, recipient: str, deadline: int) -> dict:
        # SwapRouter02 no lleva deadline en exactInput: se aplica vía multicall(deadline, data)
        params = (encode_v3_path(route.path, route.fees), recipient, int(route.amount_in), int(amount_out_min))
        data = self._v3_router.encode_abi("exactInput", args=[params])
        func = self._v3_router.functions.multicall(deadline, [data])
        return func.build_transaction(self.web3_service.base_tx_params(value=route.amount_in))

    @log_function
    def quote_and_build(
        self,
        from_token: str,
        to_token: str,
        amount_in: int,
        slippage: float,
        deadline_minutes: int,
        versions: Sequence[UniswapVersion],
        disable_multihops: bool,
        recipient: str,
    ) -> SwapPayload:
        if not same_address(from_token, self.weth):
            raise ValueError(f"Solo se compra desde la moneda base ({self.weth}), no {from_token}")
        if int(amount_in) <= 0:
            raise ValueError("amount_in debe ser > 0")

        token = normalize_address(to_token)
        recipient = normalize_address(recipient)
        route = self.best_route(token, int(amount_in), versions, disable_multihops)
        amount_out_min = apply_slippage(route.amount_out, slippage)
        deadline = int(time()) + int(deadline_minutes) * 60

        if route.version is UniswapVersion.V2:
            tx = self._build_v2(route, amount_out_min, recipient, deadline)
        else:
            tx = self._build_v3(route, amount_out_min, recipient, deadline)

        return SwapPayload(route=route, amount_out_min=amount_out_min, deadline=deadline, transaction=tx)
