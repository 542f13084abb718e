from __future__ import annotations
from typing import Any, Optional

from web3 import Web3
from web3.contract import Contract
from eth_account import Account
from eth_account.signers.local import LocalAccount

from utils.log_config import logger_manager, log_function
from utils.web3_utils import normalize_address

logger = logger_manager.setup_logger(__name__)


class Web3Service:
    """
    Conexión RPC + identidad firmante.

    No se comprueba el nodo al construir: un endpoint caído o una clave
    inválida fallan en el primer uso. Sin reintentos ni failover.
    """

    def __init__(
        self,
        rpc_url: str,
        private_key: str,
        timeout: float = 30.0,
        dry_run: bool = False,
        w3: Optional[Web3] = None,
    ) -> None:
        self._rpc_url = rpc_url
        self._w3 = w3 or Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout}))
        self._account: LocalAccount = Account.from_key(private_key)
        self.dry_run = dry_run
        logger.debug(f"Web3Service listo: rpc={rpc_url} wallet={self._account.address} dry_run={dry_run}")

    # ---------- util ----------
    @property
    def address(self) -> str:
        return self._account.address

    def checksum(self, address: str) -> str:
        return normalize_address(address)

    def contract(self, address: str, abi: list) -> Contract:
        return self._w3.eth.contract(address=self.checksum(address), abi=abi)

    def block_number(self) -> int:
        return int(self._w3.eth.block_number)

    def chain_id(self) -> int:
        return int(self._w3.eth.chain_id)

    def nonce(self) -> int:
        return int(self._w3.eth.get_transaction_count(self._account.address, "pending"))

    def base_tx_params(self, value: int = 0) -> dict[str, Any]:
        """Campos comunes para ``build_transaction`` desde la wallet."""
        return {
            "from": self._account.address,
            "value": int(value),
            "nonce": self.nonce(),
            "chainId": self.chain_id(),
        }

    # ---------- send ----------
    @log_function
    def sign_and_send(self, tx: dict) -> str:
        signed = self._account.sign_transaction(tx)
        if self.dry_run:
            logger.info(f"[DRY_RUN] No se envía tx. hash local={signed.hash.to_0x_hex()} TX={tx}")
            return signed.hash.to_0x_hex()
        tx_hash = self._w3.eth.send_raw_transaction(signed.raw_transaction)
        return tx_hash.to_0x_hex()

    def wei_to_eth(self, wei: int) -> float:
        return float(Web3.from_wei(int(wei), "ether"))
