# controllers/pair_watcher.py
from __future__ import annotations
from typing import Any, Callable

from enums.uniswap_version import UniswapVersion
from models.pair_event import PairCreatedEvent
from utils.log_config import logger_manager
from utils.web3_utils import normalize_address

logger = logger_manager.setup_logger(__name__)


class PairWatcher:
    """
    Filtra los eventos de creación de par de una factory.

    Por cada evento registra el par nuevo y, si contiene el token objetivo,
    llama a ``on_target_pair``. El resto se ignora y se sigue vigilando.
    """

    def __init__(
        self,
        version: UniswapVersion,
        target_token: str,
        on_target_pair: Callable[[PairCreatedEvent], Any],
    ) -> None:
        self.version = version
        self.target_token = normalize_address(target_token)
        self.on_target_pair = on_target_pair

    @property
    def event_name(self) -> str:
        return self.version.creation_event

    def matches(self, pair: PairCreatedEvent) -> bool:
        return pair.contains(self.target_token)

    def handle_event(self, log: Any) -> bool:
        """Procesa un log decodificado. True si disparó la compra."""
        pair = PairCreatedEvent.from_log(self.version, log)
        logger.info(f"[{self.version.value}] Nuevo par: {pair.token0}, {pair.token1}")

        if not self.matches(pair):
            return False

        logger.info(
            f"[{self.version.value}] Token objetivo encontrado en el par {pair.pair_address} "
            f"(contra {pair.other_token(self.target_token)})."
        )
        self.on_target_pair(pair)
        return True
