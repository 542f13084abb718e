# orchestrators/sniper_orchestrator.py
from __future__ import annotations
import threading
from typing import Dict, Optional

from controllers.pair_watcher import PairWatcher
from controllers.purchase_controller import PurchaseController
from enums.sniper_state import SniperState
from enums.uniswap_version import UniswapVersion
from models.pair_event import PairCreatedEvent
from models.sniper_config import SniperConfig
from services.event_subscription import EventSubscription
from services.router_service import UniswapRouterService
from services.telegram_service import TelegramService
from services.web3_service import Web3Service
from utils.load_abi import load_v2_factory_abi, load_v3_factory_abi
from utils.log_config import logger_manager, log_function

logger = logger_manager.setup_logger(__name__)


class SniperOrchestrator:
    """
    Ciclo de vida de una ejecución: WATCHING -> PURCHASING -> TERMINATED.

    Una factory por versión, cada una con su suscripción y su PairWatcher.
    Un único lock protege la transición a PURCHASING, así que aunque V2 y
    V3 emitan a la vez solo se lanza una compra. Tras enviarla (o fallar)
    se cancelan ambas suscripciones.
    """

    def __init__(
        self,
        purchase_controller: PurchaseController,
        target_token: str,
        subscriptions: Dict[UniswapVersion, EventSubscription],
    ) -> None:
        self.purchase = purchase_controller
        self.subscriptions = subscriptions
        self.watchers = {
            version: PairWatcher(version, target_token, self._on_target_pair)
            for version in subscriptions
        }

        self._lock = threading.Lock()
        self._done = threading.Event()
        self._state = SniperState.WATCHING
        self.tx_hash: Optional[str] = None
        self.error: Optional[BaseException] = None

    @classmethod
    def from_config(
        cls,
        config: SniperConfig,
        web3_service: Optional[Web3Service] = None,
        notifier: Optional[TelegramService] = None,
    ) -> "SniperOrchestrator":
        w3s = web3_service or Web3Service(
            config.rpc_endpoint,
            config.private_key,
            timeout=config.rpc_timeout_secs,
            dry_run=config.dry_run,
        )
        router = UniswapRouterService(w3s, config.network)
        if notifier is None:
            notifier = TelegramService(config.telegram_token, config.telegram_chat_id, testnet=config.testnet)
        purchase = PurchaseController(w3s, router, config, notifier=notifier)

        factories = {
            UniswapVersion.V2: w3s.contract(config.factory_v2_address, load_v2_factory_abi()),
            UniswapVersion.V3: w3s.contract(config.factory_v3_address, load_v3_factory_abi()),
        }
        subscriptions = {
            version: EventSubscription(
                w3s,
                getattr(factory.events, version.creation_event),
                name=f"Factory{version.value.upper()}",
                poll_interval=config.poll_interval_secs,
            )
            for version, factory in factories.items()
        }
        return cls(purchase, config.token_address, subscriptions)

    @property
    def state(self) -> SniperState:
        return self._state

    # ---------- ciclo de vida ----------
    def start(self) -> None:
        for version, sub in self.subscriptions.items():
            if self._state is not SniperState.WATCHING:
                # compra ya disparada por otra factory durante el arranque
                break
            watcher = self.watchers[version]
            sub.on_error = self._on_subscription_error
            sub.start(watcher.handle_event)
            logger.info(f"Vigilando {watcher.event_name} en factory Uniswap {version.value} ({sub.name})")

    def stop(self) -> None:
        """Parada externa (señal). Una compra en curso termina igualmente."""
        with self._lock:
            if self._state is SniperState.WATCHING:
                self._state = SniperState.STOPPED
                self._done.set()
        self._cancel_subscriptions()

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self._done.wait(timeout)

    @log_function
    def run(self) -> Optional[str]:
        """Vigila hasta la primera compra. Devuelve el hash o None si se paró.

        Un fallo de compra o de suscripción se relanza aquí.
        """
        try:
            self.start()
        except Exception:
            # p.ej. nodo inalcanzable al leer el bloque inicial
            self._cancel_subscriptions()
            raise
        while not self._done.wait(0.5):
            pass
        if self._state is SniperState.FAILED and self.error is not None:
            raise self.error
        return self.tx_hash

    def _cancel_subscriptions(self) -> None:
        for sub in self.subscriptions.values():
            sub.cancel()

    # ---------- callbacks ----------
    def _on_target_pair(self, pair: PairCreatedEvent) -> None:
        with self._lock:
            if self._state is not SniperState.WATCHING:
                logger.info(f"[{pair.version.value}] Par objetivo ignorado; estado={self._state.value}")
                return
            self._state = SniperState.PURCHASING

        # ninguna otra compra: dejamos de vigilar ya
        self._cancel_subscriptions()
        try:
            tx_hash = self.purchase.submit_purchase(pair.token0, pair.token1)
        except Exception as e:
            logger.error(f"Compra fallida para {pair.pair_address}: {e}")
            with self._lock:
                self.error = e
                self._state = SniperState.FAILED
        else:
            with self._lock:
                self.tx_hash = tx_hash
                self._state = SniperState.TERMINATED
        finally:
            self._done.set()

    def _on_subscription_error(self, sub: EventSubscription, err: BaseException) -> None:
        with self._lock:
            if self._state is not SniperState.WATCHING:
                return
            self.error = err
            self._state = SniperState.FAILED
        logger.error(f"[{sub.name}] error de conexión; se aborta la vigilancia.")
        self._cancel_subscriptions()
        self._done.set()
