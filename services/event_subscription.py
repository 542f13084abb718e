# services/event_subscription.py
from __future__ import annotations
import threading
from typing import Any, Callable, Optional

from utils.log_config import logger_manager, log_function

logger = logger_manager.setup_logger(__name__)

EventHandler = Callable[[Any], None]
ErrorHandler = Callable[["EventSubscription", BaseException], None]


class EventSubscription:
    """
    Suscripción cancelable a un evento de contrato.

    Sondea ``eth_blockNumber`` y pide los logs decodificados del rango nuevo
    con ``contract_event.get_logs`` (decodificación por ABI de web3.py).
    Empieza en el bloque siguiente al actual en ``start()``.

    Un error de red o de decodificación detiene la suscripción: queda en
    ``error`` y se notifica a ``on_error``. No hay reconexión.
    """

    def __init__(
        self,
        web3_service,
        contract_event,
        name: str,
        poll_interval: float = 2.0,
        on_error: Optional[ErrorHandler] = None,
    ) -> None:
        self.web3_service = web3_service
        self.contract_event = contract_event
        self.name = name
        self.poll_interval = poll_interval
        self.on_error = on_error

        self.error: Optional[BaseException] = None
        self._handler: Optional[EventHandler] = None
        self._next_block: Optional[int] = None
        self._stop_evt = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def cancelled(self) -> bool:
        return self._stop_evt.is_set()

    @property
    def running(self) -> bool:
        return bool(self._thread and self._thread.is_alive())

    def start(self, handler: EventHandler) -> None:
        # una suscripción cancelada no se reactiva
        if self.running or self.cancelled:
            return
        self._handler = handler
        self._next_block = self.web3_service.block_number() + 1
        self._thread = threading.Thread(target=self._run_loop, name=self.name, daemon=True)
        self._thread.start()
        logger.info(f"[{self.name}] suscripción iniciada desde bloque {self._next_block}")

    def cancel(self) -> None:
        if not self._stop_evt.is_set():
            self._stop_evt.set()
            logger.info(f"[{self.name}] suscripción cancelada.")

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread and self._thread is not threading.current_thread():
            self._thread.join(timeout)

    def poll_once(self) -> int:
        """Un paso de sondeo. Devuelve el número de eventos entregados."""
        latest = self.web3_service.block_number()
        if self._next_block is None:
            self._next_block = latest + 1
            return 0
        if latest < self._next_block:
            return 0

        logs = self.contract_event.get_logs(from_block=self._next_block, to_block=latest)
        self._next_block = latest + 1

        delivered = 0
        for log in logs:
            # cancelada desde el propio handler (compra hecha): no seguir entregando
            if self.cancelled:
                break
            self._handler(log)
            delivered += 1
        return delivered

    @log_function
    def _run_loop(self) -> None:
        while not self._stop_evt.is_set():
            try:
                self.poll_once()
            except Exception as e:
                self.error = e
                self._stop_evt.set()
                logger.exception(f"[{self.name}] suscripción detenida por error: {e}")
                if self.on_error:
                    self.on_error(self, e)
                return
            self._stop_evt.wait(self.poll_interval)
