from __future__ import annotations
import requests

from utils.log_config import logger_manager, log_function

logger = logger_manager.setup_logger(__name__)

API_URL = "https://api.telegram.org/bot{token}/sendMessage"

_EXPLORERS = {
    False: "https://etherscan.io",
    True: "https://sepolia.etherscan.io",
}

def _esc(s: str) -> str:
    # escapado mínimo para Markdown
    return (s or "").replace("\\", "\\\\").replace("_", "\\_").replace("*", "\\*").replace("`", "\\`").replace("[","\\[").replace("]","\\]")

class TelegramService:
    """Avisos informativos por Telegram. Nunca lanza: un fallo solo se registra."""

    def __init__(self, token: str | None = None, chat_id: int | None = None,
                 testnet: bool = False, timeout: float = 10.0) -> None:
        self.token = token
        self.chat_id = chat_id
        self.explorer = _EXPLORERS[bool(testnet)]
        self.timeout = timeout
        if not self.enabled:
            logger.debug("TelegramService sin TOKEN o CHAT_ID; se desactivan envíos.")

    @property
    def enabled(self) -> bool:
        return bool(self.token and self.chat_id)

    def _send(self, text: str) -> bool:
        if not self.enabled:
            return False
        payload = {"chat_id": self.chat_id, "text": text, "parse_mode": "Markdown"}
        try:
            requests.post(API_URL.format(token=self.token), json=payload, timeout=self.timeout).raise_for_status()
            return True
        except Exception as e:
            logger.error(f"❌ Error enviando Telegram: {e}")
            return False

    @log_function
    def notify_purchase(self, token_address: str, tx_hash: str, route: str, amount_eth: float) -> bool:
        msg = (
            f"🎯 *Compra enviada*\n\n"
            f"*Token:* `{token_address}`\n"
            f"*Importe:* {amount_eth:g} ETH\n"
            f"*Ruta:* {_esc(route)}\n"
            f"*Tx:* {self.explorer}/tx/{tx_hash}"
        )
        return self._send(msg)
