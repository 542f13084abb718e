# main.py
from __future__ import annotations
import signal
import sys

# ---- carga .env antes de importar el proyecto ----
# utils.logger (LOG_*) y utils.load_abi (ABI_DIR) leen el entorno al importarse
from dotenv import find_dotenv, load_dotenv
load_dotenv(find_dotenv(usecwd=True))

# ---- imports del proyecto ----
from orchestrators.sniper_orchestrator import SniperOrchestrator
from utils.config import build_sniper_config
from utils.log_config import logger_manager

logger = logger_manager.setup_logger(__name__)


def main() -> int:
    # config.yaml + entorno; un valor malformado aborta aquí (ValidationError)
    config = build_sniper_config()
    logger.info(
        f"🚀 Sniper iniciado: token={config.token_address} red={config.network.name} "
        f"compra={config.purchase_amount} ETH gas={config.gas_price} gwei "
        f"slippage={config.slippage} dry_run={config.dry_run}"
    )

    orch = SniperOrchestrator.from_config(config)

    def shutdown(*_):
        logger.info("🛑 Señal de apagado recibida, deteniendo vigilancia...")
        orch.stop()

    signal.signal(signal.SIGINT, shutdown)
    signal.signal(signal.SIGTERM, shutdown)

    # fallos de compra / conexión se propagan: salida != 0
    tx_hash = orch.run()
    if tx_hash:
        # sin PGA: una sola compra y fin
        logger.info(f"✅ Compra enviada ({tx_hash}). Saliendo.")
    else:
        logger.info("Vigilancia detenida sin compra.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
