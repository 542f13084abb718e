from utils.logger import logger_manager, log_function

# Decorador para logging de funciones
log_function = log_function

# Logger por defecto del proceso; los módulos usan setup_logger(__name__)
logger = logger_manager.setup_logger("sniper")
