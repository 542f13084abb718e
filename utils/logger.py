from __future__ import annotations
import logging
from logging.handlers import RotatingFileHandler
import os, functools, time
from pathlib import Path

_DEFAULT_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
_MAX_BYTES = int(os.getenv("LOG_MAX_BYTES", "1048576"))
_BACKUP_COUNT = int(os.getenv("LOG_BACKUP_COUNT", "3"))

_CONSOLE_FMT = "%(asctime)s | %(levelname)s | %(threadName)s | %(name)s | %(message)s"
_FILE_FMT = "%(asctime)s | %(levelname)s | %(threadName)s | %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


class _LoggerManager:
    """Console handler on the root logger plus one rotating file per module."""

    def __init__(self) -> None:
        self._configured = False
        self._file_handlers: dict[str, logging.Handler] = {}
        self._log_dir = os.getenv("LOG_DIR", "./logs")

    @property
    def level(self) -> int:
        return getattr(logging, _DEFAULT_LEVEL, logging.INFO)

    def _ensure(self) -> None:
        if self._configured:
            return

        root = logging.getLogger()
        root.setLevel(self.level)
        if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
            sh = logging.StreamHandler()
            sh.setLevel(self.level)
            sh.setFormatter(logging.Formatter(fmt=_CONSOLE_FMT, datefmt=_DATEFMT))
            root.addHandler(sh)

        # web3 / urllib3 son muy ruidosos en DEBUG
        for noisy in ("web3", "urllib3"):
            logging.getLogger(noisy).setLevel(max(self.level, logging.INFO))

        self._configured = True

    def _file_handler(self, name: str) -> logging.Handler | None:
        safe_name = name.replace(".", "_").replace("/", "_")
        try:
            Path(self._log_dir).mkdir(parents=True, exist_ok=True)
            fh = RotatingFileHandler(
                os.path.join(self._log_dir, f"{safe_name}.log"),
                maxBytes=_MAX_BYTES,
                backupCount=_BACKUP_COUNT,
                encoding="utf-8",
            )
        except OSError:
            # directorio de logs no escribible: solo consola
            return None
        fh.setLevel(self.level)
        fh.setFormatter(logging.Formatter(fmt=_FILE_FMT, datefmt=_DATEFMT))
        return fh

    def setup_logger(self, name: str) -> logging.Logger:
        self._ensure()
        logger = logging.getLogger(name)

        if name not in self._file_handlers:
            fh = self._file_handler(name)
            if fh is not None:
                self._file_handlers[name] = fh
                logger.addHandler(fh)
                logger.propagate = True  # conserva salida a consola

        return logger


logger_manager = _LoggerManager()


def log_function(func):
    """Trace entry, exit and failures of ``func`` at DEBUG level.

    Exceptions are logged and re-raised untouched.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = logger_manager.setup_logger(func.__module__)
        logger.debug(f"→ {func.__qualname__} args={args} kwargs={kwargs}")
        t0 = time.time()
        try:
            result = func(*args, **kwargs)
            logger.debug(f"← {func.__qualname__} ({(time.time()-t0)*1000:.1f} ms)")
            return result
        except Exception as e:
            logger.exception(f"✗ {func.__qualname__}: {e}")
            raise
    return wrapper
