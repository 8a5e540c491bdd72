import logging
import sys
from functools import lru_cache
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Literal

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Directorio de logs (backend/logs/)
_LOG_DIR = Path(__file__).parent.parent.parent / "logs"

# Símbolos para visualizar operaciones sobre registros
OP_SYMBOLS = {
    "save": "✚",
    "update": "✎",
    "remove": "✖",
    "clear": "∅",
    "sort": "⇅",
    "warn": "⚠",
}


def _configure_root_logger(level: LogLevel) -> None:
    """Configura el logger raíz con handlers de consola y archivo."""
    root = logging.getLogger()
    if root.handlers:
        return

    # Silenciar loggers ruidosos de terceros
    noisy_loggers = [
        "watchfiles",
        "watchfiles.main",
        "httpx",
        "httpcore",
        "uvicorn.access",
    ]
    for logger_name in noisy_loggers:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    formatter = logging.Formatter(_LOG_FORMAT, _DATE_FORMAT)

    # Handler de consola (stdout)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    # Handler de archivo con rotación diaria (mantiene 7 días)
    try:
        _LOG_DIR.mkdir(exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            _LOG_DIR / "risk_evaluator.log",
            when="midnight",
            interval=1,
            backupCount=7,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
    except OSError as e:
        # Si falla la creación del archivo, solo usar consola
        root.warning(f"File logging disabled: {e}")

    root.setLevel(level)


@lru_cache(maxsize=128)
def get_logger(name: str) -> logging.Logger:
    """
    Retorna un logger configurado para el módulo especificado.

    Uso:
        from riskeval.core.logging import get_logger
        logger = get_logger(__name__)
        logger.info("Mensaje")
    """
    from riskeval.core.config import settings

    _configure_root_logger(settings.log_level)
    return logging.getLogger(name)


class RecordLogger:
    """Logger especializado para trazabilidad del ciclo de vida de registros."""

    def __init__(self, component: str):
        self._logger = get_logger(f"records.{component}")
        self.component = component

    def loaded(self, count: int, skipped: int = 0) -> None:
        """Log carga inicial desde el almacenamiento."""
        self._logger.info(f"Loaded {count} record(s) from storage" + (f", skipped {skipped}" if skipped else ""))

    def saved(self, record_id: int, risk_score: int, tier: str, updated: bool) -> None:
        symbol = OP_SYMBOLS["update" if updated else "save"]
        action = "UPDATED" if updated else "CREATED"
        self._logger.info(f"{symbol} [{action}] id={record_id} | NR={risk_score} | Level {tier}")

    def removed(self, record_id: int) -> None:
        self._logger.info(f"{OP_SYMBOLS['remove']} [REMOVED] id={record_id}")

    def cleared(self, count: int) -> None:
        self._logger.info(f"{OP_SYMBOLS['clear']} [CLEARED] {count} record(s)")

    def sorted(self, criterion: str, count: int) -> None:
        self._logger.debug(f"{OP_SYMBOLS['sort']} [SORT] {count} record(s) by '{criterion}'")

    def validation_rejected(self, errors: list[str]) -> None:
        """Log rechazo de un formulario inválido."""
        self._logger.info(f"Submission rejected: {'; '.join(errors)}")

    def edit_started(self, record_id: int) -> None:
        self._logger.debug(f"Edit cursor -> id={record_id}")

    def edit_reset(self) -> None:
        self._logger.debug("Edit cursor -> none")

    def warning(self, message: str) -> None:
        self._logger.warning(f"{OP_SYMBOLS['warn']} {message}")

    def error(self, operation: str, error: Exception) -> None:
        self._logger.error(f"[{operation.upper()}] ERROR: {type(error).__name__}: {error}", exc_info=True)
