"""
Logging de ReelSort via loguru.

La console affiche une ligne courte par evenement ; en DEBUG elle ajoute
l'emplacement du code. Le fichier, optionnel, recoit tout en JSON avec
rotation. Les loggers standard des dependances (uvicorn, httpx) sont
rediriges vers loguru pour n'avoir qu'un seul flux.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> <level>{level: <8}</level> {message}"
DEBUG_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

BRIDGED_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "httpx")


class _LoguruBridge(logging.Handler):
    """Transmet un enregistrement du module logging a loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def console_format(log_level: str) -> str:
    """Format console : detaille en DEBUG, compact sinon."""
    return DEBUG_CONSOLE_FORMAT if log_level.upper() == "DEBUG" else CONSOLE_FORMAT


def configure_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = Path("logs/reelsort.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """
    Remplace les sinks loguru par ceux de l'application.

    Args:
        log_level: Niveau minimum de la console (DEBUG, INFO, WARNING, ERROR)
        log_file: Fichier JSON recevant tout a partir de DEBUG, None pour aucun
        rotation_size: Taille declenchant la rotation ("10 MB", "1 GB")
        retention_count: Nombre de fichiers tournes conserves
    """
    logger.remove()
    logger.add(sys.stderr, level=log_level.upper(), format=console_format(log_level), colorize=True)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level="DEBUG",
            serialize=True,
            rotation=rotation_size,
            retention=retention_count,
            compression="zip",
        )

    bridge = _LoguruBridge()
    for name in BRIDGED_LOGGERS:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [bridge]
        std_logger.propagate = False

    logger.debug(f"Logging configure (console={log_level}, fichier={log_file})")
