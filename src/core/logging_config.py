"""
Configuración de logging
Prepara los loggers de los paquetes de Orbimol.
"""
import logging
import sys
from typing import Optional

# Paquetes de primer nivel que registran con `logging.getLogger(__name__)`.
PACKAGE_LOGGERS = ("core", "scene", "gui", "chemio")


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configura los loggers de los paquetes de la aplicación.

    Args:
        level: Nivel de logging (p. ej., logging.DEBUG, logging.INFO)
        log_file: Ruta opcional donde guardar también el log.
    """
    # Formato: Hora - Módulo - Nivel - Mensaje
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    handlers = []
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    for name in PACKAGE_LOGGERS:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        # Evita mensajes duplicados si se reconfigura.
        if logger.hasHandlers():
            logger.handlers.clear()
        for handler in handlers:
            logger.addHandler(handler)
        logger.propagate = False

    logging.getLogger("core").info("Logging inicializado.")
