"""Punto de entrada del visor molecular Orbimol.

Este módulo interpreta la línea de comandos, configura el logging, crea la
ventana principal y arranca el bucle de eventos de PyQt6.
"""

import argparse
import logging
import sys
import os

# Aseguramos que Python encuentre los módulos dentro de `src` al ejecutar
# el archivo directamente.
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from PyQt6.QtWidgets import QApplication

from core.logging_config import setup_logging
from gui.main_window import DEFAULT_NOTATION, OrbimolWindow


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="orbimol", description="Visor molecular 3D Orbimol")
    parser.add_argument(
        "notation",
        nargs="?",
        default=DEFAULT_NOTATION,
        help="notación tipo SMILES a mostrar al iniciar",
    )
    parser.add_argument("--debug", action="store_true", help="activa el nivel DEBUG de logging")
    parser.add_argument("--log-file", metavar="PATH", default=None, help="escribe el log también en un archivo")
    return parser


def main(argv=None):
    """
    Arranca la aplicación Qt y muestra la ventana principal.

    Args:
        argv: Argumentos de línea de comandos sin el nombre del programa.
            Si es None se usa `sys.argv[1:]`.

    Side Effects:
        Configura el logging, crea la instancia de `QApplication`, muestra la
        ventana y entra en el bucle de eventos de Qt.
    """
    args = build_parser().parse_args(sys.argv[1:] if argv is None else argv)
    setup_logging(logging.DEBUG if args.debug else logging.INFO, log_file=args.log_file)

    app = QApplication(sys.argv[:1])
    app.setApplicationName("Orbimol")

    window = OrbimolWindow(args.notation)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
