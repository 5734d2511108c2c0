"""
Módulo de componentes compartidos para el bot de Telegram.
Contiene helpers reutilizables para diferentes partes de la aplicación.
"""

from .telegram import (
    KeyboardProjector,
    BACK_CAPTION,
    convert_to_html
)

__all__ = [
    'KeyboardProjector',
    'BACK_CAPTION',
    'convert_to_html'
]
