"""
Módulo para generar componentes de Telegram.
Automatiza la creación de teclados de respuesta y el formato de mensajes.
"""

from .keyboard import KeyboardProjector, BACK_CAPTION, FOLDER_SUFFIX, chunks
from .formatting import convert_to_html

__all__ = [
    'KeyboardProjector',
    'BACK_CAPTION',
    'FOLDER_SUFFIX',
    'chunks',
    'convert_to_html'
]
