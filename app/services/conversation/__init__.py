"""
Módulo de gestión de conversaciones para el bot de Telegram.

"""

# Importación principal usada por el webhook
from .router import ConversationRouter

# Componentes internos (para testing o uso avanzado)
from .events import InboundEvent, EVENT_TYPES, classify_update

__all__ = [
    # Clase principal - usada por webhook
    "ConversationRouter",

    # Componentes internos - para testing/debugging
    "InboundEvent",
    "EVENT_TYPES",
    "classify_update"
]
