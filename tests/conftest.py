"""
Fixtures compartidas: almacenamiento en memoria, cliente de Telegram simulado
y configuración aislada, para que las pruebas no hagan llamadas externas.
"""

import json
import pytest
from unittest.mock import AsyncMock

from app.core.config import Settings
from app.services.storage import MemoryKeyValueStore, TreeStore
from app.services.telegram import TelegramClient

ADMIN_ID = 42


# ── Árbol de ejemplo ─────────────────────────────────────────
SAMPLE_TREE = [
    {"id": "1", "text": "Hours", "response": "9-5", "subButtons": []},
    {
        "id": "2",
        "text": "Support",
        "response": "How can we help?",
        "subButtons": [
            {"id": "3", "text": "Phone", "response": "+1 555 0100", "subButtons": []},
            {
                "id": "4",
                "text": "Email",
                "response": "help@example.com",
                "subButtons": [
                    {"id": "5", "text": "Billing", "response": "billing@example.com"},
                ],
            },
        ],
    },
]


@pytest.fixture
def settings():
    """Configuración aislada del entorno."""
    s = Settings()
    s.TELEGRAM_BOT_TOKEN = "test-token"
    s.TELEGRAM_API_URL = "https://tg.test"
    s.TELEGRAM_WEBHOOK_SECRET = ""
    s.ADMIN_IDS = str(ADMIN_ID)
    s.ADMIN_API_TOKEN = ""
    s.KEYBOARD_GROUP_SIZE = 2
    return s


@pytest.fixture
def kv():
    return MemoryKeyValueStore({"buttons": json.dumps(SAMPLE_TREE)})


@pytest.fixture
def empty_kv():
    return MemoryKeyValueStore()


@pytest.fixture
def tree_store(kv):
    return TreeStore(kv)


@pytest.fixture
def messenger():
    """TelegramClient simulado; todos sus métodos son AsyncMock."""
    return AsyncMock(spec=TelegramClient)


def sent_texts(messenger):
    """Textos enviados con send_message, en orden."""
    return [c.args[1] for c in messenger.send_message.await_args_list]


def sent_keyboards(messenger):
    """Filas de teclado enviadas (None si el mensaje no llevaba teclado)."""
    result = []
    for c in messenger.send_message.await_args_list:
        markup = c.kwargs.get("reply_markup")
        result.append(markup["keyboard"] if markup else None)
    return result
