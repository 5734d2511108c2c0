from functools import lru_cache
from pathlib import Path
from typing import List, Tuple
from dotenv import load_dotenv
import logging
import os

load_dotenv(Path(__file__).resolve().parents[2] / ".env")

logger = logging.getLogger(__name__)

DEFAULT_KEYBOARD_GROUP_SIZE = 2


def positive_int(raw: str, default: int, name: str) -> int:
    """Convierte una variable de entorno a entero positivo; si no lo es, usa `default`."""
    try:
        value = int(raw)
    except (TypeError, ValueError):
        value = 0
    if value < 1:
        logger.warning(f"[CONFIG] {name}={raw!r} no es un entero positivo, se usa {default}")
        return default
    return value


@lru_cache
def parse_admin_ids(raw: str) -> Tuple[int, ...]:
    """
    Interpreta ADMIN_IDS (lista separada por comas).
    Las entradas que no son enteros se descartan con una advertencia.
    """
    admin_ids = []
    for entry in raw.split(","):
        entry = entry.strip()
        if not entry:
            continue
        try:
            admin_ids.append(int(entry))
        except ValueError:
            logger.warning(f"[CONFIG] ADMIN_IDS contiene una entrada inválida: {entry!r}")
    return tuple(admin_ids)


class Settings:
    # Telegram Bot API settings
    TELEGRAM_BOT_TOKEN: str = os.getenv("TELEGRAM_BOT_TOKEN", "")
    TELEGRAM_BOT_USERNAME: str = os.getenv("TELEGRAM_BOT_USERNAME", "")
    TELEGRAM_API_URL: str = os.getenv("TELEGRAM_API_URL", "https://api.telegram.org")
    TELEGRAM_WEBHOOK_SECRET: str = os.getenv("TELEGRAM_WEBHOOK_SECRET", "")

    # Administración
    ADMIN_IDS: str = os.getenv("ADMIN_IDS", "")
    ADMIN_API_TOKEN: str = os.getenv("ADMIN_API_TOKEN", "")

    # Almacenamiento clave-valor ("memory" o "cloudflare")
    STORE_BACKEND: str = os.getenv("STORE_BACKEND", "memory")
    CF_API_URL: str = os.getenv("CF_API_URL", "https://api.cloudflare.com/client/v4")
    CF_ACCOUNT_ID: str = os.getenv("CF_ACCOUNT_ID", "")
    CF_KV_NAMESPACE_ID: str = os.getenv("CF_KV_NAMESPACE_ID", "")
    CF_API_TOKEN: str = os.getenv("CF_API_TOKEN", "")

    # Teclados
    KEYBOARD_GROUP_SIZE: int = positive_int(
        os.getenv("KEYBOARD_GROUP_SIZE", str(DEFAULT_KEYBOARD_GROUP_SIZE)),
        DEFAULT_KEYBOARD_GROUP_SIZE,
        "KEYBOARD_GROUP_SIZE"
    )

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "DEBUG")
    LOG_FILE: str = os.getenv("LOG_FILE", "logs/bot.log")   # relativo a la raíz del proyecto

    @property
    def admin_ids(self) -> List[int]:
        """Lista de chat ids administradores a partir de ADMIN_IDS."""
        return list(parse_admin_ids(self.ADMIN_IDS))

@lru_cache
def get_settings() -> Settings:
    return Settings()
