#!/usr/bin/env python3
"""
Script para registrar la URL del webhook en Telegram.

Uso:
    python scripts/set_webhook.py https://mi-dominio.com/webhook
"""

import asyncio
import logging
import sys
from pathlib import Path

# Agregar path del proyecto
sys.path.append(str(Path(__file__).parent.parent))

# Configurar logging
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

async def set_webhook(url: str) -> bool:
    """Registra el webhook usando TELEGRAM_BOT_TOKEN y TELEGRAM_WEBHOOK_SECRET del .env."""
    from app.core.config import get_settings
    from app.services.telegram import TelegramClient, TelegramAPIError

    settings = get_settings()
    if not settings.TELEGRAM_BOT_TOKEN:
        print("❌ TELEGRAM_BOT_TOKEN no está configurado")
        return False

    try:
        await TelegramClient(settings).set_webhook(url, settings.TELEGRAM_WEBHOOK_SECRET or None)
    except TelegramAPIError as e:
        print(f"❌ Telegram rechazó el webhook: {e}")
        return False

    print(f"✅ Webhook registrado en {url}")
    return True

if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(1)
    success = asyncio.run(set_webhook(sys.argv[1]))
    sys.exit(0 if success else 1)
