from fastapi import APIRouter, Depends, Header, HTTPException, status
from app.api.deps import get_conversation_router
from app.core.config import Settings, get_settings
from app.models.update import Update
from app.services.conversation import ConversationRouter
from app.services.storage import KVStoreError
from app.services.telegram import TelegramAPIError
import logging
from typing import Dict, Any

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhook")

# ============================================================================
# ENDPOINTS PRINCIPALES
# ============================================================================

@router.post("")
async def receive_update(
    update: Update,
    x_telegram_bot_api_secret_token: str = Header("", alias="X-Telegram-Bot-Api-Secret-Token"),
    settings: Settings = Depends(get_settings),
    conversation_router: ConversationRouter = Depends(get_conversation_router),
) -> Dict[str, Any]:
    """
    Endpoint principal para recibir actualizaciones de Telegram.
    Responsabilidad: Orquestación y manejo de errores.
    """
    _verify_secret(x_telegram_bot_api_secret_token, settings)

    try:
        event = await conversation_router.handle_update(update)
        return {"status": "processed", "event": type(event).__name__}

    except TelegramAPIError as exc:
        logger.error(f"Error enviando mensaje a Telegram: {exc}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Telegram API rejected the message"
        ) from exc
    except KVStoreError as exc:
        logger.error(f"Error accediendo al almacenamiento: {exc}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Key-value store unavailable"
        ) from exc
    except Exception as e:
        logger.error(f"Error procesando webhook: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error interno del servidor"
        )

# ============================================================================
# FUNCIONES PRIVADAS
# ============================================================================

def _verify_secret(received: str, settings: Settings) -> None:
    """Valida el secret_token registrado con setWebhook (si está configurado)."""
    if settings.TELEGRAM_WEBHOOK_SECRET and received != settings.TELEGRAM_WEBHOOK_SECRET:
        logger.warning("[WEBHOOK] Secret token inválido")
        raise HTTPException(status_code=403, detail="Verification failed")
