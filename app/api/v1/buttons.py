from contextlib import contextmanager
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from app.api.deps import get_button_service, require_admin_token
from app.core.config import Settings, get_settings
from app.core.security import is_admin
from app.models.button import ButtonNode
from app.schemas.button_schema import AuthRequest, ButtonCreate, ButtonUpdate
from app.services.button_service import ButtonService
from app.services.storage import KVStoreError
from app.services.telegram import TelegramAPIError
import logging
from typing import Dict, List

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

# ============================================================================
# AUTENTICACIÓN
# ============================================================================

@router.post("/auth")
async def authenticate(body: AuthRequest, settings: Settings = Depends(get_settings)):
    """Valida si un chat id pertenece a la lista de administradores."""
    success = is_admin(body.chat_id, settings.admin_ids)
    return JSONResponse(
        content={"success": success},
        status_code=status.HTTP_200_OK if success else status.HTTP_403_FORBIDDEN
    )

# ============================================================================
# GESTIÓN DE BOTONES
# ============================================================================

@router.get("/buttons", response_model=List[ButtonNode], dependencies=[Depends(require_admin_token)])
async def list_buttons(service: ButtonService = Depends(get_button_service)):
    """Retorna el árbol completo de botones."""
    with _upstream_errors():
        return await service.list_buttons()


@router.post("/buttons", response_model=ButtonNode, dependencies=[Depends(require_admin_token)])
async def create_button(body: ButtonCreate, service: ButtonService = Depends(get_button_service)):
    """Crea un botón (de primer nivel o hijo de parentId) y resincroniza teclados."""
    with _upstream_errors():
        return await service.create_button(body)


@router.get("/buttons/{button_id}", response_model=ButtonNode, dependencies=[Depends(require_admin_token)])
async def get_button(button_id: str, service: ButtonService = Depends(get_button_service)):
    with _upstream_errors():
        button = await service.get_button(button_id)
    if not button:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
    return button


@router.put("/buttons/{button_id}", dependencies=[Depends(require_admin_token)])
async def update_button(button_id: str, body: ButtonUpdate, service: ButtonService = Depends(get_button_service)) -> Dict[str, bool]:
    """Edita texto y respuesta de un botón de primer nivel y resincroniza teclados."""
    with _upstream_errors():
        await service.update_button(button_id, body)
    return {"success": True}


@router.delete("/buttons/{button_id}", dependencies=[Depends(require_admin_token)])
async def delete_button(button_id: str, service: ButtonService = Depends(get_button_service)) -> Dict[str, bool]:
    """Elimina un botón de primer nivel y resincroniza teclados."""
    with _upstream_errors():
        await service.delete_button(button_id)
    return {"success": True}

# ============================================================================
# FUNCIONES PRIVADAS
# ============================================================================

@contextmanager
def _upstream_errors():
    """Traduce fallos del almacenamiento o de Telegram a 502, igual que el webhook."""
    try:
        yield
    except TelegramAPIError as exc:
        logger.error(f"[ADMIN] Error enviando mensaje a Telegram: {exc}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Telegram API rejected the message"
        ) from exc
    except KVStoreError as exc:
        logger.error(f"[ADMIN] Error accediendo al almacenamiento: {exc}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Key-value store unavailable"
        ) from exc
