from functools import lru_cache
from fastapi import Depends, Header, HTTPException, status

from app.core.config import Settings, get_settings
from app.services.broadcast import BroadcastService
from app.services.button_service import ButtonService
from app.services.conversation import ConversationRouter
from app.services.menu_renderer import MenuRenderer
from app.services.storage import KeyValueStore, TreeStore, create_store
from app.services.telegram import TelegramClient

# Instancias globales compartidas entre requests (sin estado del árbol)

@lru_cache
def get_kv_store() -> KeyValueStore:
    return create_store(get_settings())

@lru_cache
def get_tree_store() -> TreeStore:
    return TreeStore(get_kv_store())

@lru_cache
def get_messenger() -> TelegramClient:
    return TelegramClient(get_settings())

@lru_cache
def get_broadcaster() -> BroadcastService:
    settings = get_settings()
    messenger = get_messenger()
    return BroadcastService(get_tree_store(), messenger, MenuRenderer(messenger, settings.KEYBOARD_GROUP_SIZE))

@lru_cache
def get_conversation_router() -> ConversationRouter:
    return ConversationRouter(get_tree_store(), get_messenger(), get_broadcaster(), get_settings())

@lru_cache
def get_button_service() -> ButtonService:
    return ButtonService(get_tree_store(), get_broadcaster())


def require_admin_token(
    x_api_token: str = Header("", alias="x-api-token"),
    settings: Settings = Depends(get_settings),
) -> None:
    """Si ADMIN_API_TOKEN está configurado, exige el header x-api-token."""
    if settings.ADMIN_API_TOKEN and x_api_token != settings.ADMIN_API_TOKEN:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API token")
