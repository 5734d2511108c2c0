import logging
from dataclasses import dataclass, field
from typing import List, Optional

from app.models.button import ButtonTree
from app.services.menu_renderer import MenuRenderer
from app.services.storage import KVStoreError, TreeStore
from app.services.telegram import TelegramClient

logger = logging.getLogger(__name__)


@dataclass
class BroadcastResult:
    """Resultado de un recorrido sobre los usuarios activos."""
    sent: int = 0
    failed: List[str] = field(default_factory=list)


class BroadcastService:
    """
    Responsabilidad única: recorrer los usuarios activos y enviarles
    el teclado actualizado o un texto de difusión.

    Cada envío es independiente: un fallo se registra y el recorrido continúa.
    """

    def __init__(self, tree_store: TreeStore, messenger: TelegramClient, renderer: MenuRenderer):
        self.tree_store = tree_store
        self.messenger = messenger
        self.renderer = renderer

    async def list_active_users(self) -> List[str]:
        return await self.tree_store.list_started_chat_ids()

    async def resync_all(self, tree: Optional[ButtonTree] = None) -> BroadcastResult:
        """
        Reenvía el teclado de primer nivel a todos los usuarios activos.

        Si no se puede listar a los usuarios se registra el error y no se envía nada:
        el árbol ya quedó guardado y el recorrido es de mejor esfuerzo.
        """
        if tree is None:
            tree = await self.tree_store.load_tree()

        result = BroadcastResult()
        try:
            chat_ids = await self.list_active_users()
        except KVStoreError as e:
            logger.error(f"[SYNC] No se pudo listar usuarios activos: {e}")
            return result

        for chat_id in chat_ids:
            try:
                if await self.renderer.send_top_menu(chat_id, tree):
                    result.sent += 1
            except Exception as e:
                logger.error(f"[SYNC] Error actualizando teclado de {chat_id}: {e}")
                result.failed.append(chat_id)

        logger.info(f"[SYNC] Teclados actualizados: {result.sent}, fallidos: {len(result.failed)}")
        return result

    async def broadcast(self, text: str) -> BroadcastResult:
        """Envía un texto a todos los usuarios activos."""
        result = BroadcastResult()
        for chat_id in await self.list_active_users():
            try:
                await self.messenger.send_message(chat_id, text)
                result.sent += 1
            except Exception as e:
                logger.error(f"[SYNC] Error enviando difusión a {chat_id}: {e}")
                result.failed.append(chat_id)

        logger.info(f"[SYNC] Difusión enviada: {result.sent}, fallidos: {len(result.failed)}")
        return result
