import logging
from typing import Awaitable, Callable, Dict, Optional, Union

from app.core.config import Settings, get_settings
from app.models.button import ButtonNode, ButtonTree
from app.models.update import Update
from app.services.broadcast import BroadcastService
from app.services.menu_renderer import MenuRenderer
from app.services.storage import TreeStore
from app.services.telegram import TelegramClient
from app.services.conversation.events import (
    InboundEvent, CallbackSelection, UnmatchedCallback, TextSelection,
    BackNavigation, MenuCommand, DataCommand, BroadcastCommand,
    UnknownCommand, Ignored, classify_update
)

logger = logging.getLogger(__name__)

CALLBACK_ACK_TEXT = "Success!"


class ConversationRouter:
    """
    Responsabilidad única: decidir qué presentar para cada actualización entrante.

    No hay sesión: el submenú actual se reconstruye en cada request a partir
    del nodo seleccionado. El router nunca persiste el árbol.
    """

    def __init__(
        self,
        tree_store: TreeStore,
        messenger: TelegramClient,
        broadcaster: Optional[BroadcastService] = None,
        settings: Optional[Settings] = None
    ):
        self.settings = settings or get_settings()
        self.tree_store = tree_store
        self.messenger = messenger
        self.renderer = MenuRenderer(messenger, self.settings.KEYBOARD_GROUP_SIZE)
        self.broadcaster = broadcaster or BroadcastService(tree_store, messenger, self.renderer)

        self.handlers: Dict[type, Callable[..., Awaitable[None]]] = {
            CallbackSelection: self._on_callback_selection,
            UnmatchedCallback: self._on_unmatched_callback,
            TextSelection: self._on_text_selection,
            BackNavigation: self._on_back,
            MenuCommand: self._on_menu_command,
            DataCommand: self._on_data_command,
            BroadcastCommand: self._on_broadcast,
            UnknownCommand: self._on_unknown,
            Ignored: self._on_ignored,
        }

    async def handle_update(self, update: Update) -> InboundEvent:
        """
        Punto de entrada del webhook.

        Returns:
            InboundEvent: Evento clasificado y ya atendido
        """
        logger.debug(f"[ROUTER] Update recibido: {update.update_id}")

        needs_tree = update.callback_query is not None or (update.message is not None and bool(update.message.text))
        tree = await self.tree_store.load_tree() if needs_tree else []

        event = classify_update(update, tree, self.settings.admin_ids, self.settings.TELEGRAM_BOT_USERNAME)
        logger.info(f"[ROUTER] Update {update.update_id} clasificado como {type(event).__name__}")

        await self.handlers[type(event)](event, tree)
        return event

    # ==================== SELECCIÓN DE NODOS ====================

    async def _present_node(self, chat_id: Union[int, str], node: ButtonNode, caption: str) -> None:
        if node.has_children:
            await self.renderer.send_submenu(chat_id, node, caption)
        await self.messenger.send_message(chat_id, node.response, parse_mode="HTML")

    async def _on_callback_selection(self, event: CallbackSelection, tree: ButtonTree) -> None:
        try:
            await self._present_node(event.chat_id, event.node, f"{event.node.text} options:")
        finally:
            await self.messenger.answer_callback_query(event.callback_id, CALLBACK_ACK_TEXT)

    async def _on_unmatched_callback(self, event: UnmatchedCallback, tree: ButtonTree) -> None:
        logger.debug(f"[ROUTER] Callback {event.callback_id} sin botón asociado")
        await self.messenger.answer_callback_query(event.callback_id)

    async def _on_text_selection(self, event: TextSelection, tree: ButtonTree) -> None:
        await self._present_node(event.chat_id, event.node, f"{event.node.text}:")

    # ==================== NAVEGACIÓN ====================

    async def _on_back(self, event: BackNavigation, tree: ButtonTree) -> None:
        await self.renderer.send_top_menu(event.chat_id, tree, show_banner=True)

    async def _on_menu_command(self, event: MenuCommand, tree: ButtonTree) -> None:
        await self.renderer.send_top_menu(event.chat_id, tree)
        if event.command == "/start":
            await self.tree_store.mark_started(event.chat_id)
            logger.info(f"[ROUTER] Usuario {event.chat_id} marcado como activo")

    # ==================== DATOS POR USUARIO ====================

    async def _on_data_command(self, event: DataCommand, tree: ButtonTree) -> None:
        chat_id = event.chat_id
        if event.command == "/save":
            await self.tree_store.put_user_data(chat_id, event.argument)
            reply = "Data saved."
        elif event.command == "/update":
            await self.tree_store.put_user_data(chat_id, event.argument)
            reply = "Data updated."
        elif event.command == "/delete":
            await self.tree_store.delete_user_data(chat_id)
            reply = "Data deleted."
        else:
            data = await self.tree_store.get_user_data(chat_id)
            reply = f"Saved Data: {data}" if data is not None else "No saved data."
        await self.messenger.send_message(chat_id, reply)

    # ==================== ADMINISTRACIÓN ====================

    async def _on_broadcast(self, event: BroadcastCommand, tree: ButtonTree) -> None:
        result = await self.broadcaster.broadcast(event.text)
        logger.info(f"[ROUTER] Difusión de {event.chat_id}: {result.sent} enviados, {len(result.failed)} fallidos")
        await self.messenger.send_message(event.chat_id, "Broadcast sent!")

    async def _on_unknown(self, event: UnknownCommand, tree: ButtonTree) -> None:
        await self.messenger.send_message(event.chat_id, f"Unknown command: {event.text}")

    async def _on_ignored(self, event: Ignored, tree: ButtonTree) -> None:
        logger.debug(f"[ROUTER] Update ignorado: {event.reason}")
