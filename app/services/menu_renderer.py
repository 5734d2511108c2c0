import logging
from typing import Union

from app.models.button import ButtonNode, ButtonTree
from app.services.telegram import TelegramClient
from app.shared.telegram import KeyboardProjector
from app.shared.telegram.keyboard import DEFAULT_GROUP_SIZE

logger = logging.getLogger(__name__)

MENU_BANNER = "Menu"
MENU_REFRESH_TEXT = "Choose an option:"


class MenuRenderer:
    """
    Responsabilidad única: enviar teclados del árbol a un chat.
    """

    def __init__(self, messenger: TelegramClient, group_size: int = DEFAULT_GROUP_SIZE):
        self.messenger = messenger
        self.group_size = group_size

    async def send_top_menu(self, chat_id: Union[int, str], tree: ButtonTree, show_banner: bool = False) -> bool:
        """
        Envía el teclado de primer nivel. Con un árbol vacío no envía nada.

        Returns:
            bool: True si se envió un teclado
        """
        if not tree:
            logger.debug(f"[MENU] Árbol vacío, no se envía teclado a {chat_id}")
            return False

        rows = KeyboardProjector.project(tree, self.group_size, include_back=False)
        await self.messenger.send_message(
            chat_id,
            MENU_BANNER if show_banner else MENU_REFRESH_TEXT,
            reply_markup=KeyboardProjector.reply_markup(rows)
        )
        return True

    async def send_submenu(self, chat_id: Union[int, str], node: ButtonNode, caption: str) -> None:
        """Envía el teclado con los hijos del nodo, precedido por el botón de regreso."""
        rows = KeyboardProjector.project(node.sub_buttons, self.group_size, include_back=True)
        await self.messenger.send_message(
            chat_id,
            caption,
            reply_markup=KeyboardProjector.reply_markup(rows)
        )
