"""
Eventos de entrada del bot.

Cada actualización de Telegram se clasifica en exactamente una de estas
variantes mediante `classify_update`; el router despacha por tipo.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple, Union, get_args

from app.core.security import is_admin
from app.models.button import ButtonNode, ButtonTree
from app.models.update import Update
from app.services.tree import find_by_id, find_by_text
from app.shared.telegram import BACK_CAPTION, KeyboardProjector

MENU_COMMANDS = ("/start", "/refresh", "/menu")
DATA_COMMANDS = ("/save", "/get", "/update", "/delete")
BROADCAST_COMMAND = "/broadcast"


@dataclass(frozen=True)
class CallbackSelection:
    """El usuario pulsó un botón inline que referencia un id del árbol."""
    chat_id: int
    callback_id: str
    node: ButtonNode


@dataclass(frozen=True)
class UnmatchedCallback:
    """Callback que no corresponde a ningún nodo (o sin chat de origen)."""
    callback_id: str


@dataclass(frozen=True)
class TextSelection:
    """El usuario escribió (o pulsó en el teclado) el texto de un nodo."""
    chat_id: int
    node: ButtonNode


@dataclass(frozen=True)
class BackNavigation:
    chat_id: int


@dataclass(frozen=True)
class MenuCommand:
    chat_id: int
    command: str    # "/start", "/refresh" o "/menu"


@dataclass(frozen=True)
class DataCommand:
    chat_id: int
    command: str    # "/save", "/get", "/update" o "/delete"
    argument: str = ""


@dataclass(frozen=True)
class BroadcastCommand:
    chat_id: int
    text: str


@dataclass(frozen=True)
class UnknownCommand:
    chat_id: int
    text: str


@dataclass(frozen=True)
class Ignored:
    """Actualización sin texto ni callback (fotos, ediciones, etc.)."""
    reason: str


InboundEvent = Union[
    CallbackSelection, UnmatchedCallback, TextSelection, BackNavigation,
    MenuCommand, DataCommand, BroadcastCommand, UnknownCommand, Ignored
]

EVENT_TYPES = get_args(InboundEvent)


def split_command(text: str) -> Tuple[str, str]:
    """Separa "/cmd@Bot argumento" en ("/cmd", "argumento")."""
    parts = text.split(maxsplit=1)
    command = parts[0].split("@", 1)[0] if parts else ""
    argument = parts[1].strip() if len(parts) > 1 else ""
    return command, argument


def command_addressee(text: str) -> str:
    """Bot mencionado en "/cmd@Bot" (cadena vacía si el comando no menciona ninguno)."""
    parts = text.split(maxsplit=1)
    if not parts or not parts[0].startswith("/") or "@" not in parts[0]:
        return ""
    return parts[0].split("@", 1)[1]


def _classify_callback(update: Update, tree: ButtonTree) -> InboundEvent:
    callback = update.callback_query
    node: Optional[ButtonNode] = find_by_id(tree, callback.data) if callback.data else None
    if node is None or callback.message is None:
        return UnmatchedCallback(callback_id=callback.id)
    return CallbackSelection(chat_id=callback.message.chat.id, callback_id=callback.id, node=node)


def _classify_text(
    chat_id: int, text: str, tree: ButtonTree, admin_ids: Iterable[int], bot_username: str
) -> InboundEvent:
    node = find_by_text(tree, KeyboardProjector.strip_decoration(text))
    if node is not None:
        return TextSelection(chat_id=chat_id, node=node)

    if text == BACK_CAPTION:
        return BackNavigation(chat_id=chat_id)

    # En grupos, los comandos dirigidos a otro bot no son para nosotros
    addressee = command_addressee(text)
    if addressee and bot_username and addressee.lower() != bot_username.lstrip("@").lower():
        return Ignored(reason="other_bot")

    command, argument = split_command(text)

    if command.lower() in MENU_COMMANDS:
        return MenuCommand(chat_id=chat_id, command=command.lower())

    if command in DATA_COMMANDS:
        return DataCommand(chat_id=chat_id, command=command, argument=argument)

    # Sin permisos la difusión cae como comando desconocido
    if command == BROADCAST_COMMAND and argument and is_admin(chat_id, admin_ids):
        return BroadcastCommand(chat_id=chat_id, text=argument)

    return UnknownCommand(chat_id=chat_id, text=text)


def classify_update(
    update: Update, tree: ButtonTree, admin_ids: Iterable[int] = (), bot_username: str = ""
) -> InboundEvent:
    """
    Clasifica una actualización en una única variante de evento.

    Orden de prioridad: selección de nodo (callback o texto), regreso,
    comandos de menú, comandos de datos, difusión y comando desconocido.
    Con `bot_username` configurado, los comandos "/cmd@OtroBot" se ignoran.
    """
    if update.callback_query is not None:
        return _classify_callback(update, tree)

    message = update.message
    if message is None or not message.text:
        return Ignored(reason="no_text")

    text = message.text.strip()
    if not text:
        return Ignored(reason="empty_text")

    return _classify_text(message.chat.id, text, tree, admin_ids, bot_username)
