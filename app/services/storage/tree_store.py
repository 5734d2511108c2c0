import logging
from typing import List, Optional, Union
from app.models.button import ButtonTree, dump_tree, parse_tree
from .base_store import KeyValueStore

logger = logging.getLogger(__name__)

TREE_KEY = "buttons"
USER_PREFIX = "user_"
STARTED_SUFFIX = "_started"

ChatId = Union[int, str]


def user_key(chat_id: ChatId) -> str:
    return f"{USER_PREFIX}{chat_id}"


def started_key(chat_id: ChatId) -> str:
    return f"{USER_PREFIX}{chat_id}{STARTED_SUFFIX}"


class TreeStore:
    """
    Adaptador sobre el almacenamiento clave-valor.
    Responsabilidad única: persistir el árbol completo y los registros por usuario.
    """

    def __init__(self, kv: KeyValueStore):
        self.kv = kv

    # ==================== ÁRBOL DE BOTONES ====================

    async def load_tree(self) -> ButtonTree:
        """Carga el árbol completo. Un árbol inexistente es una lista vacía."""
        raw = await self.kv.get_json(TREE_KEY)
        tree = parse_tree(raw)
        logger.debug(f"[TREE] Árbol cargado con {len(tree)} botones de primer nivel")
        return tree

    async def save_tree(self, tree: ButtonTree) -> None:
        """Sobrescribe el documento completo del árbol."""
        await self.kv.put_json(TREE_KEY, dump_tree(tree))
        logger.debug(f"[TREE] Árbol guardado con {len(tree)} botones de primer nivel")

    # ==================== DATOS POR USUARIO ====================

    async def get_user_data(self, chat_id: ChatId) -> Optional[str]:
        return await self.kv.get(user_key(chat_id))

    async def put_user_data(self, chat_id: ChatId, value: str) -> None:
        await self.kv.put(user_key(chat_id), value)

    async def delete_user_data(self, chat_id: ChatId) -> None:
        await self.kv.delete(user_key(chat_id))

    # ==================== USUARIOS ACTIVOS ====================

    async def mark_started(self, chat_id: ChatId) -> None:
        await self.kv.put(started_key(chat_id), "true")

    async def list_started_chat_ids(self) -> List[str]:
        """Chat ids de los usuarios que enviaron /start."""
        keys = await self.kv.list_keys(USER_PREFIX)
        return [
            key[len(USER_PREFIX):-len(STARTED_SUFFIX)]
            for key in keys
            if key.endswith(STARTED_SUFFIX)
        ]
