import logging
from typing import Optional

from app.models.button import ButtonNode, ButtonPatch, ButtonTree
from app.schemas.button_schema import ButtonCreate, ButtonUpdate
from app.services.broadcast import BroadcastService
from app.services.storage import TreeStore
from app.services import tree as engine
from app.shared.telegram import convert_to_html

logger = logging.getLogger(__name__)


class ButtonService:
    """
    Operaciones administrativas sobre el árbol de botones.
    Responsabilidad única: cargar, mutar, persistir y resincronizar.

    Limitaciones conocidas:
    - Editar y borrar solo aplica a botones de primer nivel.
    - Sin bloqueo optimista: dos ediciones concurrentes se resuelven
      con "último en escribir gana".
    """

    def __init__(self, tree_store: TreeStore, broadcaster: BroadcastService):
        self.tree_store = tree_store
        self.broadcaster = broadcaster

    async def list_buttons(self) -> ButtonTree:
        return await self.tree_store.load_tree()

    async def get_button(self, button_id: str) -> Optional[ButtonNode]:
        """Busca un botón por id en cualquier nivel."""
        tree = await self.tree_store.load_tree()
        return engine.find_by_id(tree, button_id)

    async def create_button(self, data: ButtonCreate) -> ButtonNode:
        """
        Crea un botón de primer nivel o hijo de `parent_id`.

        Si el padre no existe el árbol queda igual (no-op) y solo se registra
        una advertencia; igualmente se persiste y resincroniza.
        """
        tree = await self.tree_store.load_tree()
        node = ButtonNode(
            id=engine.new_button_id(tree),
            text=data.text,
            response=convert_to_html(data.response),
        )

        if data.parent_id and engine.find_by_id(tree, data.parent_id) is None:
            logger.warning(f"[ADMIN] Padre {data.parent_id} no existe, el botón {node.id} no se agregó")

        tree = engine.insert(tree, node, data.parent_id)
        await self._persist_and_resync(tree)
        logger.info(f"[ADMIN] Botón {node.id} creado (padre: {data.parent_id or 'raíz'})")
        return node

    async def update_button(self, button_id: str, data: ButtonUpdate) -> None:
        tree = await self.tree_store.load_tree()
        patch = ButtonPatch(text=data.text, response=convert_to_html(data.response))
        tree = engine.update_by_id(tree, button_id, patch)
        await self._persist_and_resync(tree)
        logger.info(f"[ADMIN] Botón {button_id} actualizado")

    async def delete_button(self, button_id: str) -> None:
        tree = await self.tree_store.load_tree()
        tree = engine.delete_by_id(tree, button_id)
        await self._persist_and_resync(tree)
        logger.info(f"[ADMIN] Botón {button_id} eliminado")

    async def _persist_and_resync(self, tree: ButtonTree) -> None:
        await self.tree_store.save_tree(tree)
        await self.broadcaster.resync_all(tree)
