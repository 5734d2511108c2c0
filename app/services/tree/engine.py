"""
Motor del árbol de botones.

Todas las operaciones son puras: reciben el árbol cargado, devuelven un árbol
nuevo (o el nodo encontrado) y nunca tocan el almacenamiento. Quien llama es
responsable de persistir el resultado.
"""

import time
from typing import Iterator, Optional

from app.models.button import ButtonNode, ButtonPatch, ButtonTree


def iter_nodes(tree: ButtonTree) -> Iterator[ButtonNode]:
    """Recorre el árbol en profundidad: primero el nodo, luego sus hijos en orden."""
    for node in tree:
        yield node
        yield from iter_nodes(node.sub_buttons)


def find_by_id(tree: ButtonTree, button_id: str) -> Optional[ButtonNode]:
    """Busca un nodo por id en cualquier nivel. Retorna None si no existe."""
    for node in tree:
        if node.id == button_id:
            return node
        found = find_by_id(node.sub_buttons, button_id)
        if found:
            return found
    return None


def find_by_text(tree: ButtonTree, text: str) -> Optional[ButtonNode]:
    """Busca un nodo por texto (sin distinguir mayúsculas) en cualquier nivel."""
    needle = text.lower()
    for node in tree:
        if node.text.lower() == needle:
            return node
        found = find_by_text(node.sub_buttons, text)
        if found:
            return found
    return None


def new_button_id(tree: ButtonTree, now_ms: Optional[int] = None) -> str:
    """
    Genera un id derivado del reloj (milisegundos) que no exista en el árbol.

    Si el reloj no avanzó desde el último id numérico asignado, se usa el
    siguiente entero disponible.
    """
    candidate = now_ms if now_ms is not None else int(time.time() * 1000)
    numeric_ids = [int(node.id) for node in iter_nodes(tree) if node.id.isdigit()]
    if numeric_ids:
        candidate = max(candidate, max(numeric_ids) + 1)
    return str(candidate)


def _insert_under(nodes: ButtonTree, new_node: ButtonNode, parent_id: str) -> Optional[ButtonTree]:
    for index, node in enumerate(nodes):
        if node.id == parent_id:
            parent = node.model_copy(update={"sub_buttons": [*node.sub_buttons, new_node]})
            return [*nodes[:index], parent, *nodes[index + 1:]]
        children = _insert_under(node.sub_buttons, new_node, parent_id)
        if children is not None:
            updated = node.model_copy(update={"sub_buttons": children})
            return [*nodes[:index], updated, *nodes[index + 1:]]
    return None


def insert(tree: ButtonTree, new_node: ButtonNode, parent_id: Optional[str] = None) -> ButtonTree:
    """
    Agrega un nodo al final del primer nivel o de los hijos de `parent_id`.

    Si `parent_id` no existe en el árbol, el árbol se retorna sin cambios.
    """
    if not parent_id:
        return [*tree, new_node]
    inserted = _insert_under(tree, new_node, parent_id)
    return inserted if inserted is not None else list(tree)


def update_by_id(tree: ButtonTree, button_id: str, patch: ButtonPatch) -> ButtonTree:
    """Reemplaza texto y respuesta de un nodo de primer nivel. Los hijos no cambian."""
    return [
        node.model_copy(update={"text": patch.text, "response": patch.response})
        if node.id == button_id else node
        for node in tree
    ]


def delete_by_id(tree: ButtonTree, button_id: str) -> ButtonTree:
    """Elimina un nodo de primer nivel (junto con sus hijos)."""
    return [node for node in tree if node.id != button_id]
