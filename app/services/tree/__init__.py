"""
Módulo del árbol de botones: búsqueda, inserción, edición y borrado.
"""

from .engine import (
    iter_nodes,
    find_by_id,
    find_by_text,
    new_button_id,
    insert,
    update_by_id,
    delete_by_id
)

__all__ = [
    "iter_nodes",
    "find_by_id",
    "find_by_text",
    "new_button_id",
    "insert",
    "update_by_id",
    "delete_by_id"
]
