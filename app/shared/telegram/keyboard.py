from typing import Dict, List, Sequence

from app.models.button import ButtonNode

BACK_CAPTION = "⬅️ Back"
FOLDER_SUFFIX = " 📁"   # sufijo decorativo que algunos clientes añaden a los menús
DEFAULT_GROUP_SIZE = 2


def chunks(items: Sequence, size: int) -> List[List]:
    """Divide una secuencia en grupos consecutivos de tamaño `size`."""
    if size < 1:
        raise ValueError(f"El tamaño de grupo debe ser positivo, recibido: {size}")
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


class KeyboardProjector:
    """
    Factory para crear teclados de respuesta de Telegram.
    Responsabilidad única: proyectar un nivel del árbol a filas de botones.
    """

    @staticmethod
    def project(
        nodes: Sequence[ButtonNode],
        group_size: int = DEFAULT_GROUP_SIZE,
        include_back: bool = False,
        back_caption: str = BACK_CAPTION
    ) -> List[List[Dict]]:
        """
        Convierte una lista de nodos hermanos en filas de teclado.

        Args:
            nodes: Nodos a mostrar, en orden
            group_size: Cantidad de botones por fila
            include_back: Antepone una fila con el botón de regreso
            back_caption: Texto del botón de regreso

        Returns:
            List[List[Dict]]: Filas con celdas {"text": ...}
        """
        rows = chunks([{"text": node.text} for node in nodes], group_size)
        if include_back:
            rows.insert(0, [{"text": back_caption}])
        return rows

    @staticmethod
    def reply_markup(rows: List[List[Dict]]) -> Dict:
        """Envuelve las filas en un ReplyKeyboardMarkup persistente."""
        return {
            "keyboard": rows,
            "resize_keyboard": True,
            "one_time_keyboard": False
        }

    @staticmethod
    def strip_decoration(text: str) -> str:
        """Elimina el sufijo decorativo de carpeta antes de buscar por texto."""
        return text.replace(FOLDER_SUFFIX, "")
