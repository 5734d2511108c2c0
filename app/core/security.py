from typing import Iterable, Union


def is_admin(chat_id: Union[int, str], admin_ids: Iterable[int]) -> bool:
    """Verifica si el chat pertenece a la lista estática de administradores."""
    try:
        return int(chat_id) in set(admin_ids)
    except (TypeError, ValueError):
        return False
