import logging
from typing import Dict, List, Optional
from .base_store import KeyValueStore

logger = logging.getLogger(__name__)

class MemoryKeyValueStore(KeyValueStore):
    """
    Almacenamiento en memoria del proceso.
    Útil para desarrollo local y pruebas; los datos se pierden al reiniciar.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def put(self, key: str, value: str) -> None:
        self.data[key] = value

    async def delete(self, key: str) -> None:
        self.data.pop(key, None)

    async def list_keys(self, prefix: str = "") -> List[str]:
        return sorted(key for key in self.data if key.startswith(prefix))
