from abc import ABC, abstractmethod
from typing import Any, List, Optional
import json
import logging

logger = logging.getLogger(__name__)

class KVStoreError(Exception):
    """Error al comunicarse con el almacenamiento clave-valor."""
    pass

class KeyValueStore(ABC):
    """Interfaz base para los almacenamientos clave-valor."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Obtiene el valor crudo de una clave. None si no existe."""
        pass

    @abstractmethod
    async def put(self, key: str, value: str) -> None:
        """Guarda (o sobrescribe) el valor de una clave."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Elimina una clave. No falla si la clave no existe."""
        pass

    @abstractmethod
    async def list_keys(self, prefix: str = "") -> List[str]:
        """Lista los nombres de clave que empiezan con el prefijo."""
        pass

    async def get_json(self, key: str) -> Optional[Any]:
        """Obtiene y decodifica un valor JSON. None si no existe."""
        raw = await self.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise KVStoreError(f"Valor JSON inválido en la clave '{key}'") from e

    async def put_json(self, key: str, value: Any) -> None:
        await self.put(key, json.dumps(value, ensure_ascii=False))

    async def close(self) -> None:
        """Libera recursos. Por defecto no hace nada."""
        pass
