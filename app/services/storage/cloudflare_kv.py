import httpx
import logging
from typing import List, Optional
from urllib.parse import quote
from app.core.config import Settings, get_settings
from .base_store import KeyValueStore, KVStoreError

logger = logging.getLogger(__name__)

class CloudflareKVStore(KeyValueStore):
    """
    Cliente HTTP para un namespace de Cloudflare Workers KV.
    Responsabilidad única: traducir get/put/delete/list a la API REST de KV.
    """

    def __init__(self, settings: Optional[Settings] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        settings = settings or get_settings()
        self.base_url = (
            f"{settings.CF_API_URL}/accounts/{settings.CF_ACCOUNT_ID}"
            f"/storage/kv/namespaces/{settings.CF_KV_NAMESPACE_ID}"
        )
        self.headers = {"Authorization": f"Bearer {settings.CF_API_TOKEN}"}

        # Cliente HTTP reutilizable con configuración optimizada
        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(10.0, connect=5.0),
            headers=self.headers,
            limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
            transport=transport
        )

    async def _make_request(self, method: str, url: str, **kwargs) -> httpx.Response:
        """
        Método centralizado para hacer requests con manejo de errores.

        Raises:
            KVStoreError: Error de comunicación con Cloudflare
        """
        full_url = f"{self.base_url}/{url.lstrip('/')}"
        try:
            logger.debug(f"[KV] {method} {full_url}")
            response = await self.client.request(method, full_url, **kwargs)
            logger.debug(f"[KV] {method} {full_url} -> {response.status_code}")
            return response
        except httpx.TimeoutException as exc:
            logger.error(f"[KV] Timeout en {method} {url}")
            raise KVStoreError("Timeout al comunicarse con Cloudflare KV") from exc
        except httpx.RequestError as exc:
            logger.error(f"[KV] Error de conexión en {method} {url}: {exc}")
            raise KVStoreError(f"Error de conexión: {str(exc)}") from exc

    @staticmethod
    def _value_path(key: str) -> str:
        return f"values/{quote(key, safe='')}"

    def _raise_for_status(self, response: httpx.Response, operation: str) -> None:
        if response.status_code >= 400:
            logger.error(f"[KV] Error {response.status_code} en {operation}: {response.text}")
            raise KVStoreError(f"Cloudflare KV respondió {response.status_code} en {operation}")

    async def get(self, key: str) -> Optional[str]:
        response = await self._make_request("GET", self._value_path(key))
        if response.status_code == 404:
            return None
        self._raise_for_status(response, f"get '{key}'")
        return response.text

    async def put(self, key: str, value: str) -> None:
        response = await self._make_request(
            "PUT",
            self._value_path(key),
            content=value.encode("utf-8"),
            headers={"Content-Type": "text/plain; charset=utf-8"}
        )
        self._raise_for_status(response, f"put '{key}'")

    async def delete(self, key: str) -> None:
        response = await self._make_request("DELETE", self._value_path(key))
        if response.status_code == 404:  # 404 es OK, ya no existe
            return
        self._raise_for_status(response, f"delete '{key}'")

    async def list_keys(self, prefix: str = "") -> List[str]:
        """Lista todas las claves con el prefijo, recorriendo la paginación por cursor."""
        keys: List[str] = []
        cursor = None
        while True:
            params = {"prefix": prefix, "limit": 1000}
            if cursor:
                params["cursor"] = cursor
            response = await self._make_request("GET", "keys", params=params)
            self._raise_for_status(response, f"list '{prefix}'")

            body = response.json()
            keys.extend(item["name"] for item in body.get("result", []))
            cursor = (body.get("result_info") or {}).get("cursor")
            if not cursor:
                return keys

    async def close(self):
        """Cierra el cliente HTTP."""
        try:
            await self.client.aclose()
            logger.debug("[KV] Cliente HTTP cerrado")
        except Exception as e:
            logger.error(f"[KV] Error cerrando cliente: {e}")
