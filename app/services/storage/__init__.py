"""
Módulo de almacenamiento clave-valor.
Proporciona el adaptador del árbol y los backends disponibles.
"""

from app.core.config import Settings, get_settings
from .base_store import KeyValueStore, KVStoreError
from .memory_store import MemoryKeyValueStore
from .cloudflare_kv import CloudflareKVStore
from .tree_store import TreeStore

__all__ = [
    "KeyValueStore",
    "KVStoreError",
    "MemoryKeyValueStore",
    "CloudflareKVStore",
    "TreeStore",
    "create_store"
]


def create_store(settings: Settings = None) -> KeyValueStore:
    """Crea el backend configurado en STORE_BACKEND."""
    settings = settings or get_settings()
    backend = settings.STORE_BACKEND.lower()
    if backend == "cloudflare":
        return CloudflareKVStore(settings)
    if backend == "memory":
        return MemoryKeyValueStore()
    raise ValueError(f"STORE_BACKEND no soportado: {settings.STORE_BACKEND}")
