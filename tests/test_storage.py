"""Tests del adaptador del árbol y del cliente de Cloudflare KV."""

import json
import httpx
import pytest

from app.models.button import ButtonNode
from app.services.storage import CloudflareKVStore, KVStoreError, MemoryKeyValueStore, TreeStore, create_store


class TestTreeStore:
    @pytest.mark.asyncio
    async def test_missing_tree_is_empty_list(self, empty_kv):
        assert await TreeStore(empty_kv).load_tree() == []

    @pytest.mark.asyncio
    async def test_save_writes_whole_document(self, empty_kv):
        store = TreeStore(empty_kv)
        await store.save_tree([ButtonNode(id="1", text="Hours", response="9-5")])
        assert json.loads(empty_kv.data["buttons"]) == [
            {"id": "1", "text": "Hours", "response": "9-5", "subButtons": []}
        ]

    @pytest.mark.asyncio
    async def test_load_existing_tree(self, tree_store):
        tree = await tree_store.load_tree()
        assert [n.text for n in tree] == ["Hours", "Support"]

    @pytest.mark.asyncio
    async def test_user_data_lifecycle(self, empty_kv):
        store = TreeStore(empty_kv)
        assert await store.get_user_data(10) is None
        await store.put_user_data(10, "hello")
        assert empty_kv.data["user_10"] == "hello"
        assert await store.get_user_data(10) == "hello"
        await store.delete_user_data(10)
        assert await store.get_user_data(10) is None

    @pytest.mark.asyncio
    async def test_started_users_only(self, empty_kv):
        store = TreeStore(empty_kv)
        await store.mark_started(10)
        await store.mark_started(-100123)
        await store.put_user_data(20, "not started")

        assert empty_kv.data["user_10_started"] == "true"
        assert sorted(await store.list_started_chat_ids()) == ["-100123", "10"]

    @pytest.mark.asyncio
    async def test_invalid_json_raises(self):
        store = TreeStore(MemoryKeyValueStore({"buttons": "{not json"}))
        with pytest.raises(KVStoreError):
            await store.load_tree()


class TestCreateStore:
    def test_memory_backend(self, settings):
        settings.STORE_BACKEND = "memory"
        assert isinstance(create_store(settings), MemoryKeyValueStore)

    def test_unknown_backend(self, settings):
        settings.STORE_BACKEND = "redis"
        with pytest.raises(ValueError):
            create_store(settings)


@pytest.fixture
def cf_settings(settings):
    settings.CF_API_URL = "https://cf.test/client/v4"
    settings.CF_ACCOUNT_ID = "acc"
    settings.CF_KV_NAMESPACE_ID = "ns"
    settings.CF_API_TOKEN = "secret"
    return settings


BASE = "https://cf.test/client/v4/accounts/acc/storage/kv/namespaces/ns"


class TestCloudflareKVStore:
    @pytest.mark.asyncio
    async def test_get_missing_key_returns_none(self, cf_settings):
        def handler(request):
            assert request.headers["Authorization"] == "Bearer secret"
            return httpx.Response(404, json={"success": False})

        store = CloudflareKVStore(cf_settings, transport=httpx.MockTransport(handler))
        assert await store.get("user_1") is None
        await store.close()

    @pytest.mark.asyncio
    async def test_get_returns_raw_text(self, cf_settings):
        def handler(request):
            assert str(request.url) == f"{BASE}/values/buttons"
            return httpx.Response(200, text='[{"id": "1", "text": "Hours"}]')

        store = CloudflareKVStore(cf_settings, transport=httpx.MockTransport(handler))
        assert await store.get_json("buttons") == [{"id": "1", "text": "Hours"}]

    @pytest.mark.asyncio
    async def test_put_sends_body(self, cf_settings):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["body"] = request.content.decode()
            return httpx.Response(200, json={"success": True})

        store = CloudflareKVStore(cf_settings, transport=httpx.MockTransport(handler))
        await store.put("user_1_started", "true")
        assert seen == {"method": "PUT", "body": "true"}

    @pytest.mark.asyncio
    async def test_delete_tolerates_missing_key(self, cf_settings):
        store = CloudflareKVStore(cf_settings, transport=httpx.MockTransport(lambda r: httpx.Response(404)))
        await store.delete("user_1")

    @pytest.mark.asyncio
    async def test_list_follows_cursor(self, cf_settings):
        pages = {
            None: {"result": [{"name": "user_1_started"}], "result_info": {"cursor": "next"}},
            "next": {"result": [{"name": "user_2_started"}], "result_info": {"cursor": ""}},
        }

        def handler(request):
            assert request.url.params["prefix"] == "user_"
            return httpx.Response(200, json=pages[request.url.params.get("cursor")])

        store = CloudflareKVStore(cf_settings, transport=httpx.MockTransport(handler))
        assert await store.list_keys("user_") == ["user_1_started", "user_2_started"]

    @pytest.mark.asyncio
    async def test_server_error_raises(self, cf_settings):
        store = CloudflareKVStore(cf_settings, transport=httpx.MockTransport(lambda r: httpx.Response(500, text="boom")))
        with pytest.raises(KVStoreError):
            await store.put("buttons", "[]")

    @pytest.mark.asyncio
    async def test_connection_error_raises(self, cf_settings):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        store = CloudflareKVStore(cf_settings, transport=httpx.MockTransport(handler))
        with pytest.raises(KVStoreError):
            await store.get("buttons")
