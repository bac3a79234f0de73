from abc import ABC

import pytest

from cached_retry_fetch import (
    CacheEntry,
    CachedFetcherInterface,
    FailureKind,
    FetchError,
    FetcherConfig,
    InMemoryStore,
    KeyValueStoreInterface,
    as_fetch_operation,
    classify_failure,
)


class TestCacheEntry:
    def test_cache_entry_creation(self):
        """Test CacheEntry dataclass creation"""
        entry = CacheEntry(data={"id": 1}, expiry=1000)
        assert entry.data == {"id": 1}
        assert entry.expiry == 1000

    def test_valid_strictly_before_expiry(self):
        entry = CacheEntry(data="x", expiry=1000)
        assert entry.is_valid(999) is True
        assert entry.is_valid(1000) is False
        assert entry.is_valid(1001) is False

    def test_json_round_trip(self):
        entry = CacheEntry(data={"skills": ["python", "sql"], "remote": True}, expiry=1234)
        assert CacheEntry.from_json(entry.to_json()) == entry

    def test_from_bytes(self):
        assert CacheEntry.from_json(b'{"data": 1, "expiry": 2}') == CacheEntry(data=1, expiry=2)

    @pytest.mark.parametrize("raw", [None, "", "{", "null", "[1, 2]", '{"data": 1}', '{"data": 1, "expiry": "2"}'])
    def test_malformed_payloads(self, raw):
        assert CacheEntry.from_json(raw) is None


class TestInterfaces:
    def test_store_interface_is_abstract(self):
        """Test that KeyValueStoreInterface is abstract and cannot be instantiated"""
        with pytest.raises(TypeError):
            KeyValueStoreInterface()

    def test_store_interface_methods(self):
        for name in ("get", "set", "exists", "delete", "clear"):
            assert hasattr(KeyValueStoreInterface, name)

    def test_fetcher_interface_is_abstract(self):
        with pytest.raises(TypeError):
            CachedFetcherInterface()

    def test_fetcher_interface_methods(self):
        assert callable(CachedFetcherInterface)
        assert hasattr(CachedFetcherInterface, "fetch_with_cache")

    def test_interfaces_inherit_from_abc(self):
        assert issubclass(KeyValueStoreInterface, ABC)
        assert issubclass(CachedFetcherInterface, ABC)


class TestInMemoryStore:
    @pytest.mark.asyncio
    async def test_instances_are_independent(self):
        """Each InMemoryStore owns its own data"""
        store1 = InMemoryStore()
        store2 = InMemoryStore()
        await store1.set("key1", "value1")
        assert await store2.get("key1") is None

    @pytest.mark.asyncio
    async def test_set_and_get(self):
        store = InMemoryStore()
        await store.set("key1", "value1")
        assert await store.get("key1") == "value1"

    @pytest.mark.asyncio
    async def test_get_nonexistent(self):
        store = InMemoryStore()
        assert await store.get("nonexistent") is None

    @pytest.mark.asyncio
    async def test_initial_data(self):
        store = InMemoryStore({"job:1": "{}"})
        assert await store.exists("job:1") is True

    @pytest.mark.asyncio
    async def test_delete_and_clear(self):
        store = InMemoryStore()
        await store.set("key1", "value1")
        await store.set("key2", "value2")

        await store.delete("key1")
        assert await store.exists("key1") is False
        assert await store.exists("key2") is True

        await store.clear()
        assert await store.exists("key2") is False

        # Deleting a missing key is a no-op
        await store.delete("key1")


class TestErrors:
    @pytest.mark.parametrize(
        "status, kind",
        [
            (401, FailureKind.PERMANENT),
            (404, FailureKind.PERMANENT),
            (500, FailureKind.TRANSIENT),
            (429, FailureKind.TRANSIENT),
            (None, FailureKind.TRANSIENT),
        ],
    )
    def test_kind_from_status(self, status, kind):
        error = FetchError("failed", status=status)
        assert error.kind is kind
        assert error.is_permanent is (kind is FailureKind.PERMANENT)

    def test_explicit_constructors(self):
        assert FetchError.permanent("gone").kind is FailureKind.PERMANENT
        assert FetchError.transient("busy", status=404).kind is FailureKind.TRANSIENT

    def test_classify_failure(self):
        assert classify_failure(FetchError("nope", status=401)) is FailureKind.PERMANENT
        assert classify_failure(RuntimeError("boom")) is FailureKind.TRANSIENT

    def test_classify_failure_reads_status_of_untagged_errors(self):
        class ResponseError(Exception):
            def __init__(self, status):
                super().__init__(f"HTTP {status}")
                self.status = status

        class Response:
            status_code = 404

        class HTTPStatusError(Exception):
            response = Response()

        assert classify_failure(ResponseError(401)) is FailureKind.PERMANENT
        assert classify_failure(ResponseError(503)) is FailureKind.TRANSIENT
        assert classify_failure(HTTPStatusError("not found")) is FailureKind.PERMANENT

    def test_repr(self):
        assert repr(FetchError("nope", status=404)) == "FetchError('nope', status=404, kind=permanent)"

    @pytest.mark.asyncio
    async def test_adapter_reads_status_code_from_response(self):
        class Response:
            status_code = 401

        class HTTPStatusError(Exception):
            response = Response()

        async def operation():
            raise HTTPStatusError("unauthorized")

        with pytest.raises(FetchError) as exc_info:
            await as_fetch_operation(operation)()

        assert exc_info.value.status == 401
        assert exc_info.value.kind is FailureKind.PERMANENT

    @pytest.mark.asyncio
    async def test_adapter_custom_permanent_statuses(self):
        class ResponseError(Exception):
            status = 410

        async def operation():
            raise ResponseError("gone")

        with pytest.raises(FetchError) as exc_info:
            await as_fetch_operation(operation, permanent_statuses={410})()

        assert exc_info.value.kind is FailureKind.PERMANENT

    @pytest.mark.asyncio
    async def test_adapter_leaves_other_errors_alone(self):
        async def operation():
            raise KeyError("missing")

        with pytest.raises(KeyError):
            await as_fetch_operation(operation)()

    @pytest.mark.asyncio
    async def test_adapter_passes_result_through(self):
        async def operation():
            return {"id": 1}

        assert await as_fetch_operation(operation)() == {"id": 1}


class TestFetcherConfig:
    def test_defaults(self):
        config = FetcherConfig.defaults()
        assert config.default_ttl_ms == 300_000
        assert config.max_retries == 2
        assert config.backoff_base_ms == 1000
        assert config.key_prefix == ""

    def test_no_retry(self):
        assert FetcherConfig.no_retry().max_retries == 0

    def test_backoff_delay(self):
        config = FetcherConfig()
        assert [config.backoff_delay_ms(n) for n in (1, 2, 3, 4)] == [1000, 2000, 4000, 8000]
        with pytest.raises(ValueError):
            config.backoff_delay_ms(0)

    @pytest.mark.parametrize(
        "kwargs",
        [{"default_ttl_ms": -1}, {"max_retries": -1}, {"backoff_base_ms": 0}],
    )
    def test_validation(self, kwargs):
        with pytest.raises(ValueError):
            FetcherConfig(**kwargs)
