from glide import FlushMode, GlideClient

from ...interfaces import KeyValueStoreInterface
from .config import ValkeyClientConfig


class ValkeyStore(KeyValueStoreInterface):
    _config: ValkeyClientConfig
    _client: GlideClient

    # Use ValkeyStore.create; the glide client can only be built asynchronously.
    def __init__(self, config: ValkeyClientConfig, client: GlideClient):
        self._config = config
        self._client = client

    @classmethod
    async def create(cls, config: ValkeyClientConfig | None = None) -> "ValkeyStore":
        config = config or ValkeyClientConfig.localhost()
        client = await GlideClient.create(config.to_glide_config())
        return cls(config, client)

    @property
    def config(self) -> ValkeyClientConfig:
        return self._config

    async def get(self, key: str) -> str | None:
        data = await self._client.get(key)
        if data is None:
            return None
        if isinstance(data, bytes):
            return data.decode("utf-8")
        return data

    async def set(self, key: str, value: str) -> None:
        await self._client.set(key, value)

    async def exists(self, key: str) -> bool:
        return await self._client.exists([key]) == 1

    async def delete(self, key: str) -> None:
        await self._client.delete([key])

    async def clear(self) -> None:
        await self._client.flushdb(flush_mode=FlushMode.ASYNC)

    async def ping(self) -> None:
        await self._client.ping()

    async def close(self) -> None:
        await self._client.close()
