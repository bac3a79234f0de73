from redis.asyncio import Redis

from ...interfaces import KeyValueStoreInterface


class RedisStore(KeyValueStoreInterface):
    def __init__(self, client: Redis):
        self.redis = client

    @classmethod
    def connect(
        cls,
        host: str = "localhost",
        port: int = 6379,
        password: str | None = None,
        username: str | None = None,
        db: int = 0,
        socket_timeout: float = 0.5,
        socket_connect_timeout: float = 0.5,
    ) -> "RedisStore":
        client = Redis(
            host=host,
            port=port,
            password=password,
            username=username,
            db=db,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_connect_timeout,
        )
        return cls(client)

    @classmethod
    def from_url(cls, url: str, socket_timeout: float = 0.5) -> "RedisStore":
        return cls(Redis.from_url(url, socket_timeout=socket_timeout))

    async def get(self, key: str) -> str | None:
        data = await self.redis.get(key)
        if data is None:
            return None
        if isinstance(data, bytes):
            return data.decode("utf-8")
        return data

    async def set(self, key: str, value: str) -> None:
        await self.redis.set(key, value)

    async def exists(self, key: str) -> bool:
        return bool((await self.redis.exists(key)) == 1)

    async def delete(self, key: str) -> None:
        await self.redis.delete(key)

    async def clear(self) -> None:
        await self.redis.flushdb()

    async def ping(self) -> None:
        await self.redis.ping()

    async def close(self) -> None:
        await self.redis.aclose()
