import asyncio
import os

from cached_retry_fetch import CachedRetryFetcher, FetcherConfig, as_fetch_operation
from cached_retry_fetch.stores.redis import RedisStore


class ResponseError(Exception):
    def __init__(self, status: int):
        super().__init__(f"HTTP {status}")
        self.status = status


async def fetch_profile():
    print("Fetching profile from the API...")
    await asyncio.sleep(0.5)
    return {"name": "Sam", "skills": ["python", "sql"]}


async def fetch_private_resume():
    raise ResponseError(401)


async def main():
    store = RedisStore.from_url(os.getenv("REDIS_URL", "redis://localhost:6379/0"))
    fetcher = CachedRetryFetcher(store, FetcherConfig(key_prefix="autoapply:"))

    try:
        await store.ping()
    except Exception as e:
        print(f"Redis not available: {e}")
        return

    try:
        print(await fetcher.fetch_with_cache("profile:me", fetch_profile, ttl=30_000))
        print(await fetcher.fetch_with_cache("profile:me", fetch_profile, ttl=30_000))

        try:
            await fetcher.fetch_with_cache("resume:private", as_fetch_operation(fetch_private_resume))
        except Exception as e:
            print(f"Not retried: {e!r}")
    finally:
        await store.close()


if __name__ == "__main__":
    asyncio.run(main())
