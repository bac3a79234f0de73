import asyncio
import logging

from cached_retry_fetch import CachedFetchingClass, CachedRetryFetcher, FetchError, FetcherConfig, InMemoryStore


class JobBoardService(CachedFetchingClass):
    def __init__(self):
        fetcher = CachedRetryFetcher(InMemoryStore(), FetcherConfig(default_ttl_ms=60_000))
        super().__init__(fetcher)
        self.attempts = 0

    @CachedFetchingClass.cached(key=lambda self, job_id: f"job:{job_id}")
    async def get_job(self, job_id: int):
        print(f"Fetching job {job_id}...")
        await asyncio.sleep(0.2)
        if job_id == 404:
            raise FetchError("job not found", status=404)
        self.attempts += 1
        if self.attempts == 1:
            raise FetchError("board returned 503", status=503)
        return {"id": job_id, "title": "Backend Engineer", "company": "Acme", "location": "Remote"}


async def main():
    logging.basicConfig(level=logging.WARNING)
    service = JobBoardService()

    print("=== Job Board Example ===")

    print("\n1. First call (retries once on 503):")
    print(await service.get_job(1))

    print("\n2. Second call (cached):")
    print(await service.get_job(1))

    print("\n3. Missing job (not retried):")
    try:
        await service.get_job(404)
    except FetchError as e:
        print(f"Gave up: {e!r}")


if __name__ == "__main__":
    asyncio.run(main())
