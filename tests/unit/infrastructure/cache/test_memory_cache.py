# nosec B101


import pytest
from datetime import timedelta
from unittest.mock import AsyncMock

from infrastructure.cache.memory_cache import MemoryRateCache


@pytest.fixture
def cache(clock):
    return MemoryRateCache(clock=clock)


@pytest.mark.asyncio
async def test_miss_invokes_producer_once_and_returns_value(cache):
    producer = AsyncMock(return_value='rates')

    result = await cache.get_or_create('latest:USD', timedelta(minutes=5), producer)

    assert result == 'rates'
    producer.assert_awaited_once()


@pytest.mark.asyncio
async def test_hit_within_ttl_skips_producer(cache, clock):
    producer = AsyncMock(return_value='rates')

    await cache.get_or_create('latest:USD', timedelta(minutes=5), producer)
    clock.advance(299)
    result = await cache.get_or_create('latest:USD', timedelta(minutes=5), producer)

    assert result == 'rates'
    assert producer.await_count == 1


@pytest.mark.asyncio
async def test_expired_entry_invokes_producer_again(cache, clock):
    producer = AsyncMock(side_effect=['first', 'second'])

    first = await cache.get_or_create('latest:USD', timedelta(minutes=5), producer)
    clock.advance(300)
    second = await cache.get_or_create('latest:USD', timedelta(minutes=5), producer)

    assert first == 'first'
    assert second == 'second'
    assert producer.await_count == 2


@pytest.mark.asyncio
async def test_keys_are_independent(cache):
    latest = AsyncMock(return_value='latest-result')
    historical = AsyncMock(return_value='historical-result')

    assert await cache.get_or_create('latest:EUR', timedelta(minutes=5), latest) == 'latest-result'
    assert await cache.get_or_create(
        'historical:EUR:2024-01-01:2024-01-31', timedelta(minutes=30), historical
    ) == 'historical-result'
    assert len(cache) == 2


@pytest.mark.asyncio
async def test_producer_failure_is_not_cached(cache):
    producer = AsyncMock(side_effect=[RuntimeError('upstream down'), 'recovered'])

    with pytest.raises(RuntimeError):
        await cache.get_or_create('latest:USD', timedelta(minutes=5), producer)

    result = await cache.get_or_create('latest:USD', timedelta(minutes=5), producer)

    assert result == 'recovered'
    assert producer.await_count == 2


@pytest.mark.asyncio
async def test_expired_entries_for_unrequested_keys_are_swept(cache, clock):
    producer = AsyncMock(return_value='rates')

    for day in range(1000):
        key = f'historical:EUR:2024-01-01:{day}'
        await cache.get_or_create(key, timedelta(minutes=30), producer)
        clock.advance(60 * 60)

    assert len(cache) <= 1


@pytest.mark.asyncio
async def test_sweep_keeps_live_entries(cache, clock):
    producer = AsyncMock(return_value='rates')
    await cache.get_or_create('latest:USD', timedelta(minutes=5), producer)
    await cache.get_or_create('historical:USD:2024-01-01:2024-01-31', timedelta(minutes=30), producer)
    clock.advance(10 * 60)

    await cache.get_or_create('latest:EUR', timedelta(minutes=5), producer)

    assert len(cache) == 2
    result = await cache.get_or_create(
        'historical:USD:2024-01-01:2024-01-31', timedelta(minutes=30), producer
    )
    assert result == 'rates'
    assert producer.await_count == 3


@pytest.mark.asyncio
async def test_prune_expired_reports_removed_count(cache, clock):
    producer = AsyncMock(return_value='rates')
    await cache.get_or_create('latest:USD', timedelta(minutes=5), producer)
    await cache.get_or_create('latest:GBP', timedelta(minutes=5), producer)
    await cache.get_or_create('historical:USD:2024-01-01:2024-01-31', timedelta(minutes=30), producer)
    clock.advance(5 * 60)

    assert cache.prune_expired() == 2
    assert len(cache) == 1
