import logging
from unittest.mock import AsyncMock, Mock, patch

import httpx
import pytest
from fastapi.testclient import TestClient

from api.dependencies import cleanup_dependencies, deps, init_dependencies
from api.main import app
from config.settings import Settings
from infrastructure.providers import FrankfurterProvider, ProviderKey


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


@pytest.fixture
def tracked_transport():
    transport = Mock(spec=httpx.AsyncBaseTransport)
    transport.aclose = AsyncMock()
    with patch('api.dependencies.CorrelationLoggingTransport', return_value=transport):
        yield transport


def test_lifespan_wires_and_releases_dependencies():
    with TestClient(app) as client:
        assert isinstance(deps.provider_factory.get_provider(), FrankfurterProvider)
        assert deps.provider_factory.active_key == ProviderKey.FRANKFURTER
        assert deps.rate_cache is not None

        response = client.get('/api/v1/health')

        assert response.status_code == 200
        assert response.json()['status'] == 'healthy'
        assert response.json()['provider']['name'] == 'frankfurter'

    assert deps.http_client is None
    assert deps.provider_factory is None
    assert deps.circuit_breaker is None


@pytest.mark.asyncio
async def test_init_applies_resilience_settings():
    settings = Settings(
        CIRCUIT_BREAKER_MINIMUM_THROUGHPUT=4,
        CIRCUIT_BREAKER_FAILURE_RATIO=0.25,
        CIRCUIT_BREAKER_BREAK_SECONDS=5,
    )

    await init_dependencies(settings)
    try:
        assert deps.circuit_breaker.minimum_throughput == 4
        assert deps.circuit_breaker.failure_ratio == 0.25
        assert deps.circuit_breaker.break_seconds == 5
        assert str(deps.http_client.base_url) == 'https://api.frankfurter.app/'
    finally:
        await cleanup_dependencies()


@pytest.mark.asyncio
async def test_cleanup_closes_shared_client_once(tracked_transport):
    await init_dependencies(Settings())

    await cleanup_dependencies()

    tracked_transport.aclose.assert_awaited_once()
    assert deps.http_client is None


@pytest.mark.asyncio
async def test_unknown_provider_key_fails_startup_and_closes_client(tracked_transport):
    with pytest.raises(RuntimeError) as exc_info:
        await init_dependencies(Settings(ACTIVE_PROVIDER='fixer'))

    assert 'Unknown exchange rate provider key' in str(exc_info.value)
    tracked_transport.aclose.assert_awaited_once()
    assert deps.http_client is None
    assert deps.circuit_breaker is None
    assert deps.provider_factory is None
