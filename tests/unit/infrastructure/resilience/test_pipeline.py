# nosec B101


import asyncio
import logging

import httpx
import pytest
from tenacity import wait_none

from domain.exceptions.currency import CircuitBreakerError
from infrastructure.resilience.circuit_breaker import CircuitBreaker, CircuitBreakerState
from infrastructure.resilience.pipeline import ResiliencePipeline


class ScriptedUpstream:
    """Replays a fixed sequence of responses or exceptions, one per attempt"""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = 0

    async def __call__(self):
        outcome = self.outcomes[min(self.calls, len(self.outcomes) - 1)]
        self.calls += 1
        if isinstance(outcome, BaseException):
            raise outcome
        return httpx.Response(outcome)


@pytest.fixture
def circuit_breaker(clock):
    return CircuitBreaker(provider_name='frankfurter', minimum_throughput=100, clock=clock)


@pytest.fixture
def pipeline(circuit_breaker):
    return ResiliencePipeline(circuit_breaker, timeout_seconds=5, max_retries=3, wait=wait_none())


@pytest.mark.asyncio
async def test_success_on_first_attempt(pipeline):
    upstream = ScriptedUpstream(200)

    response = await pipeline.execute(upstream)

    assert response.status_code == 200
    assert upstream.calls == 1


@pytest.mark.asyncio
async def test_transient_statuses_are_retried_until_success(pipeline):
    upstream = ScriptedUpstream(503, 429, 200)

    response = await pipeline.execute(upstream)

    assert response.status_code == 200
    assert upstream.calls == 3


@pytest.mark.asyncio
async def test_transport_errors_are_retried(pipeline):
    upstream = ScriptedUpstream(httpx.ConnectError('refused'), 200)

    response = await pipeline.execute(upstream)

    assert response.status_code == 200
    assert upstream.calls == 2


@pytest.mark.asyncio
@pytest.mark.parametrize('status_code', [400, 401, 404])
async def test_non_transient_status_is_returned_without_retry(pipeline, status_code):
    upstream = ScriptedUpstream(status_code, 200)

    response = await pipeline.execute(upstream)

    assert response.status_code == status_code
    assert upstream.calls == 1


@pytest.mark.asyncio
async def test_exhausted_retries_return_last_response(pipeline):
    upstream = ScriptedUpstream(500, 502, 503, 504)

    response = await pipeline.execute(upstream)

    assert response.status_code == 504
    assert upstream.calls == 4


@pytest.mark.asyncio
async def test_exhausted_retries_reraise_last_exception(pipeline):
    upstream = ScriptedUpstream(httpx.ReadTimeout('slow'))

    with pytest.raises(httpx.ReadTimeout):
        await pipeline.execute(upstream)

    assert upstream.calls == 4


@pytest.mark.asyncio
async def test_zero_retries_makes_single_attempt(circuit_breaker):
    pipeline = ResiliencePipeline(circuit_breaker, max_retries=0, wait=wait_none())
    upstream = ScriptedUpstream(500)

    response = await pipeline.execute(upstream)

    assert response.status_code == 500
    assert upstream.calls == 1


@pytest.mark.asyncio
async def test_timeout_bounds_the_whole_call(circuit_breaker):
    pipeline = ResiliencePipeline(circuit_breaker, timeout_seconds=0.05, wait=wait_none())

    async def hanging():
        await asyncio.sleep(5)
        return httpx.Response(200)

    with pytest.raises(TimeoutError):
        await pipeline.execute(hanging)


@pytest.mark.asyncio
async def test_cancellation_is_not_retried(pipeline, circuit_breaker):
    upstream = ScriptedUpstream(asyncio.CancelledError(), 200)

    with pytest.raises(asyncio.CancelledError):
        await pipeline.execute(upstream)

    assert upstream.calls == 1
    assert circuit_breaker.get_status()['sampled_calls'] == 0


@pytest.mark.asyncio
async def test_open_circuit_stops_retrying(clock):
    breaker = CircuitBreaker(
        provider_name='frankfurter', minimum_throughput=2, failure_ratio=0.5, clock=clock
    )
    pipeline = ResiliencePipeline(breaker, max_retries=3, wait=wait_none())
    upstream = ScriptedUpstream(500)

    with pytest.raises(CircuitBreakerError):
        await pipeline.execute(upstream)

    assert upstream.calls == 2
    assert breaker.state == CircuitBreakerState.OPEN


@pytest.mark.asyncio
async def test_retries_are_logged(pipeline, caplog):
    upstream = ScriptedUpstream(503, 200)

    with caplog.at_level(logging.WARNING, logger='infrastructure.resilience.pipeline'):
        await pipeline.execute(upstream)

    assert 'Upstream attempt 1 via frankfurter failed (HTTP 503)' in caplog.text
