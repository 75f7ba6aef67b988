import asyncio
import logging
from collections.abc import Awaitable, Callable

import httpx
from tenacity import (
	AsyncRetrying,
	RetryCallState,
	retry_if_exception,
	retry_if_result,
	stop_after_attempt,
	wait_exponential_jitter,
)
from tenacity.wait import wait_base

from domain.exceptions.currency import CircuitBreakerError
from infrastructure.resilience.circuit_breaker import CircuitBreaker
from infrastructure.resilience.classifier import Outcome, is_transient

logger = logging.getLogger(__name__)

MAX_BACKOFF_SECONDS = 30


def _last_outcome(retry_state: RetryCallState) -> httpx.Response:
	# Returns the final response, or re-raises the final exception.
	return retry_state.outcome.result()


class ResiliencePipeline:
	"""Timeout -> retry -> circuit breaker, outermost to innermost.

	The timeout bounds the whole call including every retry and backoff.
	Retry and circuit breaker share the transient classifier, so only
	exceptions, 5xx, 408 and 429 are retried or counted as failures.
	An open circuit is not retried. Exhausted retries surface the last
	outcome unchanged.
	"""

	def __init__(
		self,
		circuit_breaker: CircuitBreaker,
		timeout_seconds: float = 10,
		max_retries: int = 3,
		base_delay_seconds: float = 0.2,
		classifier: Callable[[Outcome], bool] = is_transient,
		wait: wait_base | None = None,
	):
		self.circuit_breaker = circuit_breaker
		self.timeout_seconds = timeout_seconds
		self.max_retries = max_retries
		self._classifier = classifier
		self._wait = wait or wait_exponential_jitter(
			initial=base_delay_seconds, jitter=base_delay_seconds, max=MAX_BACKOFF_SECONDS
		)

	async def execute(self, send: Callable[[], Awaitable[httpx.Response]]) -> httpx.Response:
		async with asyncio.timeout(self.timeout_seconds):
			retrying = AsyncRetrying(
				stop=stop_after_attempt(self.max_retries + 1),
				wait=self._wait,
				retry=(
					retry_if_exception(self._should_retry_exception)
					| retry_if_result(self._should_retry_result)
				),
				before_sleep=self._log_retry,
				retry_error_callback=_last_outcome,
			)
			return await retrying(self.circuit_breaker.call, send)

	def _should_retry_exception(self, exc: BaseException) -> bool:
		if isinstance(exc, (asyncio.CancelledError, CircuitBreakerError)):
			return False
		return self._classifier(Outcome(exception=exc))

	def _should_retry_result(self, response: httpx.Response | None) -> bool:
		return self._classifier(Outcome(result=response))

	def _log_retry(self, retry_state: RetryCallState) -> None:
		outcome = retry_state.outcome
		if outcome.failed:
			detail = f'{outcome.exception().__class__.__name__}: {outcome.exception()}'
		else:
			detail = f'HTTP {outcome.result().status_code}'
		logger.warning(
			'Upstream attempt %d via %s failed (%s); retrying in %.0fms',
			retry_state.attempt_number,
			self.circuit_breaker.provider_name,
			detail,
			retry_state.next_action.sleep * 1000 if retry_state.next_action else 0,
		)
