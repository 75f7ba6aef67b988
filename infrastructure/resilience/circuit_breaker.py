import asyncio
import logging
import threading
import time
from collections import deque
from collections.abc import Awaitable, Callable
from enum import Enum

import httpx

from domain.exceptions.currency import CircuitBreakerError
from infrastructure.resilience.classifier import Outcome, is_transient

logger = logging.getLogger(__name__)


class CircuitBreakerState(Enum):
	CLOSED = 'CLOSED'
	OPEN = 'OPEN'
	HALF_OPEN = 'HALF_OPEN'


class CircuitBreaker:
	"""Sliding-window circuit breaker for a single upstream provider.

	Outcomes inside the last ``sampling_seconds`` are kept in a window. Once
	the window holds at least ``minimum_throughput`` outcomes and the share
	of failures reaches ``failure_ratio``, the circuit opens and calls fail
	fast for ``break_seconds``. The first call after that is a trial: success
	closes the circuit, failure opens it again.

	State is shared by every in-flight request against the provider. All
	mutations are synchronous and guarded by a lock, and no lock is held
	across an await.
	"""

	def __init__(
		self,
		provider_name: str,
		sampling_seconds: float = 30,
		minimum_throughput: int = 10,
		failure_ratio: float = 0.5,
		break_seconds: float = 20,
		should_handle: Callable[[Outcome], bool] = is_transient,
		clock: Callable[[], float] = time.monotonic,
	):
		self.provider_name = provider_name

		# Circuit breaker configuration
		self.sampling_seconds = sampling_seconds
		self.minimum_throughput = minimum_throughput
		self.failure_ratio = failure_ratio
		self.break_seconds = break_seconds

		self._should_handle = should_handle
		self._clock = clock
		self._lock = threading.Lock()

		self._state = CircuitBreakerState.CLOSED
		self._window: deque[tuple[float, bool]] = deque()
		self._opened_at: float | None = None
		self._trial_in_flight = False

	@property
	def state(self) -> CircuitBreakerState:
		with self._lock:
			if self._state == CircuitBreakerState.OPEN and self._break_elapsed(self._clock()):
				return CircuitBreakerState.HALF_OPEN
			return self._state

	async def call(self, func: Callable[[], Awaitable[httpx.Response]]) -> httpx.Response:
		"""Execute function with circuit breaker protection"""
		self._acquire_permission()

		try:
			result = await func()
		except asyncio.CancelledError:
			self._release_trial()
			raise
		except Exception as e:
			self._record(Outcome(exception=e))
			raise

		self._record(Outcome(result=result))
		return result

	def _acquire_permission(self) -> None:
		with self._lock:
			now = self._clock()

			if self._state == CircuitBreakerState.OPEN:
				if not self._break_elapsed(now):
					raise CircuitBreakerError(self.provider_name, self._remaining_break(now))
				self._transition(CircuitBreakerState.HALF_OPEN, 'break_elapsed')

			if self._state == CircuitBreakerState.HALF_OPEN:
				if self._trial_in_flight:
					raise CircuitBreakerError(self.provider_name, 0)
				self._trial_in_flight = True

	def _release_trial(self) -> None:
		with self._lock:
			self._trial_in_flight = False

	def _record(self, outcome: Outcome) -> None:
		failed = self._should_handle(outcome)

		with self._lock:
			now = self._clock()

			if self._state == CircuitBreakerState.HALF_OPEN:
				self._trial_in_flight = False
				if failed:
					self._open(now, 'failure_during_recovery')
				else:
					self._transition(CircuitBreakerState.CLOSED, 'recovery_successful')
					self._window.clear()
				return

			if self._state == CircuitBreakerState.OPEN:
				# Call admitted before the circuit opened; the window restarts on close.
				return

			self._window.append((now, failed))
			self._prune(now)

			total = len(self._window)
			failures = sum(1 for _, is_failure in self._window if is_failure)
			if total >= self.minimum_throughput and failures / total >= self.failure_ratio:
				self._open(now, f'{failures}/{total}_failures_in_window')

	def _open(self, now: float, reason: str) -> None:
		self._opened_at = now
		self._window.clear()
		self._transition(CircuitBreakerState.OPEN, reason)

	def _transition(self, new_state: CircuitBreakerState, reason: str) -> None:
		old_state = self._state
		self._state = new_state
		log = logger.warning if new_state == CircuitBreakerState.OPEN else logger.info
		log(
			'Circuit breaker state change for %s: %s -> %s (%s)',
			self.provider_name,
			old_state.value,
			new_state.value,
			reason,
		)

	def _prune(self, now: float) -> None:
		horizon = now - self.sampling_seconds
		while self._window and self._window[0][0] <= horizon:
			self._window.popleft()

	def _break_elapsed(self, now: float) -> bool:
		return self._opened_at is None or now - self._opened_at >= self.break_seconds

	def _remaining_break(self, now: float) -> float:
		if self._opened_at is None:
			return 0.0
		return max(0.0, self.break_seconds - (now - self._opened_at))

	def get_status(self) -> dict:
		"""Get current circuit breaker status for monitoring"""
		state = self.state
		with self._lock:
			self._prune(self._clock())
			total = len(self._window)
			failures = sum(1 for _, is_failure in self._window if is_failure)

		return {
			'provider_name': self.provider_name,
			'state': state.value,
			'failure_count': failures,
			'sampled_calls': total,
			'failure_ratio_threshold': self.failure_ratio,
			'minimum_throughput': self.minimum_throughput,
		}
