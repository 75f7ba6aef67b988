import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, TypeVar

T = TypeVar('T')

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _CacheEntry:
	value: Any
	expires_at: float


class MemoryRateCache:
	"""Process-local key/value cache with absolute per-entry expiry.

	Expired entries are dropped when read and swept out on every write, so
	keys that are never requested again do not accumulate. There is no
	single-flight guarantee: concurrent misses on the same key each run their
	producer and the last write wins. Producers are idempotent upstream reads.

	The cache does no type-based isolation; callers keep keys of different
	result types apart with distinct prefixes (``latest:``, ``historical:``).
	"""

	def __init__(self, clock: Callable[[], float] = time.monotonic):
		self._entries: dict[str, _CacheEntry] = {}
		self._clock = clock

	async def get_or_create(self, key: str, ttl: timedelta, producer: Callable[[], Awaitable[T]]) -> T:
		entry = self._entries.get(key)
		now = self._clock()

		if entry is not None:
			if entry.expires_at > now:
				logger.debug('Cache HIT for %s', key)
				return entry.value
			self._entries.pop(key, None)

		logger.debug('Cache MISS for %s', key)
		value = await producer()

		now = self._clock()
		self.prune_expired(now)
		self._entries[key] = _CacheEntry(value=value, expires_at=now + ttl.total_seconds())
		return value

	def prune_expired(self, now: float | None = None) -> int:
		"""Remove every expired entry and return how many were removed."""
		now = self._clock() if now is None else now
		expired = [key for key, entry in self._entries.items() if entry.expires_at <= now]
		for key in expired:
			del self._entries[key]

		if expired:
			logger.debug('Cache pruned %d expired entries', len(expired))
		return len(expired)

	def __len__(self) -> int:
		return len(self._entries)
