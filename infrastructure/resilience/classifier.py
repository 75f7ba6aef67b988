from dataclasses import dataclass
from http import HTTPStatus

import httpx

TRANSIENT_CLIENT_STATUSES = frozenset({HTTPStatus.REQUEST_TIMEOUT, HTTPStatus.TOO_MANY_REQUESTS})


@dataclass(frozen=True)
class Outcome:
	"""Result of a single upstream attempt: a response, an exception, or neither."""

	result: httpx.Response | None = None
	exception: BaseException | None = None


def is_transient(outcome: Outcome) -> bool:
	"""Whether an attempt should be retried and counted as a breaker failure.

	Exceptions, missing responses, 5xx, 408 and 429 are transient. Every other
	status (2xx, 3xx and the remaining 4xx) is not.
	"""
	if outcome.exception is not None:
		return True

	response = outcome.result
	if response is None:
		return True

	if response.status_code >= 500:
		return True

	return response.status_code in TRANSIENT_CLIENT_STATUSES
