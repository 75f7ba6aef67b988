import logging
import time

import httpx

from infrastructure.http.correlation import CORRELATION_HEADER, get_correlation_id

logger = logging.getLogger(__name__)


class CorrelationLoggingTransport(httpx.AsyncBaseTransport):
	"""Outbound transport decorator.

	Forwards the current correlation id upstream and logs every request
	with its status and elapsed time. Failures are logged and re-raised.
	"""

	def __init__(self, inner: httpx.AsyncBaseTransport | None = None):
		self._inner = inner or httpx.AsyncHTTPTransport()

	async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
		correlation_id = get_correlation_id()
		if correlation_id and CORRELATION_HEADER not in request.headers:
			request.headers[CORRELATION_HEADER] = correlation_id

		start_time = time.perf_counter()
		try:
			response = await self._inner.handle_async_request(request)
		except Exception:
			elapsed_ms = (time.perf_counter() - start_time) * 1000
			logger.warning(
				'Outbound HTTP call failed %s %s in %.0fms',
				request.method,
				request.url,
				elapsed_ms,
				exc_info=True,
			)
			raise

		elapsed_ms = (time.perf_counter() - start_time) * 1000
		logger.info(
			'Outbound HTTP call completed %s %s %d in %.0fms',
			request.method,
			request.url,
			response.status_code,
			elapsed_ms,
		)
		return response

	async def aclose(self) -> None:
		await self._inner.aclose()
