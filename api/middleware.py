import logging
import time

from fastapi import Request

from infrastructure.http.correlation import (
	CORRELATION_HEADER,
	new_correlation_id,
	reset_correlation_id,
	set_correlation_id,
)

logger = logging.getLogger(__name__)


async def correlation_id_middleware(request: Request, call_next):
	"""Bind the request's correlation id for logs and outbound calls, and echo it back."""
	correlation_id = request.headers.get(CORRELATION_HEADER, '').strip() or new_correlation_id()
	token = set_correlation_id(correlation_id)

	start_time = time.perf_counter()
	try:
		response = await call_next(request)
		response.headers[CORRELATION_HEADER] = correlation_id

		logger.info(
			'%s %s -> %d in %.0fms',
			request.method,
			request.url.path,
			response.status_code,
			(time.perf_counter() - start_time) * 1000,
		)
		return response
	finally:
		reset_correlation_id(token)
