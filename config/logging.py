import json
import logging
import sys
import traceback
from datetime import UTC, date, datetime
from decimal import Decimal

from config.settings import Settings
from infrastructure.http.correlation import get_correlation_id

CONSOLE_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)-20s | %(correlation_id)s | %(message)s'

NOISY_LOGGERS = ('httpx', 'httpcore')


class CustomJSONEncoder(json.JSONEncoder):
	def default(self, o):
		if isinstance(o, datetime | date):
			return o.isoformat()
		if isinstance(o, Decimal):
			return str(o)
		return super().default(o)


class CorrelationIdFilter(logging.Filter):
	"""Stamps every record with the correlation id of the current request."""

	def filter(self, record: logging.LogRecord) -> bool:
		record.correlation_id = get_correlation_id() or '-'
		return True


class JSONFormatter(logging.Formatter):
	"""
	Custom formatter that outputs structured JSON logs.
	"""

	def format(self, record: logging.LogRecord) -> str:
		log_entry = {
			'timestamp': datetime.now(UTC).isoformat(),
			'level': record.levelname,
			'logger': record.name,
			'message': record.getMessage(),
			'module': record.module,
			'function': record.funcName,
			'line': record.lineno,
			'correlation_id': getattr(record, 'correlation_id', None),
		}

		if record.exc_info:
			log_entry['exception'] = {
				'type': record.exc_info[0].__name__,
				'message': str(record.exc_info[1]),
				'traceback': traceback.format_exception(*record.exc_info),
			}

		if hasattr(record, 'extra_data'):
			log_entry['data'] = record.extra_data

		return json.dumps(log_entry, ensure_ascii=False, cls=CustomJSONEncoder)


def configure_logging(settings: Settings) -> None:
	"""Install the stdout handler on the root logger. Call once at startup."""
	root_logger = logging.getLogger()
	root_logger.handlers.clear()
	root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

	handler = logging.StreamHandler(sys.stdout)
	handler.addFilter(CorrelationIdFilter())
	if settings.LOG_JSON:
		handler.setFormatter(JSONFormatter())
	else:
		handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt='%H:%M:%S'))
	root_logger.addHandler(handler)

	for name in NOISY_LOGGERS:
		logging.getLogger(name).setLevel(logging.WARNING)
