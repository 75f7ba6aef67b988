import uuid
from contextvars import ContextVar, Token

CORRELATION_HEADER = 'X-Correlation-ID'

_correlation_id: ContextVar[str | None] = ContextVar('correlation_id', default=None)


def get_correlation_id() -> str | None:
	return _correlation_id.get()


def set_correlation_id(correlation_id: str | None) -> Token:
	return _correlation_id.set(correlation_id)


def reset_correlation_id(token: Token) -> None:
	_correlation_id.reset(token)


def new_correlation_id() -> str:
	return uuid.uuid4().hex
