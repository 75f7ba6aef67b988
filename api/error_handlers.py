import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from domain.exceptions.currency import DomainValidationError, InvalidArgumentError, ProviderError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = 'An unexpected error occurred.'


def _describe_validation_error(exc: RequestValidationError) -> str:
	errors = exc.errors()
	if not errors:
		return 'Invalid request.'
	first = errors[0]
	field = first.get('loc', ('request',))[-1]
	return f"Invalid value for '{field}': {first.get('msg', 'invalid input')}"


def register_exception_handlers(app: FastAPI) -> None:
	@app.exception_handler(DomainValidationError)
	async def domain_validation_handler(request: Request, exc: DomainValidationError):
		return JSONResponse(status_code=400, content={'error': str(exc)})

	@app.exception_handler(InvalidArgumentError)
	async def invalid_argument_handler(request: Request, exc: InvalidArgumentError):
		return JSONResponse(status_code=400, content={'error': str(exc)})

	@app.exception_handler(RequestValidationError)
	async def request_validation_handler(request: Request, exc: RequestValidationError):
		return JSONResponse(status_code=400, content={'error': _describe_validation_error(exc)})

	@app.exception_handler(ProviderError)
	async def provider_error_handler(request: Request, exc: ProviderError):
		logger.error(f'Provider error: {exc}', exc_info=exc)
		return JSONResponse(status_code=500, content={'error': GENERIC_ERROR_MESSAGE})

	@app.exception_handler(Exception)
	async def global_exception_handler(request: Request, exc: Exception):
		logger.error(f'Unhandled exception: {exc}', exc_info=exc)
		return JSONResponse(status_code=500, content={'error': GENERIC_ERROR_MESSAGE})
