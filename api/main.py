import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.dependencies import cleanup_dependencies, init_dependencies
from api.error_handlers import register_exception_handlers
from api.middleware import correlation_id_middleware
from api.routes import conversion, health, rates
from config.logging import configure_logging
from config.settings import get_settings
from infrastructure.http.correlation import CORRELATION_HEADER

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
	settings = get_settings()
	configure_logging(settings)
	logger.info('Starting Currency Converter API...')

	await init_dependencies(settings)
	logger.info('Application ready')

	yield

	logger.info('Shutting down...')
	await cleanup_dependencies()


def create_app() -> FastAPI:
	settings = get_settings()

	app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG, lifespan=lifespan)

	app.middleware('http')(correlation_id_middleware)
	app.add_middleware(
		CORSMiddleware,
		allow_origins=settings.CORS_ORIGINS,
		allow_credentials=True,
		allow_methods=['*'],
		allow_headers=['*'],
		expose_headers=[CORRELATION_HEADER],
	)

	app.include_router(conversion.router)
	app.include_router(rates.router)
	app.include_router(health.router)
	register_exception_handlers(app)

	return app


app = create_app()


if __name__ == '__main__':
	import uvicorn

	settings = get_settings()
	uvicorn.run('api.main:app', host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
