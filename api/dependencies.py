import logging
from typing import Annotated

import httpx
from fastapi import Depends

from application.services import ConversionService, ExchangeRatesService
from config.settings import Settings, get_settings
from infrastructure.cache.memory_cache import MemoryRateCache
from infrastructure.http.logging_transport import CorrelationLoggingTransport
from infrastructure.providers import FrankfurterProvider, ProviderFactory, ProviderKey
from infrastructure.resilience.circuit_breaker import CircuitBreaker
from infrastructure.resilience.pipeline import ResiliencePipeline

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	http_client: httpx.AsyncClient | None = None
	circuit_breaker: CircuitBreaker | None = None
	provider_factory: ProviderFactory | None = None
	rate_cache: MemoryRateCache | None = None


deps = AppDependencies()


async def init_dependencies(settings: Settings | None = None) -> None:
	"""Initialize all singleton dependencies. Called at app startup.

	Nothing is published to ``deps`` unless every dependency builds; the
	HTTP client is closed again if a later step fails.
	"""
	logger.info('Initializing dependencies...')
	settings = settings or get_settings()

	http_client = httpx.AsyncClient(
		base_url=settings.FRANKFURTER_BASE_URL,
		transport=CorrelationLoggingTransport(),
		headers={'accept': 'application/json'},
		timeout=httpx.Timeout(settings.RESILIENCE_TIMEOUT_SECONDS),
	)
	try:
		circuit_breaker = CircuitBreaker(
			provider_name=ProviderKey.FRANKFURTER.value,
			sampling_seconds=settings.CIRCUIT_BREAKER_SAMPLING_SECONDS,
			minimum_throughput=settings.CIRCUIT_BREAKER_MINIMUM_THROUGHPUT,
			failure_ratio=settings.CIRCUIT_BREAKER_FAILURE_RATIO,
			break_seconds=settings.CIRCUIT_BREAKER_BREAK_SECONDS,
		)
		pipeline = ResiliencePipeline(
			circuit_breaker=circuit_breaker,
			timeout_seconds=settings.RESILIENCE_TIMEOUT_SECONDS,
			max_retries=settings.RESILIENCE_RETRY_MAX_ATTEMPTS,
			base_delay_seconds=settings.RESILIENCE_RETRY_BASE_DELAY_MS / 1000,
		)
		provider_factory = ProviderFactory(
			providers={
				ProviderKey.FRANKFURTER: FrankfurterProvider(client=http_client, pipeline=pipeline),
			},
			active_key=settings.ACTIVE_PROVIDER,
		)
	except Exception:
		logger.error('Dependency initialization failed', exc_info=True)
		await http_client.aclose()
		raise

	deps.http_client = http_client
	deps.circuit_breaker = circuit_breaker
	deps.provider_factory = provider_factory
	deps.rate_cache = MemoryRateCache()
	logger.info('Dependencies initialized')


async def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')

	if deps.provider_factory:
		for provider in deps.provider_factory.providers.values():
			await provider.close()

	if deps.http_client:
		await deps.http_client.aclose()

	deps.http_client = None
	deps.circuit_breaker = None
	deps.provider_factory = None
	deps.rate_cache = None

	logger.info('Cleanup complete')


def get_provider_factory() -> ProviderFactory:
	if deps.provider_factory is None:
		raise RuntimeError('Provider factory not initialized')
	return deps.provider_factory


def get_rate_cache() -> MemoryRateCache:
	if deps.rate_cache is None:
		raise RuntimeError('Rate cache not initialized')
	return deps.rate_cache


def get_circuit_breaker() -> CircuitBreaker:
	if deps.circuit_breaker is None:
		raise RuntimeError('Circuit breaker not initialized')
	return deps.circuit_breaker


async def get_conversion_service(
	provider_factory: Annotated[ProviderFactory, Depends(get_provider_factory)],
) -> ConversionService:
	return ConversionService(provider_factory=provider_factory)


async def get_exchange_rates_service(
	provider_factory: Annotated[ProviderFactory, Depends(get_provider_factory)],
	cache: Annotated[MemoryRateCache, Depends(get_rate_cache)],
) -> ExchangeRatesService:
	return ExchangeRatesService(provider_factory=provider_factory, cache=cache)
