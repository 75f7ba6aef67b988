from .responses import (
	ConversionResponse,
	ErrorResponse,
	HealthResponse,
	HistoricalRatePointResponse,
	HistoricalRatesResponse,
	LatestRatesResponse,
	ProviderHealth,
)

__all__ = [
	'ConversionResponse',
	'ErrorResponse',
	'HealthResponse',
	'HistoricalRatePointResponse',
	'HistoricalRatesResponse',
	'LatestRatesResponse',
	'ProviderHealth',
]
