from abc import ABC, abstractmethod
from decimal import Decimal

from domain.models.currency import CurrencyCode, DateRange
from domain.models.rates import ConversionProviderResult, HistoricalRatesResult, LatestRatesResult


class ExchangeRateProvider(ABC):
	"""Upstream source of latest, converted and historical rates.

	Implementations raise ProviderError when the upstream call fails or
	returns an empty or malformed body.
	"""

	@property
	@abstractmethod
	def name(self) -> str: ...

	@abstractmethod
	async def get_latest_rates(self, base_currency: CurrencyCode) -> LatestRatesResult: ...

	@abstractmethod
	async def convert(
		self, amount: Decimal, from_currency: CurrencyCode, to_currency: CurrencyCode
	) -> ConversionProviderResult: ...

	@abstractmethod
	async def get_historical_rates(
		self, base_currency: CurrencyCode, date_range: DateRange
	) -> HistoricalRatesResult: ...

	async def close(self) -> None:
		"""Release any held connections."""
