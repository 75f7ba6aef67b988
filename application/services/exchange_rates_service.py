from datetime import date, timedelta

from application.dto import HistoricalRatePointDto, LatestRatesDto
from domain.models.currency import CurrencyCode, DateRange
from domain.models.paging import PagedResult, PageRequest
from domain.models.rates import HistoricalRatesResult, LatestRatesResult
from infrastructure.cache.memory_cache import MemoryRateCache
from infrastructure.providers.factory import ProviderFactory

DATE_FORMAT = '%Y-%m-%d'


class ExchangeRatesService:
	LATEST_TTL = timedelta(minutes=5)
	HISTORICAL_TTL = timedelta(minutes=30)

	def __init__(self, provider_factory: ProviderFactory, cache: MemoryRateCache):
		self.provider_factory = provider_factory
		self.cache = cache

	async def get_latest(self, base_currency: str) -> LatestRatesDto:
		# The conversion exclusion list does not apply to lookups.
		base = CurrencyCode(base_currency)

		result: LatestRatesResult = await self.cache.get_or_create(
			f'latest:{base.value}',
			self.LATEST_TTL,
			lambda: self.provider_factory.get_provider().get_latest_rates(base),
		)

		return LatestRatesDto(
			base_currency=result.base_currency.value,
			date=result.as_of,
			rates={code.value: rate for code, rate in result.rates.items()},
		)

	async def get_historical(
		self,
		base_currency: str,
		start: date,
		end: date,
		page: int,
		page_size: int,
	) -> PagedResult[HistoricalRatePointDto]:
		base = CurrencyCode(base_currency)
		date_range = DateRange.create(start, end)
		page_request = PageRequest.create(page, page_size)

		cache_key = (
			f'historical:{base.value}:{date_range.start:{DATE_FORMAT}}:{date_range.end:{DATE_FORMAT}}'
		)
		result: HistoricalRatesResult = await self.cache.get_or_create(
			cache_key,
			self.HISTORICAL_TTL,
			lambda: self.provider_factory.get_provider().get_historical_rates(base, date_range),
		)

		# Provider order is not guaranteed.
		ordered = sorted(result.points, key=lambda point: point.date)
		offset = page_request.skip()
		page_points = ordered[offset : offset + page_request.page_size]

		items = [
			HistoricalRatePointDto(
				date=point.date,
				rates={code.value: rate for code, rate in point.rates.items()},
			)
			for point in page_points
		]

		return PagedResult(
			items=items,
			page_number=page_request.page_number,
			page_size=page_request.page_size,
			total_items=len(result.points),
		)
