from datetime import date, datetime
from decimal import Decimal, InvalidOperation

import httpx

from domain.exceptions.currency import ProviderError
from domain.models.currency import CurrencyCode, DateRange
from domain.models.rates import (
	ConversionProviderResult,
	HistoricalRatePoint,
	HistoricalRatesResult,
	LatestRatesResult,
)
from infrastructure.providers.base import ExchangeRateProvider
from infrastructure.resilience.pipeline import ResiliencePipeline

DATE_FORMAT = '%Y-%m-%d'

PARSE_ERRORS = (KeyError, TypeError, ValueError, AttributeError, InvalidOperation)


def _parse_date(value: str) -> date:
	return datetime.strptime(value, DATE_FORMAT).date()


def _parse_rates(rates: dict) -> dict[CurrencyCode, Decimal]:
	return {CurrencyCode(code): Decimal(str(rate)) for code, rate in rates.items()}


class FrankfurterProvider(ExchangeRateProvider):
	"""Frankfurter (ECB reference rates) adapter.

	Every request goes through the resilience pipeline when one is given;
	the client is expected to carry the upstream base URL.
	"""

	BASE_URL = 'https://api.frankfurter.app/'

	def __init__(self, client: httpx.AsyncClient | None = None, pipeline: ResiliencePipeline | None = None):
		self._owns_client = client is None
		self._client = client or httpx.AsyncClient(base_url=self.BASE_URL)
		self._pipeline = pipeline

	@property
	def name(self) -> str:
		return 'frankfurter'

	async def _send(self, path: str, params: dict) -> httpx.Response:
		if self._pipeline is None:
			return await self._client.get(path, params=params)
		return await self._pipeline.execute(lambda: self._client.get(path, params=params))

	async def _request(self, path: str, params: dict) -> dict:
		try:
			response = await self._send(path, params)
			response.raise_for_status()
		except httpx.HTTPStatusError as e:
			raise ProviderError(
				f'Frankfurter HTTP error {e.response.status_code}: {e.response.text[:200]}'
			) from e
		except httpx.RequestError as e:
			raise ProviderError(f'Frankfurter request failed: {e.__class__.__name__}') from e
		except TimeoutError as e:
			raise ProviderError('Frankfurter request timed out') from e

		if not response.content or not response.content.strip():
			raise ProviderError('Frankfurter response was empty.')

		try:
			data = response.json()
		except ValueError as e:
			raise ProviderError(f'Frankfurter response parsing error: {str(e)}') from e

		if not data:
			raise ProviderError('Frankfurter response was empty.')
		if not isinstance(data, dict):
			raise ProviderError('Frankfurter response parsing error: expected a JSON object')

		return data

	async def get_latest_rates(self, base_currency: CurrencyCode) -> LatestRatesResult:
		data = await self._request('latest', {'base': base_currency.value})

		try:
			return LatestRatesResult(
				base_currency=CurrencyCode(data['base']),
				as_of=_parse_date(data['date']),
				rates=_parse_rates(data['rates']),
			)
		except PARSE_ERRORS as e:
			raise ProviderError(f'Frankfurter response parsing error: {str(e)}') from e

	async def convert(
		self, amount: Decimal, from_currency: CurrencyCode, to_currency: CurrencyCode
	) -> ConversionProviderResult:
		data = await self._request(
			'latest',
			{'amount': format(amount, 'f'), 'from': from_currency.value, 'to': to_currency.value},
		)

		try:
			rates = data['rates']
			as_of = _parse_date(data['date'])
		except PARSE_ERRORS as e:
			raise ProviderError(f'Frankfurter response parsing error: {str(e)}') from e

		if not isinstance(rates, dict) or to_currency.value not in rates:
			raise ProviderError(
				'Frankfurter response did not include the requested target currency.'
			)

		try:
			converted = Decimal(str(rates[to_currency.value]))
		except InvalidOperation as e:
			raise ProviderError(f'Frankfurter response parsing error: {str(e)}') from e

		# Zero amount yields a zero rate.
		rate_used = converted / amount if amount != 0 else Decimal(0)

		return ConversionProviderResult(
			from_currency=from_currency,
			to_currency=to_currency,
			amount=amount,
			converted_amount=converted,
			rate_used=rate_used,
			as_of=as_of,
		)

	async def get_historical_rates(
		self, base_currency: CurrencyCode, date_range: DateRange
	) -> HistoricalRatesResult:
		path = f'{date_range.start:{DATE_FORMAT}}..{date_range.end:{DATE_FORMAT}}'
		data = await self._request(path, {'base': base_currency.value})

		try:
			points = [
				HistoricalRatePoint(date=_parse_date(day), rates=_parse_rates(rates))
				for day, rates in data['rates'].items()
			]
			return HistoricalRatesResult(
				base_currency=CurrencyCode(data['base']),
				date_range=DateRange(
					start=_parse_date(data['start_date']),
					end=_parse_date(data['end_date']),
				),
				points=points,
			)
		except PARSE_ERRORS as e:
			raise ProviderError(f'Frankfurter response parsing error: {str(e)}') from e

	async def close(self) -> None:
		# An injected client belongs to whoever created it.
		if self._owns_client:
			await self._client.aclose()
