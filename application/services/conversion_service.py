import logging
from decimal import Decimal

from application.dto import ConversionDto
from domain.models.currency import CurrencyCode
from domain.models.requests import ConversionRequest
from infrastructure.providers.factory import ProviderFactory

logger = logging.getLogger(__name__)


class ConversionService:
	"""Converts amounts through the active provider.

	Conversions are never cached; the amount differs per request.
	"""

	def __init__(self, provider_factory: ProviderFactory):
		self.provider_factory = provider_factory

	async def convert(self, amount: Decimal, from_currency: str, to_currency: str) -> ConversionDto:
		request = ConversionRequest.create(amount, CurrencyCode(from_currency), CurrencyCode(to_currency))

		result = await self.provider_factory.get_provider().convert(
			request.source.amount, request.source.currency, request.target
		)
		logger.debug(
			'Converted %s %s -> %s %s',
			result.amount,
			result.from_currency,
			result.converted_amount,
			result.to_currency,
		)

		return ConversionDto(
			amount=result.amount,
			from_currency=result.from_currency.value,
			to_currency=result.to_currency.value,
			converted_amount=result.converted_amount,
			rate=result.rate_used,
			date=result.as_of,
		)
