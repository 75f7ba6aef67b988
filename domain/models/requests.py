from dataclasses import dataclass
from decimal import Decimal

from domain.exceptions.currency import DomainValidationError
from domain.models.currency import CurrencyCode, Money


@dataclass(frozen=True)
class ConversionRequest:
	"""A conversion of a positive amount between two non-excluded currencies."""

	source: Money
	target: CurrencyCode

	@classmethod
	def create(cls, amount: Decimal, from_currency: CurrencyCode, to_currency: CurrencyCode) -> 'ConversionRequest':
		if amount <= 0:
			raise DomainValidationError('Amount must be greater than zero.')

		if from_currency.is_excluded() or to_currency.is_excluded():
			raise DomainValidationError(
				'Currency conversion is not supported for TRY, PLN, THB, or MXN.'
			)

		return cls(source=Money(amount=amount, currency=from_currency), target=to_currency)
