from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import ClassVar

from domain.exceptions.currency import DomainValidationError, InvalidArgumentError


@dataclass(frozen=True)
class CurrencyCode:
	"""A validated, upper-cased 3-letter ISO 4217 code.

	TRY, PLN, THB and MXN are flagged as excluded. The flag is only enforced
	by conversion requests; rate lookups accept these currencies.
	"""

	value: str

	EXCLUDED: ClassVar[frozenset[str]] = frozenset({'TRY', 'PLN', 'THB', 'MXN'})

	def __post_init__(self):
		if self.value is None or not str(self.value).strip():
			raise InvalidArgumentError('Currency code is required.')

		normalized = str(self.value).strip().upper()
		if len(normalized) != 3 or not (normalized.isascii() and normalized.isalpha()):
			raise InvalidArgumentError('Currency code must be a 3-letter ISO code.')

		object.__setattr__(self, 'value', normalized)

	def is_excluded(self) -> bool:
		return self.value in self.EXCLUDED

	def __str__(self) -> str:
		return self.value


@dataclass(frozen=True)
class Money:
	amount: Decimal
	currency: CurrencyCode


@dataclass(frozen=True)
class DateRange:
	start: date
	end: date

	@classmethod
	def create(cls, start: date, end: date) -> 'DateRange':
		if end < start:
			raise DomainValidationError('End date must be on or after start date.')
		return cls(start=start, end=end)

	def total_days_inclusive(self) -> int:
		return (self.end - self.start).days + 1
