from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from domain.models.currency import CurrencyCode, DateRange


@dataclass(frozen=True)
class LatestRatesResult:
	base_currency: CurrencyCode
	as_of: date
	rates: dict[CurrencyCode, Decimal]


@dataclass(frozen=True)
class ConversionProviderResult:
	from_currency: CurrencyCode
	to_currency: CurrencyCode
	amount: Decimal
	converted_amount: Decimal
	rate_used: Decimal
	as_of: date


@dataclass(frozen=True)
class HistoricalRatePoint:
	date: date
	rates: dict[CurrencyCode, Decimal]


@dataclass(frozen=True)
class HistoricalRatesResult:
	base_currency: CurrencyCode
	date_range: DateRange
	points: list[HistoricalRatePoint]
