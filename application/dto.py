from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class ConversionDto:
	amount: Decimal
	from_currency: str
	to_currency: str
	converted_amount: Decimal
	rate: Decimal
	date: date


@dataclass(frozen=True)
class LatestRatesDto:
	base_currency: str
	date: date
	rates: dict[str, Decimal]


@dataclass(frozen=True)
class HistoricalRatePointDto:
	date: date
	rates: dict[str, Decimal]
