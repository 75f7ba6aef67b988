from datetime import date, datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

# Rates and amounts go over the wire as JSON numbers, as the browser client expects.
JsonDecimal = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used='json')]


class ConversionResponse(BaseModel):
	model_config = ConfigDict(
		populate_by_name=True,
		json_schema_extra={
			'example': {
				'amount': 100.00,
				'from': 'USD',
				'to': 'EUR',
				'convertedAmount': 85.50,
				'rate': 0.8550,
				'date': '2025-09-27',
			}
		},
	)

	amount: JsonDecimal = Field(..., description='Original amount requested')
	from_currency: str = Field(..., alias='from', description='Source currency code')
	to_currency: str = Field(..., alias='to', description='Target currency code')
	converted_amount: JsonDecimal = Field(..., alias='convertedAmount', description='Converted amount')
	rate: JsonDecimal = Field(..., description='Exchange rate used for conversion')
	as_of: date = Field(..., alias='date', description='Date the rate applies to')


class LatestRatesResponse(BaseModel):
	model_config = ConfigDict(
		populate_by_name=True,
		json_schema_extra={
			'example': {
				'baseCurrency': 'EUR',
				'date': '2025-09-27',
				'rates': {'USD': 1.1, 'GBP': 0.85},
			}
		},
	)

	base_currency: str = Field(..., alias='baseCurrency', description='Base currency code')
	as_of: date = Field(..., alias='date', description='Date the rates apply to')
	rates: dict[str, JsonDecimal] = Field(..., description='Rate per target currency')


class HistoricalRatePointResponse(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	point_date: date = Field(..., alias='date')
	rates: dict[str, JsonDecimal]


class HistoricalRatesResponse(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	base_currency: str = Field(..., alias='baseCurrency', description='Base currency code')
	start_date: date = Field(..., alias='startDate')
	end_date: date = Field(..., alias='endDate')
	rates: list[HistoricalRatePointResponse] = Field(..., description='Rates ordered by date')
	page: int
	page_size: int = Field(..., alias='pageSize')
	total_items: int = Field(..., alias='totalItems')
	total_pages: int = Field(..., alias='totalPages')


class ProviderHealth(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	name: str
	circuit_state: str = Field(..., alias='circuitState')


class HealthResponse(BaseModel):
	status: str = Field(..., description='healthy when the provider circuit is closed, degraded otherwise')
	timestamp: datetime
	provider: ProviderHealth


class ErrorResponse(BaseModel):
	error: str = Field(..., description='Human-readable error message')
