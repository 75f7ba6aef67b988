from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from api.dependencies import get_exchange_rates_service
from api.schemas import (
	ErrorResponse,
	HistoricalRatePointResponse,
	HistoricalRatesResponse,
	LatestRatesResponse,
)
from application.services import ExchangeRatesService
from domain.models.currency import CurrencyCode

router = APIRouter(prefix='/api/v1/rates', tags=['rates'])

ERROR_RESPONSES = {
	400: {'model': ErrorResponse, 'description': 'Invalid parameters'},
	500: {'model': ErrorResponse, 'description': 'Upstream provider failure'},
}


@router.get(
	'/latest',
	response_model=LatestRatesResponse,
	status_code=status.HTTP_200_OK,
	responses=ERROR_RESPONSES,
	summary='Get latest exchange rates',
)
async def get_latest_rates(
	base_currency: Annotated[str, Query(alias='baseCurrency', description='Base currency code')],
	service: Annotated[ExchangeRatesService, Depends(get_exchange_rates_service)],
) -> LatestRatesResponse:
	result = await service.get_latest(base_currency)
	return LatestRatesResponse(
		base_currency=result.base_currency,
		as_of=result.date,
		rates=result.rates,
	)


@router.get(
	'/historical',
	response_model=HistoricalRatesResponse,
	status_code=status.HTTP_200_OK,
	responses=ERROR_RESPONSES,
	summary='Get historical exchange rates',
	description='Daily rates for a date range, ordered by date and paginated',
)
async def get_historical_rates(
	base_currency: Annotated[str, Query(alias='baseCurrency', description='Base currency code')],
	start: Annotated[date, Query(description='First day, yyyy-MM-dd')],
	end: Annotated[date, Query(description='Last day, yyyy-MM-dd')],
	service: Annotated[ExchangeRatesService, Depends(get_exchange_rates_service)],
	page: Annotated[int, Query()] = 1,
	page_size: Annotated[int, Query(alias='pageSize')] = 30,
) -> HistoricalRatesResponse:
	result = await service.get_historical(base_currency, start, end, page, page_size)

	return HistoricalRatesResponse(
		base_currency=CurrencyCode(base_currency).value,
		start_date=start,
		end_date=end,
		rates=[
			HistoricalRatePointResponse(point_date=item.date, rates=item.rates)
			for item in result.items
		],
		page=result.page_number,
		page_size=result.page_size,
		total_items=result.total_items,
		total_pages=result.total_pages,
	)
