from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from api.dependencies import get_conversion_service
from api.schemas import ConversionResponse, ErrorResponse
from application.services import ConversionService

router = APIRouter(prefix='/api/v1', tags=['conversion'])


@router.get(
	'/convert',
	response_model=ConversionResponse,
	status_code=status.HTTP_200_OK,
	responses={
		400: {'model': ErrorResponse, 'description': 'Invalid amount or currency'},
		500: {'model': ErrorResponse, 'description': 'Upstream provider failure'},
	},
	summary='Convert currency amount',
)
async def convert_currency(
	amount: Annotated[Decimal, Query(description='Amount to convert (must be positive)')],
	from_currency: Annotated[str, Query(alias='from', description='Source currency code')],
	to_currency: Annotated[str, Query(alias='to', description='Target currency code')],
	service: Annotated[ConversionService, Depends(get_conversion_service)],
) -> ConversionResponse:
	"""
	Convert an amount using the active provider's latest rate.
	Example: GET /api/v1/convert?amount=100&from=USD&to=EUR
	"""
	result = await service.convert(amount, from_currency, to_currency)
	return ConversionResponse(
		amount=result.amount,
		from_currency=result.from_currency,
		to_currency=result.to_currency,
		converted_amount=result.converted_amount,
		rate=result.rate,
		as_of=result.date,
	)
