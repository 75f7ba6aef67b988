from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, status

from api.dependencies import get_circuit_breaker
from api.schemas import HealthResponse, ProviderHealth
from infrastructure.resilience.circuit_breaker import CircuitBreaker, CircuitBreakerState

router = APIRouter(prefix='/api/v1', tags=['health'])


@router.get(
	'/health',
	response_model=HealthResponse,
	status_code=status.HTTP_200_OK,
	summary='Service health',
)
async def health_check(
	circuit_breaker: Annotated[CircuitBreaker, Depends(get_circuit_breaker)],
) -> HealthResponse:
	"""Reports degraded while the provider circuit is not closed."""
	circuit_status = circuit_breaker.get_status()
	is_closed = circuit_status['state'] == CircuitBreakerState.CLOSED.value
	return HealthResponse(
		status='healthy' if is_closed else 'degraded',
		timestamp=datetime.now(UTC),
		provider=ProviderHealth(
			name=circuit_status['provider_name'],
			circuit_state=circuit_status['state'],
		),
	)
