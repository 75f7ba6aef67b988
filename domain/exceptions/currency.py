class CurrencyException(Exception):
	pass


class InvalidArgumentError(CurrencyException, ValueError):
	pass


class ArgumentOutOfRangeError(InvalidArgumentError):
	def __init__(self, param_name: str):
		self.param_name = param_name
		super().__init__(f'{param_name} must be greater than zero.')


class DomainValidationError(CurrencyException, ValueError):
	pass


class ProviderError(CurrencyException):
	pass


class CircuitBreakerError(ProviderError):
	"""Raised when the circuit breaker is open and blocking calls"""

	def __init__(self, provider_name: str, retry_after_seconds: float):
		self.provider_name = provider_name
		self.retry_after_seconds = retry_after_seconds
		super().__init__(
			f'Circuit breaker OPEN for {provider_name} (retry in {retry_after_seconds:.1f}s)'
		)
