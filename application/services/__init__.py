from .conversion_service import ConversionService
from .exchange_rates_service import ExchangeRatesService

__all__ = ['ConversionService', 'ExchangeRatesService']
