from .base import ExchangeRateProvider
from .factory import ProviderFactory, ProviderKey
from .frankfurter import FrankfurterProvider

__all__ = ['ExchangeRateProvider', 'FrankfurterProvider', 'ProviderFactory', 'ProviderKey']
