import logging
from collections.abc import Mapping
from enum import StrEnum

from infrastructure.providers.base import ExchangeRateProvider

logger = logging.getLogger(__name__)


class ProviderKey(StrEnum):
	FRANKFURTER = 'frankfurter'


class ProviderFactory:
	"""Resolves the single active provider from the configured key.

	Resolution happens once, at construction; an unknown or unregistered
	key is a configuration error and fails startup.
	"""

	def __init__(self, providers: Mapping[ProviderKey, ExchangeRateProvider], active_key: str):
		try:
			key = ProviderKey(active_key.strip().lower())
		except ValueError as e:
			raise RuntimeError(f'Unknown exchange rate provider key: {active_key!r}') from e

		if key not in providers:
			raise RuntimeError(f'No exchange rate provider registered for key: {key.value!r}')

		self.active_key = key
		self.providers = dict(providers)
		self._provider = providers[key]
		logger.info('Active exchange rate provider: %s', key.value)

	def get_provider(self) -> ExchangeRateProvider:
		return self._provider
