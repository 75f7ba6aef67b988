from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	# Application
	APP_NAME: str = 'Currency Converter API'
	DEBUG: bool = False
	HOST: str = '0.0.0.0'
	PORT: int = 8000
	CORS_ORIGINS: list[str] = ['http://localhost:5173', 'http://localhost:5174']

	# Logging
	LOG_LEVEL: str = 'INFO'
	LOG_JSON: bool = False

	# Provider
	ACTIVE_PROVIDER: str = 'frankfurter'
	FRANKFURTER_BASE_URL: str = 'https://api.frankfurter.app/'

	# Resilience
	RESILIENCE_TIMEOUT_SECONDS: float = Field(default=10, gt=0)
	RESILIENCE_RETRY_MAX_ATTEMPTS: int = Field(default=3, ge=0)
	RESILIENCE_RETRY_BASE_DELAY_MS: int = Field(default=200, gt=0)

	CIRCUIT_BREAKER_SAMPLING_SECONDS: float = Field(default=30, gt=0)
	CIRCUIT_BREAKER_MINIMUM_THROUGHPUT: int = Field(default=10, gt=0)
	CIRCUIT_BREAKER_FAILURE_RATIO: float = Field(default=0.5, gt=0, le=1)
	CIRCUIT_BREAKER_BREAK_SECONDS: float = Field(default=20, gt=0)

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')


@lru_cache
def get_settings() -> Settings:
	return Settings()
