# (c) Copyright Datacraft, 2026
"""Application settings configuration."""
import os
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sarah.core.types import StorageBackend


def _env_files() -> tuple[str, ...]:
	return ('.env', os.environ.get('SARAHRC', '/etc/sarahrc'))


class Settings(BaseSettings):
	host: str = '0.0.0.0'
	port: int = Field(gt=0, lt=65536, default=7575)
	api_prefix: str = ''

	# CORS
	cors_origins: list[str] = Field(default_factory=lambda: ['*'])

	# TLS, both or neither
	tls_cert: Path | None = None
	tls_key: Path | None = None

	# Scan storage
	scan_path: Path = Path('/tmp')
	storage_backend: StorageBackend = StorageBackend.LOCAL

	# Device driver
	device_backend: str = 'sane'

	# Logging
	log_config: Path | None = None
	log_level: str = 'INFO'

	@model_validator(mode='after')
	def check_tls_pair(self) -> 'Settings':
		if (self.tls_cert is None) != (self.tls_key is None):
			raise ValueError('tls_cert and tls_key must be given together')
		return self

	@property
	def tls_enabled(self) -> bool:
		return self.tls_cert is not None

	model_config = SettingsConfigDict(
		env_prefix='sarah_',
		env_file=_env_files(),
		env_file_encoding='utf-8',
		extra='ignore',
	)


_settings: Settings | None = None


def get_settings() -> Settings:
	global _settings
	if _settings is None:
		_settings = Settings()
	return _settings
