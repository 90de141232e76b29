# (c) Copyright Datacraft, 2026
"""Artifact store factory."""
from sarah.core.config.settings import Settings, get_settings
from sarah.core.types import StorageBackend

from .base import ArtifactStore


def get_artifact_store(settings: Settings | None = None) -> ArtifactStore:
	"""Create the artifact store selected in settings.

	Args:
		settings: Application settings (uses the cached settings if None)

	Returns:
		A fresh, empty artifact store
	"""
	if settings is None:
		settings = get_settings()

	if settings.storage_backend == StorageBackend.LOCAL:
		from .local import LocalArtifactStore
		return LocalArtifactStore(base_path=settings.scan_path)

	elif settings.storage_backend == StorageBackend.MEMORY:
		from .memory import MemoryArtifactStore
		return MemoryArtifactStore()

	else:
		raise ValueError(f"Unknown storage backend: {settings.storage_backend}")
