# (c) Copyright Datacraft, 2026
"""Last-scan artifact storage."""
from .base import ArtifactStore, ScanArtifact, StorageError
from .factory import get_artifact_store
from .local import LocalArtifactStore
from .memory import MemoryArtifactStore

__all__ = [
	"ArtifactStore",
	"ScanArtifact",
	"StorageError",
	"get_artifact_store",
	"LocalArtifactStore",
	"MemoryArtifactStore",
]
