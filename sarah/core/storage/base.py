# (c) Copyright Datacraft, 2026
"""Last-scan artifact store interface."""
import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from sarah.core.types import PNG_CONTENT_TYPE


@dataclass(frozen=True)
class ScanArtifact:
	"""Metadata about an encoded scan."""
	filename: str
	width: int
	height: int
	size: int
	created_at: datetime
	content_type: str = PNG_CONTENT_TYPE
	location: Path | None = None


def scan_filename(moment: datetime) -> str:
	return moment.strftime('scan-%Y%m%d%H%M%S.png')


class ArtifactStore(ABC):
	"""
	Holds the most recent scan.

	The slot is either empty or holds one complete artifact; ``save``
	replaces it in a single step under the store lock.
	"""

	def __init__(self):
		self._lock = asyncio.Lock()

	@abstractmethod
	async def save(self, data: bytes, *, width: int, height: int) -> ScanArtifact:
		"""Install encoded bytes as the new last artifact.

		Args:
			data: Encoded image
			width: Image width in pixels
			height: Image height in pixels

		Returns:
			Metadata of the stored artifact
		"""
		...

	@abstractmethod
	async def last(self) -> ScanArtifact | None:
		"""Metadata of the last artifact, or None before the first scan."""
		...

	@abstractmethod
	async def read_last(self) -> tuple[ScanArtifact, bytes] | None:
		"""Metadata and bytes of the last artifact, read together.

		Returns:
			None before the first scan
		"""
		...


class StorageError(Exception):
	"""Artifact store operation error."""

	def __init__(self, message: str, cause: Exception | None = None):
		self.cause = cause
		super().__init__(message)
