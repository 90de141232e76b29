# (c) Copyright Datacraft, 2026
"""In-memory artifact store."""
from datetime import datetime

from .base import ArtifactStore, ScanArtifact, scan_filename


class MemoryArtifactStore(ArtifactStore):
	"""Keeps the last scan in process memory."""

	def __init__(self):
		super().__init__()
		self._slot: tuple[ScanArtifact, bytes] | None = None

	async def save(self, data: bytes, *, width: int, height: int) -> ScanArtifact:
		created_at = datetime.now()
		artifact = ScanArtifact(
			filename=scan_filename(created_at),
			width=width,
			height=height,
			size=len(data),
			created_at=created_at,
		)
		async with self._lock:
			self._slot = (artifact, data)
		return artifact

	async def last(self) -> ScanArtifact | None:
		async with self._lock:
			return self._slot[0] if self._slot else None

	async def read_last(self) -> tuple[ScanArtifact, bytes] | None:
		async with self._lock:
			return self._slot
