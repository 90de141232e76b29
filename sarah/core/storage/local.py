# (c) Copyright Datacraft, 2026
"""Local filesystem artifact store."""
import logging
from datetime import datetime
from pathlib import Path

import aiofiles
import aiofiles.os
import aiofiles.tempfile

from .base import ArtifactStore, ScanArtifact, StorageError, scan_filename

logger = logging.getLogger(__name__)


class LocalArtifactStore(ArtifactStore):
	"""Writes the last scan below a directory, keeping no history."""

	def __init__(self, base_path: str | Path):
		"""Initialize local artifact store.

		Args:
			base_path: Directory scans are written to, created if missing
		"""
		super().__init__()
		self.base_path = Path(base_path)
		self.base_path.mkdir(parents=True, exist_ok=True)
		self._current: ScanArtifact | None = None

	async def save(self, data: bytes, *, width: int, height: int) -> ScanArtifact:
		created_at = datetime.now()
		filename = scan_filename(created_at)
		path = self.base_path / filename

		# every write gets its own temp file; scans in the same second share ``path``
		try:
			async with aiofiles.tempfile.NamedTemporaryFile(
				"wb",
				dir=self.base_path,
				prefix=f".{filename}.",
				suffix=".part",
				delete=False,
			) as f:
				tmp_path = Path(f.name)
				await f.write(data)
		except Exception as e:
			raise StorageError(f"Failed to write {filename}", e) from e

		artifact = ScanArtifact(
			filename=filename,
			width=width,
			height=height,
			size=len(data),
			created_at=created_at,
			location=path,
		)

		async with self._lock:
			previous = self._current
			try:
				await aiofiles.os.replace(tmp_path, path)
			except Exception as e:
				await self._discard(tmp_path)
				raise StorageError(f"Failed to store {path}", e) from e
			self._current = artifact

			if previous is not None and previous.location != path:
				await self._discard(previous.location)

		logger.info(f"Stored scan {path} ({len(data)} bytes)")
		return artifact

	async def _discard(self, path: Path) -> None:
		try:
			await aiofiles.os.remove(path)
		except FileNotFoundError:
			pass

	async def last(self) -> ScanArtifact | None:
		async with self._lock:
			return self._current

	async def read_last(self) -> tuple[ScanArtifact, bytes] | None:
		async with self._lock:
			if self._current is None:
				return None
			try:
				async with aiofiles.open(self._current.location, "rb") as f:
					return self._current, await f.read()
			except Exception as e:
				raise StorageError(f"Failed to read {self._current.location}", e) from e
