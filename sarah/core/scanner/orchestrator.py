# (c) Copyright Datacraft, 2026
"""Scan pipeline: resolve, configure, acquire, encode, store."""
import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, TypeVar

from sarah.core.storage.base import ArtifactStore, ScanArtifact

from .base import Device, DeviceBackend, DeviceOption
from .encoding import encode_png
from .options import OptionValue, apply_options
from .resolver import DeviceResolver

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ScanRequest:
	"""A device name plus the option values to apply before scanning."""
	device: str
	options: dict[str, OptionValue] = field(default_factory=dict)

	@classmethod
	def from_raw(cls, device: str, options: dict[str, Any] | None) -> "ScanRequest":
		"""Build a request from decoded JSON, tagging every option value."""
		return cls(
			device=device,
			options={name: OptionValue.of(value) for name, value in (options or {}).items()},
		)


class DeviceLocks:
	"""
	One lock per device, dropped again once nobody holds or waits for it.

	Locks are awaited on the event loop, so requests queued behind a busy
	device do not occupy worker threads.
	"""

	def __init__(self):
		self._locks: dict[str, asyncio.Lock] = {}
		self._users: dict[str, int] = {}

	def __len__(self) -> int:
		return len(self._locks)

	def __contains__(self, name: str) -> bool:
		return name in self._locks

	@asynccontextmanager
	async def hold(self, name: str) -> AsyncIterator[None]:
		lock = self._locks.get(name)
		if lock is None:
			lock = self._locks[name] = asyncio.Lock()
		self._users[name] = self._users.get(name, 0) + 1
		try:
			async with lock:
				yield
		finally:
			self._users[name] -= 1
			if not self._users[name]:
				del self._users[name]
				del self._locks[name]


@dataclass(frozen=True)
class ScanOutcome:
	"""Encoded frame produced by one device run."""
	data: bytes
	width: int
	height: int
	applied: dict[str, Any]


class ScanOrchestrator:
	"""Serializes device access and drives scans end to end."""

	def __init__(
		self,
		backend: DeviceBackend,
		store: ArtifactStore,
		locks: DeviceLocks | None = None,
	):
		self.backend = backend
		self.store = store
		self.resolver = DeviceResolver(backend)
		self.locks = locks or DeviceLocks()

	async def scan(self, request: ScanRequest) -> ScanArtifact:
		"""
		Perform a scan and install the result as the last artifact.

		Raises:
			ScanError: classified driver or request failure
		"""
		outcome = await self._on_device(request.device, self._run_scan, request.options)
		artifact = await self.store.save(
			outcome.data,
			width=outcome.width,
			height=outcome.height,
		)
		logger.info(
			f"Scan on {request.device!r} with {outcome.applied} stored as "
			f"{artifact.filename} ({artifact.width}x{artifact.height})"
		)
		return artifact

	async def list_devices(self) -> list[Device]:
		return await asyncio.to_thread(self.backend.devices)

	async def describe(self, name: str) -> list[DeviceOption]:
		"""Option declarations of the device addressed by ``name``."""
		return await self._on_device(name, self._describe)

	async def _on_device(self, name: str, func: Callable[..., T], *args) -> T:
		"""
		Run ``func(device, *args)`` in a worker thread while holding the
		lock of the device ``name`` refers to.

		If the awaiting request is cancelled the lock stays held until the
		worker thread is done with the device.
		"""
		device = await asyncio.to_thread(self.resolver.identify, name)
		async with self.locks.hold(device):
			work = asyncio.ensure_future(asyncio.to_thread(func, device, *args))
			try:
				return await asyncio.shield(work)
			except asyncio.CancelledError:
				logger.info(f"Request for {device!r} cancelled, waiting for the device to finish")
				await asyncio.wait([work])
				if not work.cancelled() and work.exception() is not None:
					logger.warning(f"Cancelled run on {device!r} failed: {work.exception()}")
				raise

	def _run_scan(self, device: str, options: dict[str, OptionValue]) -> ScanOutcome:
		with self.resolver.resolve(device) as handle:
			applied = apply_options(handle, options)
			logger.debug(f"Acquiring frame from {handle.name}")
			image = handle.acquire()

		data = encode_png(image)
		width, height = image.size
		return ScanOutcome(data=data, width=width, height=height, applied=applied)

	def _describe(self, device: str) -> list[DeviceOption]:
		with self.resolver.resolve(device) as handle:
			return list(handle.options())
