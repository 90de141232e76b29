# (c) Copyright Datacraft, 2026
"""Resolve a user supplied device name to an open handle."""
import logging

from .base import DeviceBackend, DeviceHandle
from .errors import DeviceNotFoundError, ScanError

logger = logging.getLogger(__name__)


class DeviceResolver:
	"""
	Opens devices by exact name, falling back to a substring match over
	the enumerated devices.
	"""

	def __init__(self, backend: DeviceBackend):
		self.backend = backend

	def resolve(self, name: str) -> DeviceHandle:
		"""
		Open the device addressed by ``name``.

		Raises:
			DeviceNotFoundError: no enumerated device contains ``name``
			EnumerationError: the fallback enumeration failed
		"""
		if not name:
			raise DeviceNotFoundError(name)

		try:
			return self.backend.open(name)
		except ScanError as e:
			logger.debug(f"Direct open of {name!r} failed ({e}), trying substring match")

		for device in self.backend.devices():
			if name in device.name:
				logger.info(f"Resolved {name!r} to {device.name}")
				return self.backend.open(device.name)

		raise DeviceNotFoundError(name)

	def identify(self, name: str) -> str:
		"""
		Name of the enumerated device ``name`` refers to.

		An exact match wins over a substring match. Names that match no
		enumerated device, or that cannot be checked because enumeration
		failed, are returned unchanged.
		"""
		if not name:
			return name

		try:
			names = [device.name for device in self.backend.devices()]
		except ScanError as e:
			logger.debug(f"Cannot identify {name!r}: {e}")
			return name

		if name in names:
			return name
		for device_name in names:
			if name in device_name:
				return device_name
		return name
