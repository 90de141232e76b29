# (c) Copyright Datacraft, 2026
"""SANE device backend for Linux/macOS."""
import logging
from contextlib import contextmanager
from typing import Any

from PIL import Image

from .base import Device, DeviceBackend, DeviceHandle, DeviceOption, OptionKind
from .errors import EnumerationError, ErrorKind, ScanError

logger = logging.getLogger(__name__)


# sane_strstatus() texts as reported by python-sane
SANE_STATUS_KINDS = {
	'operation not supported': ErrorKind.UNSUPPORTED,
	'operation was cancelled': ErrorKind.CANCELLED,
	'operation was canceled': ErrorKind.CANCELLED,
	'device busy': ErrorKind.DEVICE_BUSY,
	'invalid argument': ErrorKind.INVALID_PARAMETERS,
	'document feeder jammed': ErrorKind.JAMMED,
	'document feeder out of documents': ErrorKind.NO_DOCUMENTS,
	'scanner cover is open': ErrorKind.COVER_OPEN,
	'error during device i/o': ErrorKind.IO_ERROR,
	'out of memory': ErrorKind.NO_MEMORY,
	'access to resource has been denied': ErrorKind.ACCESS_DENIED,
}

SANE_UNITS = {
	0: 'none',
	1: 'pixel',
	2: 'bit',
	3: 'mm',
	4: 'dpi',
	5: 'percent',
	6: 'microsecond',
}


def sane_error_kind(message: str) -> ErrorKind:
	"""Error kind for a SANE status text."""
	text = message.strip().rstrip('.').lower()
	if text in SANE_STATUS_KINDS:
		return SANE_STATUS_KINDS[text]
	for status, kind in SANE_STATUS_KINDS.items():
		if status in text:
			return kind
	return ErrorKind.UNKNOWN


def _import_sane():
	try:
		import sane
	except ImportError:
		raise RuntimeError("python-sane not installed")
	return sane


@contextmanager
def _driver_errors(action: str):
	"""Translate python-sane failures into ScanError."""
	sane = _import_sane()
	try:
		yield
	except sane._sane.error as e:
		message = str(e)
		raise ScanError(f"{action}: {message}", sane_error_kind(message)) from e
	except (AttributeError, TypeError, ValueError) as e:
		# python-sane rejects inactive options and mistyped values this way
		raise ScanError(f"{action}: {e}", ErrorKind.INVALID_PARAMETERS) from e


class SANEDeviceHandle(DeviceHandle):
	"""An open SANE device."""

	def __init__(self, device_name: str, device):
		"""
		Args:
			device_name: SANE device identifier (e.g., 'genesys:libusb:001:004')
			device: python-sane SaneDev returned by sane.open()
		"""
		self._device_name = device_name
		self._device = device
		self._options: list[DeviceOption] | None = None

	@property
	def name(self) -> str:
		return self._device_name

	def options(self) -> list[DeviceOption]:
		if self._options is None:
			sane = _import_sane()
			kinds = {
				sane.TYPE_BOOL: OptionKind.BOOL,
				sane.TYPE_INT: OptionKind.INT,
				sane.TYPE_FIXED: OptionKind.REAL,
				sane.TYPE_STRING: OptionKind.STRING,
			}
			options = []
			for opt in sorted(self._device.opt.values(), key=lambda o: o.index):
				# buttons and groups carry no value
				if opt.type not in kinds or not opt.name:
					continue
				options.append(DeviceOption(
					name=opt.name,
					kind=kinds[opt.type],
					settable=bool(opt.is_settable()),
					title=opt.title or '',
					description=opt.desc or '',
					unit=SANE_UNITS.get(opt.unit, 'none'),
					active=bool(opt.is_active()),
					constraint=opt.constraint,
				))
			self._options = options
		return self._options

	def set_option(self, name: str, value: Any) -> None:
		with _driver_errors(f"Could not set {name}"):
			setattr(self._device, name.replace('-', '_'), value)

	def acquire(self) -> Image.Image:
		with _driver_errors(f"Scan on {self._device_name} failed"):
			self._device.start()
			return self._device.snap()

	def close(self) -> None:
		if self._device is None:
			return
		try:
			self._device.close()
			logger.info(f"SANE device closed: {self._device_name}")
		finally:
			self._device = None


class SANEBackend(DeviceBackend):
	"""
	SANE (Scanner Access Now Easy) backend.

	Requires python-sane package and SANE libraries.
	"""

	name = 'sane'

	def __init__(self, local_only: bool = False):
		self.local_only = local_only
		self._initialized = False

	def init(self) -> None:
		sane = _import_sane()
		version = sane.init()
		self._initialized = True
		logger.info(f"SANE initialized: {version}")

	def exit(self) -> None:
		if not self._initialized:
			return
		_import_sane().exit()
		self._initialized = False
		logger.info("SANE exited")

	def _ensure_initialized(self):
		if not self._initialized:
			self.init()

	def devices(self) -> list[Device]:
		self._ensure_initialized()
		sane = _import_sane()
		try:
			found = sane.get_devices(localOnly=self.local_only)
		except sane._sane.error as e:
			raise EnumerationError(f"Could not list devices: {e}") from e

		# device format: (name, vendor, model, type)
		return [
			Device(name=name, vendor=vendor, model=model, type=device_type)
			for name, vendor, model, device_type in found
		]

	def open(self, name: str) -> SANEDeviceHandle:
		self._ensure_initialized()
		sane = _import_sane()
		with _driver_errors(f"Failed to open SANE device {name}"):
			device = sane.open(name)
		logger.info(f"SANE device opened: {name}")
		return SANEDeviceHandle(name, device)
