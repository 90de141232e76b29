# (c) Copyright Datacraft, 2026
"""Device abstraction used by the scan pipeline."""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any

from PIL import Image

logger = logging.getLogger(__name__)


class OptionKind(str, Enum):
	"""Value kinds a device option can declare."""
	BOOL = 'bool'
	INT = 'int'
	REAL = 'real'
	STRING = 'string'


@dataclass(frozen=True)
class Device:
	"""Enumeration snapshot of a scanning device."""
	name: str
	vendor: str = 'Unknown'
	model: str = 'Unknown'
	type: str = ''


@dataclass(frozen=True)
class DeviceOption:
	"""A configurable scan parameter declared by a device."""
	name: str
	kind: OptionKind
	settable: bool = True
	title: str = ''
	description: str = ''
	unit: str = 'none'
	active: bool = True
	# (min, max, step), a list of allowed values, or None
	constraint: tuple | list | None = None


class DeviceHandle(ABC):
	"""
	An open device.

	Handles are scoped resources: use them as context managers so they
	are closed on every exit path.
	"""

	@property
	@abstractmethod
	def name(self) -> str:
		"""Identifier the device was opened with."""
		pass

	@abstractmethod
	def options(self) -> list[DeviceOption]:
		"""Option declarations of the open device."""
		pass

	@abstractmethod
	def set_option(self, name: str, value: Any) -> None:
		"""
		Assign an already coerced value to an option.

		Raises:
			ScanError: if the driver rejects the value
		"""
		pass

	@abstractmethod
	def acquire(self) -> Image.Image:
		"""
		Scan one frame.

		Raises:
			ScanError: on any device-state failure
		"""
		pass

	@abstractmethod
	def close(self) -> None:
		pass

	def find_option(self, name: str) -> DeviceOption | None:
		for option in self.options():
			if option.name == name:
				return option
		return None

	def __enter__(self):
		return self

	def __exit__(self, *args):
		self.close()

	def __repr__(self):
		return f"{self.__class__.__name__}({self.name})"


class DeviceBackend(ABC):
	"""Driver capability set: enumerate and open devices."""

	name: str = 'unknown'

	def init(self) -> None:
		"""Prepare the driver for use."""
		pass

	def exit(self) -> None:
		"""Release driver-wide resources."""
		pass

	@abstractmethod
	def devices(self) -> list[Device]:
		"""
		Enumerate available devices.

		Raises:
			EnumerationError: if the driver cannot list devices
		"""
		pass

	@abstractmethod
	def open(self, name: str) -> DeviceHandle:
		"""
		Open a device by its exact identifier.

		Raises:
			ScanError: if the device cannot be opened
		"""
		pass
