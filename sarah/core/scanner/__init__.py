# (c) Copyright Datacraft, 2026
"""Scanner device integration and scan pipeline."""
from .base import Device, DeviceBackend, DeviceHandle, DeviceOption, OptionKind
from .errors import (
	ClassifiedError,
	CoercionError,
	DeviceNotFoundError,
	EnumerationError,
	ErrorKind,
	FaultClass,
	ScanError,
	UnknownOptionError,
	classify,
)
from .options import OptionValue, ValueTag, apply_options, coerce
from .orchestrator import DeviceLocks, ScanOrchestrator, ScanRequest
from .resolver import DeviceResolver
from .sane import SANEBackend

__all__ = [
	'Device',
	'DeviceBackend',
	'DeviceHandle',
	'DeviceOption',
	'OptionKind',
	'ClassifiedError',
	'CoercionError',
	'DeviceNotFoundError',
	'EnumerationError',
	'ErrorKind',
	'FaultClass',
	'ScanError',
	'UnknownOptionError',
	'classify',
	'OptionValue',
	'ValueTag',
	'apply_options',
	'coerce',
	'DeviceLocks',
	'ScanOrchestrator',
	'ScanRequest',
	'DeviceResolver',
	'SANEBackend',
]
