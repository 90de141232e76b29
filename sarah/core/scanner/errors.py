# (c) Copyright Datacraft, 2026
"""Scan error taxonomy and HTTP fault classification."""
import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class FaultClass(str, Enum):
	"""Who is to blame for a failed request."""
	CLIENT = 'client'
	SERVER = 'server'

	@property
	def status_code(self) -> int:
		return 400 if self is FaultClass.CLIENT else 500


class ErrorKind(str, Enum):
	"""Kinds of failure the scan pipeline can report."""
	COERCION = 'coercion'
	UNKNOWN_OPTION = 'unknown_option'
	DEVICE_NOT_FOUND = 'device_not_found'
	DEVICE_BUSY = 'device_busy'
	UNSUPPORTED = 'unsupported'
	CANCELLED = 'cancelled'
	INVALID_PARAMETERS = 'invalid_parameters'
	JAMMED = 'jammed'
	NO_DOCUMENTS = 'no_documents'
	COVER_OPEN = 'cover_open'
	IO_ERROR = 'io_error'
	NO_MEMORY = 'no_memory'
	ACCESS_DENIED = 'access_denied'
	ENUMERATION_FAILED = 'enumeration_failed'
	UNKNOWN = 'unknown'


CLIENT_FAULTS = frozenset({
	ErrorKind.COERCION,
	ErrorKind.UNKNOWN_OPTION,
	ErrorKind.DEVICE_NOT_FOUND,
	ErrorKind.DEVICE_BUSY,
	ErrorKind.UNSUPPORTED,
	ErrorKind.CANCELLED,
	ErrorKind.INVALID_PARAMETERS,
})


class ScanError(Exception):
	"""Base error raised anywhere in the scan pipeline."""

	kind: ErrorKind = ErrorKind.UNKNOWN

	def __init__(self, message: str, kind: ErrorKind | None = None):
		if kind is not None:
			self.kind = kind
		self.message = message
		super().__init__(message)


class CoercionError(ScanError):
	"""Requested value cannot be converted to the option's kind."""
	kind = ErrorKind.COERCION


class UnknownOptionError(ScanError):
	"""Device does not declare the requested option."""
	kind = ErrorKind.UNKNOWN_OPTION

	def __init__(self, name: str):
		self.option = name
		super().__init__(f"no such option {name}")


class DeviceNotFoundError(ScanError):
	"""No enumerated device matches the requested name."""
	kind = ErrorKind.DEVICE_NOT_FOUND

	def __init__(self, name: str):
		self.device = name
		super().__init__(f"no device named {name}")


class EnumerationError(ScanError):
	"""Listing the available devices failed."""
	kind = ErrorKind.ENUMERATION_FAILED


@dataclass(frozen=True)
class ClassifiedError:
	fault: FaultClass
	kind: ErrorKind
	message: str

	@property
	def status_code(self) -> int:
		return self.fault.status_code


def classify(err: BaseException) -> ClassifiedError:
	"""
	Map a pipeline failure to a fault class and message.

	Anything that is not a ScanError is an unclassified failure and is
	blamed on the server. The result is logged before it is returned.
	"""
	if isinstance(err, ScanError):
		kind = err.kind
		message = err.message
	else:
		kind = ErrorKind.UNKNOWN
		message = str(err) or err.__class__.__name__

	fault = FaultClass.CLIENT if kind in CLIENT_FAULTS else FaultClass.SERVER
	classified = ClassifiedError(fault=fault, kind=kind, message=message)

	if fault is FaultClass.CLIENT:
		logger.warning(f"Scan request rejected ({kind.value}): {message}")
	else:
		logger.error(f"Scan failed ({kind.value}): {message}")

	return classified
