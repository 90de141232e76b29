# (c) Copyright Datacraft, 2026
"""Map untyped request values onto a device's declared options."""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .base import DeviceHandle, DeviceOption, OptionKind
from .errors import CoercionError, UnknownOptionError

logger = logging.getLogger(__name__)


class ValueTag(str, Enum):
	BOOL = 'bool'
	INT = 'int'
	REAL = 'real'
	STRING = 'string'


@dataclass(frozen=True)
class OptionValue:
	"""A JSON scalar tagged with the representation the client used."""
	tag: ValueTag
	value: bool | int | float | str

	@classmethod
	def of(cls, raw: Any) -> "OptionValue":
		"""
		Tag a decoded JSON value.

		Raises:
			CoercionError: for null, arrays, objects or anything else
				that is not a boolean, number or string
		"""
		# bool is a subclass of int, check it first
		if isinstance(raw, bool):
			return cls(ValueTag.BOOL, raw)
		if isinstance(raw, int):
			return cls(ValueTag.INT, raw)
		if isinstance(raw, float):
			return cls(ValueTag.REAL, raw)
		if isinstance(raw, str):
			return cls(ValueTag.STRING, raw)
		raise CoercionError(f"unsupported option value {raw!r}")


def coerce(value: OptionValue, option: DeviceOption) -> bool | int | float | str:
	"""
	Convert a tagged value to the option's declared kind.

	Integer options truncate real values toward zero; they never round.

	Raises:
		CoercionError: if the representation does not fit the kind
	"""
	kind = option.kind

	if kind is OptionKind.BOOL and value.tag is ValueTag.BOOL:
		return value.value
	if kind is OptionKind.INT and value.tag in (ValueTag.INT, ValueTag.REAL):
		return int(value.value)
	if kind is OptionKind.REAL and value.tag in (ValueTag.INT, ValueTag.REAL):
		return float(value.value)
	if kind is OptionKind.STRING and value.tag is ValueTag.STRING:
		return value.value

	raise CoercionError(
		f"option {option.name} expects a {kind.value} value, got {value.tag.value} {value.value!r}"
	)


def apply_options(handle: DeviceHandle, requested: dict[str, OptionValue]) -> dict[str, Any]:
	"""
	Apply requested option values to an open device.

	Options that the device declares as not settable are skipped.
	Options applied before a failing one remain applied.

	Returns:
		The coerced values that were assigned, by option name
	"""
	declared = {option.name: option for option in handle.options()}
	applied: dict[str, Any] = {}

	for name, value in requested.items():
		option = declared.get(name)
		if option is None:
			raise UnknownOptionError(name)

		if not option.settable:
			logger.debug(f"Skipping option {name}: not settable on {handle.name}")
			continue

		coerced = coerce(value, option)
		handle.set_option(name, coerced)
		applied[name] = coerced
		logger.debug(f"{handle.name}: {name} = {coerced!r}")

	return applied
