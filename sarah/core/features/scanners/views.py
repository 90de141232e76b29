# (c) Copyright Datacraft, 2026
"""Scanner API Pydantic schemas."""
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from sarah.core.scanner.base import Device, DeviceOption, OptionKind
from sarah.core.storage.base import ScanArtifact


class ScanRequestBody(BaseModel):
	model_config = ConfigDict(extra='forbid')

	device: str
	# values are tagged and checked against the device's option kinds later
	options: dict[str, Any] = Field(default_factory=dict)


class DeviceResponse(BaseModel):
	name: str
	vendor: str
	model: str
	type: str

	@classmethod
	def from_device(cls, device: Device) -> "DeviceResponse":
		return cls(name=device.name, vendor=device.vendor, model=device.model, type=device.type)


class DeviceOptionResponse(BaseModel):
	name: str
	kind: OptionKind
	settable: bool
	active: bool
	title: str
	description: str
	unit: str
	constraint: tuple[Any, ...] | list[Any] | None = None

	@classmethod
	def from_option(cls, option: DeviceOption) -> "DeviceOptionResponse":
		return cls(
			name=option.name,
			kind=option.kind,
			settable=option.settable,
			active=option.active,
			title=option.title,
			description=option.description,
			unit=option.unit,
			constraint=option.constraint,
		)


class ScanArtifactResponse(BaseModel):
	file: str
	path: str | None = None
	width: int
	height: int
	size: int
	content_type: str
	created_at: datetime

	@classmethod
	def from_artifact(cls, artifact: ScanArtifact) -> "ScanArtifactResponse":
		return cls(
			file=artifact.filename,
			path=str(artifact.location.parent) if artifact.location else None,
			width=artifact.width,
			height=artifact.height,
			size=artifact.size,
			content_type=artifact.content_type,
			created_at=artifact.created_at,
		)
