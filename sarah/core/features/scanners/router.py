# (c) Copyright Datacraft, 2026
"""Scanner API endpoints."""
import logging
import time
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from fastapi.responses import JSONResponse

from sarah.core.features.monitoring.metrics import record_scan
from sarah.core.scanner.errors import classify
from sarah.core.scanner.orchestrator import ScanOrchestrator, ScanRequest
from sarah.core.storage.base import ArtifactStore, StorageError

from .dependencies import get_artifact_store, get_orchestrator
from .views import (
	DeviceOptionResponse,
	DeviceResponse,
	ScanArtifactResponse,
	ScanRequestBody,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["scanners"])


@router.post("/scan", response_model=ScanArtifactResponse)
async def scan(
	body: ScanRequestBody,
	orchestrator: Annotated[ScanOrchestrator, Depends(get_orchestrator)],
) -> ScanArtifactResponse:
	"""Scan with the given device options and keep the image as the last scan."""
	started = time.monotonic()
	try:
		request = ScanRequest.from_raw(body.device, body.options)
		artifact = await orchestrator.scan(request)
	except Exception as e:
		classified = classify(e)
		record_scan(classified.fault.value, time.monotonic() - started)
		raise HTTPException(status_code=classified.status_code, detail=classified.message) from e

	record_scan('success', time.monotonic() - started)
	return ScanArtifactResponse.from_artifact(artifact)


@router.get("/list", response_model=list[DeviceResponse])
async def list_devices(
	orchestrator: Annotated[ScanOrchestrator, Depends(get_orchestrator)],
) -> list[DeviceResponse]:
	"""List available scanning devices."""
	try:
		devices = await orchestrator.list_devices()
	except Exception as e:
		classified = classify(e)
		raise HTTPException(status_code=500, detail=classified.message) from e

	if not devices:
		raise HTTPException(status_code=404, detail="No devices found.")

	return [DeviceResponse.from_device(device) for device in devices]


@router.get("/config", response_model=list[DeviceOptionResponse])
async def device_config(
	orchestrator: Annotated[ScanOrchestrator, Depends(get_orchestrator)],
	device: str | None = Query(default=None),
) -> list[DeviceOptionResponse]:
	"""Option declarations of a device."""
	if not device:
		raise HTTPException(status_code=400, detail="No device given")

	try:
		options = await orchestrator.describe(device)
	except Exception as e:
		classified = classify(e)
		raise HTTPException(status_code=400, detail=classified.message) from e

	return [DeviceOptionResponse.from_option(option) for option in options]


@router.get("/", response_model=None)
@router.get("/last", response_model=None)
@router.get("/image", response_model=None)
async def last_scan(
	request: Request,
	store: Annotated[ArtifactStore, Depends(get_artifact_store)],
) -> Response:
	"""
	Return the last scan as a PNG attachment.

	Clients sending ``Accept: application/json`` get the scan's
	metadata instead of its bytes.
	"""
	try:
		if request.headers.get("accept") == "application/json":
			artifact = await store.last()
			if artifact is None:
				raise HTTPException(status_code=404, detail="No scan available.")
			body = ScanArtifactResponse.from_artifact(artifact)
			return JSONResponse(content=body.model_dump(mode="json"))

		last = await store.read_last()
	except StorageError as e:
		logger.error(f"Could not read last scan: {e}")
		raise HTTPException(status_code=500, detail=str(e)) from e

	if last is None:
		raise HTTPException(status_code=404, detail="No scan available.")

	artifact, data = last
	return Response(
		content=data,
		media_type=artifact.content_type,
		headers={"Content-Disposition": f'attachment; filename="{artifact.filename}"'},
	)
