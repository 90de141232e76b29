# (c) Copyright Datacraft, 2026
from typing import Annotated

from fastapi import APIRouter, Depends, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from sarah.core.features.scanners.dependencies import get_orchestrator
from sarah.core.scanner.orchestrator import ScanOrchestrator

router = APIRouter(
	prefix="/monitoring",
	tags=["monitoring"]
)


@router.get("/health")
async def health_check(
	orchestrator: Annotated[ScanOrchestrator, Depends(get_orchestrator)],
):
	last = await orchestrator.store.last()

	return {
		"status": "ok",
		"details": {
			"backend": orchestrator.backend.name,
			"last_scan": last.created_at.isoformat() if last else None,
		}
	}


@router.get("/metrics")
def metrics():
	return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
