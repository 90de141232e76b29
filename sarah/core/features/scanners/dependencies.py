# (c) Copyright Datacraft, 2026
"""Request-scoped access to the scan pipeline owned by the app."""
from fastapi import Request

from sarah.core.scanner.orchestrator import ScanOrchestrator
from sarah.core.storage.base import ArtifactStore


def get_orchestrator(request: Request) -> ScanOrchestrator:
	return request.app.state.orchestrator


def get_artifact_store(request: Request) -> ArtifactStore:
	return request.app.state.orchestrator.store
