# (c) Copyright Datacraft, 2026
"""Shared pytest fixtures."""
import pytest
from fastapi.testclient import TestClient

from sarah.app import create_app
from sarah.core.config import Settings
from sarah.core.scanner.orchestrator import ScanOrchestrator
from sarah.core.storage.memory import MemoryArtifactStore
from sarah.core.tests.fakes import FakeBackend
from sarah.core.types import StorageBackend


@pytest.fixture
def fake_backend() -> FakeBackend:
	return FakeBackend()


@pytest.fixture
def memory_store() -> MemoryArtifactStore:
	return MemoryArtifactStore()


@pytest.fixture
def orchestrator(fake_backend, memory_store) -> ScanOrchestrator:
	return ScanOrchestrator(backend=fake_backend, store=memory_store)


@pytest.fixture
def settings(tmp_path) -> Settings:
	return Settings(
		scan_path=tmp_path,
		storage_backend=StorageBackend.MEMORY,
		cors_origins=["http://localhost:3000"],
	)


@pytest.fixture
def app(settings, fake_backend, memory_store):
	return create_app(settings=settings, backend=fake_backend, store=memory_store)


@pytest.fixture
def api_client(app):
	with TestClient(app) as client:
		yield client
