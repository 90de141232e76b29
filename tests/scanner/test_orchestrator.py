# (c) Copyright Datacraft, 2026
"""Tests for the scan pipeline."""
import asyncio
import io
import time

import pytest
from PIL import Image

from sarah.core.scanner.errors import (
	CoercionError,
	DeviceNotFoundError,
	ErrorKind,
	FaultClass,
	ScanError,
	UnknownOptionError,
	classify,
)
from sarah.core.scanner.orchestrator import ScanOrchestrator, ScanRequest
from sarah.core.storage.memory import MemoryArtifactStore
from sarah.core.tests.fakes import FakeBackend


async def test_genesys_example(fake_backend, memory_store, orchestrator):
	"""Options are applied, one frame is acquired and a PNG is stored."""
	request = ScanRequest.from_raw("genesys", {"resolution": 300, "mode": "Color"})

	artifact = await orchestrator.scan(request)

	device = "genesys:libusb:001:004"
	sets = [call for call in fake_backend.calls if call[0] == "set"]
	assert sorted(sets) == [
		("set", device, "mode", "Color"),
		("set", device, "resolution", 300),
	]
	assert fake_backend.call_names().count("acquire") == 1
	assert fake_backend.call_names()[-1] == "close"
	assert fake_backend.call_names().index("acquire") > max(
		i for i, name in enumerate(fake_backend.call_names()) if name == "set"
	)

	assert artifact.width == 85
	assert artifact.height == 110
	assert artifact.content_type == "image/png"
	assert artifact.filename.startswith("scan-") and artifact.filename.endswith(".png")

	stored, data = await memory_store.read_last()
	assert stored == artifact
	assert data.startswith(b"\x89PNG\r\n\x1a\n")
	assert Image.open(io.BytesIO(data)).size == (85, 110)


async def test_unknown_option_stops_before_acquisition(fake_backend, memory_store, orchestrator):
	request = ScanRequest.from_raw("genesys", {"nonexistent": True})

	with pytest.raises(UnknownOptionError) as exc_info:
		await orchestrator.scan(request)

	assert classify(exc_info.value).fault is FaultClass.CLIENT
	assert "acquire" not in fake_backend.call_names()
	assert await memory_store.last() is None


async def test_handle_released_on_failure(fake_backend, orchestrator):
	"""The device is closed whichever step fails after it was opened."""
	fake_backend.acquire_error = ScanError("Document feeder jammed", ErrorKind.JAMMED)

	with pytest.raises(ScanError):
		await orchestrator.scan(ScanRequest.from_raw("genesys", {"resolution": 150}))

	assert len(fake_backend.handles) == 1
	assert fake_backend.handles[0].closed


async def test_handle_released_on_coercion_error(fake_backend, orchestrator):
	with pytest.raises(CoercionError):
		await orchestrator.scan(ScanRequest.from_raw("genesys", {"resolution": "high"}))

	assert all(handle.closed for handle in fake_backend.handles)


async def test_unresolved_device_opens_nothing(fake_backend, orchestrator):
	with pytest.raises(DeviceNotFoundError):
		await orchestrator.scan(ScanRequest.from_raw("pixma", {}))

	assert fake_backend.handles == []


async def test_non_settable_option_does_not_change_scan(fake_backend, orchestrator):
	artifact = await orchestrator.scan(ScanRequest.from_raw("genesys", {"lamp-off-time": 15}))

	assert artifact.width == 85
	assert not [call for call in fake_backend.calls if call[0] == "set"]
	assert fake_backend.call_names().count("acquire") == 1


async def test_failed_scan_keeps_previous_artifact(fake_backend, memory_store, orchestrator):
	first = await orchestrator.scan(ScanRequest.from_raw("genesys", {}))

	fake_backend.acquire_error = ScanError("Scanner cover is open", ErrorKind.COVER_OPEN)
	with pytest.raises(ScanError):
		await orchestrator.scan(ScanRequest.from_raw("genesys", {}))

	assert await memory_store.last() == first


async def test_concurrent_scans_on_one_device_never_overlap(fake_backend, orchestrator):
	"""Acquisitions against the same device run one after another."""
	fake_backend.acquire_delay = 0.05

	await asyncio.gather(*[
		orchestrator.scan(ScanRequest.from_raw("genesys:libusb:001:004", {"resolution": 75}))
		for _ in range(4)
	])

	assert fake_backend.max_concurrent == 1
	windows = sorted(fake_backend.windows, key=lambda w: w[1])
	assert len(windows) == 4
	for (_, _, end), (_, start, _) in zip(windows, windows[1:]):
		assert end <= start


async def test_aliases_of_one_device_share_its_lock(fake_backend, orchestrator):
	"""A short name and the full identifier of a device are serialized together."""
	fake_backend.acquire_delay = 0.2

	await asyncio.gather(
		orchestrator.scan(ScanRequest.from_raw("genesys", {})),
		orchestrator.scan(ScanRequest.from_raw("genesys:libusb:001:004", {})),
		orchestrator.scan(ScanRequest.from_raw("libusb:001", {})),
	)

	assert len(fake_backend.windows) == 3
	assert {window[0] for window in fake_backend.windows} == {"genesys:libusb:001:004"}
	assert fake_backend.max_concurrent == 1


async def test_scans_on_different_devices_may_run_together(fake_backend, orchestrator):
	fake_backend.acquire_delay = 0.2

	await asyncio.gather(
		orchestrator.scan(ScanRequest.from_raw("genesys:libusb:001:004", {})),
		orchestrator.scan(ScanRequest.from_raw("epson2:net:192.168.1.20", {})),
	)

	assert len(fake_backend.windows) == 2
	assert fake_backend.max_concurrent == 2


async def test_listing_does_not_wait_for_scan(fake_backend, orchestrator):
	fake_backend.acquire_delay = 0.3

	scan_task = asyncio.create_task(orchestrator.scan(ScanRequest.from_raw("genesys", {})))
	await asyncio.sleep(0.05)
	devices = await orchestrator.list_devices()

	assert not scan_task.done()
	assert len(devices) == 2
	await scan_task


async def test_listing_does_not_wait_behind_queued_scans(fake_backend, orchestrator):
	"""Scans waiting for a busy device do not tie up worker threads."""
	fake_backend.acquire_delay = 0.2

	scans = [
		asyncio.create_task(orchestrator.scan(ScanRequest.from_raw("genesys", {})))
		for _ in range(6)
	]
	await asyncio.sleep(0.05)

	started = time.monotonic()
	devices = await orchestrator.list_devices()
	waited = time.monotonic() - started

	assert len(devices) == 2
	assert waited < 0.1
	await asyncio.gather(*scans)
	assert fake_backend.max_concurrent == 1


async def test_cancelled_scan_keeps_device_locked(fake_backend, orchestrator):
	"""A cancelled request holds the device until its acquisition is over."""
	fake_backend.acquire_delay = 0.2

	first = asyncio.create_task(orchestrator.scan(ScanRequest.from_raw("genesys", {})))
	await asyncio.sleep(0.05)
	first.cancel()

	await orchestrator.scan(ScanRequest.from_raw("genesys", {}))

	with pytest.raises(asyncio.CancelledError):
		await first
	assert len(fake_backend.windows) == 2
	assert fake_backend.max_concurrent == 1


async def test_locks_are_dropped_when_idle(orchestrator):
	await orchestrator.scan(ScanRequest.from_raw("genesys", {}))
	for name in ("pixma", "canon", "brother"):
		with pytest.raises(DeviceNotFoundError):
			await orchestrator.scan(ScanRequest.from_raw(name, {}))

	assert len(orchestrator.locks) == 0


async def test_describe_returns_declarations(orchestrator, fake_backend):
	options = await orchestrator.describe("epson2")

	assert [option.name for option in options][:2] == ["resolution", "mode"]
	assert fake_backend.handles[-1].closed


async def test_isolated_stores():
	"""Each orchestrator owns its own last-artifact slot."""
	first = ScanOrchestrator(FakeBackend(image_size=(10, 20)), MemoryArtifactStore())
	second = ScanOrchestrator(FakeBackend(image_size=(30, 40)), MemoryArtifactStore())

	await first.scan(ScanRequest.from_raw("genesys", {}))

	assert (await first.store.last()).width == 10
	assert await second.store.last() is None
