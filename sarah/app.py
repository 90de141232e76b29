# (c) Copyright Datacraft, 2026
import logging
from contextlib import asynccontextmanager
from logging.config import dictConfig

import yaml
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sarah.core.config import Settings, get_settings
from sarah.core.features.monitoring.router import router as monitoring_router
from sarah.core.features.scanners.router import router as scanners_router
from sarah.core.routers.version import router as version_router
from sarah.core.scanner.base import DeviceBackend
from sarah.core.scanner.orchestrator import ScanOrchestrator
from sarah.core.scanner.sane import SANEBackend
from sarah.core.storage import ArtifactStore, get_artifact_store
from sarah.core.version import __version__

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
	if settings.log_config and settings.log_config.is_file():
		with open(settings.log_config, "r") as stream:
			config = yaml.load(stream, Loader=yaml.FullLoader)
		dictConfig(config)
	else:
		logging.basicConfig(
			level=settings.log_level.upper(),
			format="%(asctime)s %(levelname)s %(name)s: %(message)s",
		)


def create_backend(settings: Settings) -> DeviceBackend:
	if settings.device_backend == 'sane':
		return SANEBackend()
	raise ValueError(f"Unknown device backend: {settings.device_backend}")


@asynccontextmanager
async def lifespan(app: FastAPI):
	"""Initialize the device driver on startup and release it on shutdown."""
	backend = app.state.orchestrator.backend

	logger.info("Starting sarah scan server...")
	backend.init()

	yield

	logger.info("Shutting down sarah scan server...")
	backend.exit()


def create_app(
	settings: Settings | None = None,
	backend: DeviceBackend | None = None,
	store: ArtifactStore | None = None,
) -> FastAPI:
	settings = settings or get_settings()
	configure_logging(settings)

	app = FastAPI(
		title="sarah scan API",
		version=__version__,
		lifespan=lifespan,
	)
	app.state.settings = settings
	app.state.orchestrator = ScanOrchestrator(
		backend=backend or create_backend(settings),
		store=store or get_artifact_store(settings),
	)

	app.add_middleware(
		CORSMiddleware,
		allow_origins=settings.cors_origins,
		allow_methods=["*"],
		allow_headers=["*"],
		expose_headers=[
			"Content-Disposition",
			"Content-Type",
			"Content-Length",
		]
	)

	prefix = settings.api_prefix
	app.include_router(scanners_router, prefix=prefix)
	app.include_router(monitoring_router, prefix=prefix)
	app.include_router(version_router, prefix=prefix)

	return app
