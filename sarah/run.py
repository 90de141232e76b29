#!/usr/bin/env python3
# (c) Copyright Datacraft, 2026
"""Entry point for the sarah scan server."""
import argparse
import os

import uvicorn

from sarah.core.config import get_settings


def parse_args(argv=None):
	parser = argparse.ArgumentParser(description="HTTP API for document scanners")
	parser.add_argument("--host", default=None, help="Host to bind to")
	parser.add_argument("--port", type=int, default=None, help="The api listens on this port")
	parser.add_argument("--path", default=None, help="The path scans are saved to")
	parser.add_argument("--tls-cert", default=None, help="TLS certificate file")
	parser.add_argument("--tls-key", default=None, help="TLS private key file")
	parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
	return parser.parse_args(argv)


def main(argv=None):
	args = parse_args(argv)

	overrides = {
		"SARAH_HOST": args.host,
		"SARAH_PORT": args.port,
		"SARAH_SCAN_PATH": args.path,
		"SARAH_TLS_CERT": args.tls_cert,
		"SARAH_TLS_KEY": args.tls_key,
	}
	for name, value in overrides.items():
		if value is not None:
			os.environ[name] = str(value)

	settings = get_settings()

	uvicorn.run(
		"sarah.app:create_app",
		factory=True,
		host=settings.host,
		port=settings.port,
		reload=args.reload,
		ssl_certfile=str(settings.tls_cert) if settings.tls_cert else None,
		ssl_keyfile=str(settings.tls_key) if settings.tls_key else None,
	)


if __name__ == "__main__":
	main()
