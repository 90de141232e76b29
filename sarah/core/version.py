# (c) Copyright Datacraft, 2026
import importlib.metadata

try:
	__version__ = importlib.metadata.version("sarah")
except importlib.metadata.PackageNotFoundError:
	__version__ = "0.0.0"
