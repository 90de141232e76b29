# (c) Copyright Datacraft, 2026
from enum import Enum

PNG_CONTENT_TYPE = 'image/png'


class StorageBackend(str, Enum):
	"""Where the last scan is kept."""
	MEMORY = 'memory'
	LOCAL = 'local'
