# (c) Copyright Datacraft, 2026
"""Image container encoding."""
import io

from PIL import Image


def encode_png(image: Image.Image) -> bytes:
	"""Encode a scanned frame as PNG."""
	output = io.BytesIO()
	image.save(output, format='PNG')
	return output.getvalue()
