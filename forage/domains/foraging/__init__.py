"""
Foraging Domain
Sample Forager callbacks that consume settled files.
"""
from .jpeg_forager import JPEG_MAGIC, JpegForager, is_jpeg_header

__all__ = ["JPEG_MAGIC", "JpegForager", "is_jpeg_header"]
