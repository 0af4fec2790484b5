"""Chunked container, image header, metadata, HDR and progressive helpers for the WK image format."""

__version__ = "3.1.1"