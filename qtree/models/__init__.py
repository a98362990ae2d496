"""
Data models for the quadtree compression API.

This module provides Pydantic models for request/response validation and
documentation.
"""
from qtree.models.base import (
    BaseCompressionResponse,
    BaseDecompressionResponse
)

from qtree.models.qt import (
    QTCompressRequest,
    QTDecompressRequest,
    QTCompressionResponse,
    QTDecompressionResponse
)

__all__ = [
    # Base models
    'BaseCompressionResponse',
    'BaseDecompressionResponse',

    # Quadtree models
    'QTCompressRequest',
    'QTDecompressRequest',
    'QTCompressionResponse',
    'QTDecompressionResponse'
]
