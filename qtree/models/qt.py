"""
Models for quadtree compression operations.
"""
from typing import List, Optional
from pydantic import BaseModel, Field

from qtree.models.base import BaseCompressionResponse, BaseDecompressionResponse


class QTCompressRequest(BaseModel):
    """Request model for compressing raw pixel values sent as JSON"""
    values: List[int] = Field(
        ..., description="Grayscale values (0-255) in row-major order, 2^n x 2^n of them"
    )
    include_tree: bool = Field(
        False, description="Whether to include the preorder tree rendering in the response"
    )


class QTDecompressRequest(BaseModel):
    """Request model for decompressing a linear form sent as JSON"""
    count: int = Field(..., description="Raw pixel count (the header of the compressed file)")
    values: List[int] = Field(..., description="Preorder node values following the header")
    strict: Optional[bool] = Field(
        None, description="Reject values left over after the tree (server default if omitted)"
    )


class QTCompressionResponse(BaseCompressionResponse):
    """Response model for quadtree compression results"""
    verified: bool = Field(..., description="Whether decoding the compressed file reproduced the image")
    download_url: str = Field(..., description="URL to download the compressed file")
    linear: Optional[List[int]] = Field(
        None, description="The compressed form, header first (JSON requests only)"
    )
    tree: Optional[str] = Field(None, description="Preorder rendering of the tree (if requested)")


class QTDecompressionResponse(BaseDecompressionResponse):
    """Response model for quadtree decompression results"""
    raw_download_url: str = Field(..., description="URL to download the raw image as text")
    png_download_url: str = Field(..., description="URL to download the image as PNG")
    rows: Optional[List[List[int]]] = Field(
        None, description="The decompressed image rows (JSON requests only)"
    )
