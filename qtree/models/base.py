"""
Base models for the quadtree compression API.
These models define common fields shared by compression and
decompression responses.
"""
from pydantic import BaseModel, Field


class BaseMetrics(BaseModel):
    """Base class for performance and resource metrics"""
    cpu_usage: float = Field(..., description="CPU usage during operation (%)")
    memory_usage: float = Field(..., description="Memory usage during operation (%)")


class BaseCompressionResponse(BaseMetrics):
    """Base class for compression operation responses"""
    file_id: str = Field(..., description="Unique identifier for the file")
    dim: int = Field(..., description="Square dimension of the image")
    raw_size: int = Field(..., description="Number of pixels in the raw image")
    compressed_size: int = Field(
        ..., description="Number of values in the compressed file, header included"
    )
    compression_ratio: float = Field(
        ..., description="Compression ratio (raw_size / compressed_size)"
    )
    space_savings_percent: float = Field(..., description="Percentage of values saved")
    compression_time: float = Field(
        ..., description="Time taken for compression operation in seconds"
    )


class BaseDecompressionResponse(BaseMetrics):
    """Base class for decompression operation responses"""
    file_id: str = Field(..., description="Unique identifier for the file")
    dim: int = Field(..., description="Square dimension of the image")
    raw_size: int = Field(..., description="Number of pixels in the decompressed image")
    compressed_size: int = Field(
        ..., description="Number of values consumed from the compressed file, header included"
    )
    decompression_time: float = Field(
        ..., description="Time taken for decompression operation in seconds"
    )
