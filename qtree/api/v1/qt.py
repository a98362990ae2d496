"""
Quadtree compression API endpoints.

Provides compression of raw text images, image files and JSON pixel
arrays, decompression of compressed (.rit) files and JSON linear forms,
and downloads of the produced files.
"""
import os
import logging
from typing import List

from fastapi import APIRouter, File, UploadFile, HTTPException, Form
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import FileResponse

from qtree import config
from qtree.core.errors import FormatError
from qtree.core.pipeline import compress_to_file, decompress_to_files
from qtree.models.qt import (
    QTCompressRequest,
    QTDecompressRequest,
    QTCompressionResponse,
    QTDecompressionResponse
)
from qtree.core.raster import as_rows
from qtree.utils.file_handling import (
    COMPRESSED_SUFFIX,
    get_temp_filepath,
    image_to_raw,
    parse_int_text,
    schedule_cleanup,
    split_header
)

# Set up logging
logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/v1", tags=["Quadtree Compression v1"])


def _check_size(pixel_count: int) -> None:
    if pixel_count > config.MAX_PIXELS:
        raise HTTPException(
            status_code=413,
            detail=f"Image has {pixel_count} pixels, the limit is {config.MAX_PIXELS}"
        )


def _decode_text(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise FormatError(f"File is not a text file: {e}")


async def _compress(values: List[int], include_tree: bool = False, include_linear: bool = False) -> QTCompressionResponse:
    """Compress pixel values into a new temporary file and build the response"""
    _check_size(len(values))

    file_id = os.path.basename(get_temp_filepath())
    compressed_path = get_temp_filepath(file_id, f"_compressed{COMPRESSED_SUFFIX}")

    tree, result = await run_in_threadpool(compress_to_file, values, compressed_path, file_id=file_id)
    schedule_cleanup(compressed_path, config.CLEANUP_DELAY)

    linear = None
    if include_linear:
        count, node_values = tree.to_linear()
        linear = [count, *node_values]

    return QTCompressionResponse(
        **result,
        download_url=f"/api/v1/download/{file_id}",
        linear=linear,
        tree=tree.render() if include_tree else None
    )


async def _decompress(count: int, values: List[int], strict: bool, include_rows: bool = False) -> QTDecompressionResponse:
    """Decompress a linear form into new temporary files and build the response"""
    _check_size(count)

    file_id = os.path.basename(get_temp_filepath())
    raw_path = get_temp_filepath(file_id, "_decompressed.txt")
    png_path = get_temp_filepath(file_id, "_decompressed.png")

    tree, result = await run_in_threadpool(
        decompress_to_files, count, values, raw_path, png_path, strict=strict, file_id=file_id
    )
    schedule_cleanup(raw_path, config.CLEANUP_DELAY)
    schedule_cleanup(png_path, config.CLEANUP_DELAY)

    return QTDecompressionResponse(
        **result,
        raw_download_url=f"/api/v1/download/raw/{file_id}",
        png_download_url=f"/api/v1/download/png/{file_id}",
        rows=as_rows(tree.image) if include_rows else None
    )


@router.post("/compress", response_model=QTCompressionResponse)
async def compress_raw_file(
    file: UploadFile = File(...),
    include_tree: bool = Form(False)
):
    """
    Compress an uploaded raw image.

    - **file**: ASCII file of grayscale values (0-255), 2^n x 2^n of them
    - **include_tree**: Whether to include the preorder tree rendering

    Returns:
        Compression statistics and file ID for the compressed file
    """
    data = await file.read()
    logger.info(f"Compressing raw image {file.filename} ({len(data)} bytes)")

    values = parse_int_text(_decode_text(data))
    return await _compress(values, include_tree=include_tree)


@router.post("/compress/image", response_model=QTCompressionResponse)
async def compress_image_file(
    file: UploadFile = File(...),
    include_tree: bool = Form(False)
):
    """
    Compress an uploaded image file (PNG, BMP, ...).

    The image is converted to grayscale first; it must be a 2^n x 2^n square.
    """
    data = await file.read()
    logger.info(f"Compressing image {file.filename} ({len(data)} bytes)")

    values = image_to_raw(data)
    return await _compress(values, include_tree=include_tree)


@router.post("/compress/json", response_model=QTCompressionResponse)
async def compress_json(request: QTCompressRequest):
    """
    Compress pixel values sent as JSON.

    Returns:
        Compression statistics, including the compressed form inline
    """
    logger.info(f"Compressing {len(request.values)} values from JSON request")
    return await _compress(request.values, include_tree=request.include_tree, include_linear=True)


@router.post("/decompress", response_model=QTDecompressionResponse)
async def decompress_file(
    file: UploadFile = File(...),
    strict: bool = Form(config.STRICT_DECODE)
):
    """
    Decompress an uploaded compressed (.rit) file.

    - **file**: The compressed file, header line first
    - **strict**: Reject values left over after the tree

    Returns:
        Decompression statistics and download links for the raw and PNG images
    """
    data = await file.read()
    logger.info(f"Decompressing {file.filename} ({len(data)} bytes)")

    count, values = split_header(parse_int_text(_decode_text(data)))
    return await _decompress(count, values, strict)


@router.post("/decompress/json", response_model=QTDecompressionResponse)
async def decompress_json(request: QTDecompressRequest):
    """
    Decompress a linear form sent as JSON.

    Returns:
        Decompression statistics, including the image rows inline
    """
    strict = config.STRICT_DECODE if request.strict is None else request.strict
    logger.info(f"Decompressing {len(request.values)} values from JSON request")
    return await _decompress(request.count, request.values, strict, include_rows=True)


def _serve(path: str, media_type: str, filename: str) -> FileResponse:
    if not os.path.exists(path):
        logger.error(f"File not found: {path}")
        raise HTTPException(status_code=404, detail="File not found")

    logger.info(f"Serving file {path} as {filename} ({media_type})")
    return FileResponse(path, media_type=media_type, filename=filename)


@router.get("/download/{file_id}", response_class=FileResponse)
async def download_compressed_file(file_id: str):
    """Download a compressed file by its ID."""
    path = get_temp_filepath(os.path.basename(file_id), f"_compressed{COMPRESSED_SUFFIX}")
    return _serve(path, "text/plain", f"{file_id}{COMPRESSED_SUFFIX}")


@router.get("/download/raw/{file_id}", response_class=FileResponse)
async def download_raw_file(file_id: str):
    """Download a decompressed raw image by its ID."""
    path = get_temp_filepath(os.path.basename(file_id), "_decompressed.txt")
    return _serve(path, "text/plain", f"{file_id}.txt")


@router.get("/download/png/{file_id}", response_class=FileResponse)
async def download_png_file(file_id: str):
    """Download a decompressed image as PNG by its ID."""
    path = get_temp_filepath(os.path.basename(file_id), "_decompressed.png")
    return _serve(path, "image/png", f"{file_id}.png")
