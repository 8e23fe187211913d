"""
FastAPI Server for Boundary Extraction

Provides REST endpoints that extract the marker boundary from one image or
overlay the boundaries of several images on a shared canvas.
"""

import logging
from typing import List, Optional

import numpy as np
from fastapi import FastAPI, HTTPException, UploadFile, File
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from boundary_tracer.config.extraction_config import ExtractionConfig
from boundary_tracer.extraction.extractor import BoundaryExtractor
from boundary_tracer.extraction.models import ExtractionResult
from boundary_tracer.processing.aggregator import MultiImageAggregator
from boundary_tracer.processing.image_io import (
    image_from_base64,
    image_from_bytes,
    image_to_base64,
)

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Boundary Tracer API",
    description="Extracts the closed boundary outlined by purple/orange markers",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

extractor = BoundaryExtractor(ExtractionConfig.default())


class Base64ImageRequest(BaseModel):
    """Request body for base64-encoded boundary extraction"""
    image: str  # Base64-encoded image (with or without data URL prefix)
    include_image: bool = False  # Return the rendered image as base64 PNG


class CombineRequest(BaseModel):
    """Request body for the combined overlay"""
    images: List[str]  # Base64-encoded images, drawn in this order


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    version: str


def _result_payload(result: ExtractionResult, include_image: bool) -> dict:
    output = result.to_dict()
    if include_image and result.image is not None:
        output["image"] = image_to_base64(result.image)
    return output


def _run_extraction(image: Optional[np.ndarray], include_image: bool, source: str) -> dict:
    if image is None:
        raise HTTPException(status_code=400, detail="Failed to decode image")

    logger.info(f"Image decoded: {image.shape[1]}x{image.shape[0]}")
    result = extractor.process(image, source=source)
    logger.info(f"Extraction complete: {result.status.value}")
    return _result_payload(result, include_image)


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint"""
    return HealthResponse(status="healthy", version="1.0.0")


@app.get("/extract/config")
async def get_default_config():
    """Get the default extraction configuration"""
    return ExtractionConfig.default().to_dict()


@app.post("/extract")
async def extract_base64(request: Base64ImageRequest):
    """
    Extract the boundary from a base64-encoded image.

    A missing boundary is not an error: the response status is
    "no_boundary" and the boundary field is null.
    """
    logger.info("Received extraction request")
    image = image_from_base64(request.image)
    return _run_extraction(image, request.include_image, source="request")


@app.post("/extract/upload")
async def extract_upload(
    file: UploadFile = File(...),
    include_image: bool = False,
):
    """
    Extract the boundary from an uploaded image file.

    Accepts JPEG, PNG image files.
    """
    logger.info(f"Received file upload: {file.filename}")
    contents = await file.read()
    image = image_from_bytes(contents)
    return _run_extraction(image, include_image, source=file.filename or "upload")


@app.post("/combine")
async def combine_base64(request: CombineRequest):
    """
    Overlay the boundaries of several images on one white canvas.

    Images that fail to decode or have no boundary are reported per item
    and skipped.
    """
    logger.info(f"Received combine request with {len(request.images)} images")

    sources = []
    decode_failed = set()
    for index, encoded in enumerate(request.images):
        image = image_from_base64(encoded)
        if image is None:
            decode_failed.add(index)
        else:
            sources.append(image)

    aggregator = MultiImageAggregator(extractor=extractor)
    batch = aggregator.run_combined(sources)

    results = []
    decoded = iter(batch.results)
    for index in range(len(request.images)):
        if index in decode_failed:
            results.append(ExtractionResult.load_failure(source=f"image_{index}").to_dict())
        else:
            result = next(decoded)
            result.source = f"image_{index}"
            results.append(result.to_dict())

    return {
        "results": results,
        "drawn_count": batch.drawn_count,
        "canvas": image_to_base64(batch.canvas) if batch.canvas is not None else None,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
