"""Runtime helpers for getting OCR results in and out of the parser (non-HTTP)."""

import io
import json
import time
from pathlib import Path
from typing import Any

import httpx

from receiptlens.runtime.logging import get_logger

logger = get_logger(__name__)

MAX_IMAGE_DIMENSION = 3000  # Downscale uploads if either side exceeds this
OCR_REQUEST_TIMEOUT = 60.0


class OCRServiceUnavailable(RuntimeError):
    """Raised when the OCR service cannot be reached or returns an error."""


class InvalidOCRResult(ValueError):
    """Raised when an OCR document does not look like a Vision text-detection response."""


class InvalidReceiptImage(ValueError):
    """Raised when a receipt file cannot be read as an image."""


def unwrap_ocr_response(document: Any) -> dict[str, Any]:
    """
    Return the single image response inside an OCR document.

    Accepts either a bare response ({"textAnnotations": [...]}) or a batch
    envelope ({"responses": [{...}]}), using the first response of a batch.
    """
    if not isinstance(document, dict):
        raise InvalidOCRResult(f"Expected a JSON object, got {type(document).__name__}")

    if "responses" in document:
        responses = document["responses"]
        if not isinstance(responses, list):
            raise InvalidOCRResult("'responses' must be a list")
        if not responses:
            return {"textAnnotations": []}
        document = responses[0]
        if not isinstance(document, dict):
            raise InvalidOCRResult("OCR response entries must be JSON objects")

    error = document.get("error")
    if error:
        message = error.get("message") if isinstance(error, dict) else str(error)
        raise InvalidOCRResult(f"OCR response reports an error: {message}")

    annotations = document.get("textAnnotations", [])
    if not isinstance(annotations, list):
        raise InvalidOCRResult("'textAnnotations' must be a list")
    for annotation in annotations:
        _validate_annotation(annotation)
    return document


def _validate_annotation(annotation: Any) -> None:
    if not isinstance(annotation, dict):
        raise InvalidOCRResult("Every text annotation must be a JSON object")

    description = annotation.get("description")
    if description is not None and not isinstance(description, str):
        raise InvalidOCRResult(f"Annotation 'description' must be a string, got {type(description).__name__}")

    bounding_poly = annotation.get("boundingPoly")
    if bounding_poly is None:
        return
    if not isinstance(bounding_poly, dict):
        raise InvalidOCRResult("Annotation 'boundingPoly' must be a JSON object")

    vertices = bounding_poly.get("vertices")
    if vertices is None:
        return
    if not isinstance(vertices, list):
        raise InvalidOCRResult("'boundingPoly.vertices' must be a list")
    for vertex in vertices:
        if not isinstance(vertex, dict):
            raise InvalidOCRResult("Every bounding-box vertex must be a JSON object")
        for axis in ("x", "y"):
            value = vertex.get(axis)
            # bool is an int subclass but never a coordinate
            if value is not None and (isinstance(value, bool) or not isinstance(value, (int, float))):
                raise InvalidOCRResult(f"Vertex '{axis}' must be a number, got {value!r}")


def load_ocr_result(json_path: Path) -> dict[str, Any]:
    """Load a saved OCR JSON file."""
    if not json_path.exists():
        raise FileNotFoundError(f"OCR JSON not found: {json_path}")

    try:
        document = json.loads(json_path.read_text())
    except json.JSONDecodeError as e:
        raise InvalidOCRResult(f"{json_path} is not valid JSON: {e}") from e
    return unwrap_ocr_response(document)


def save_ocr_json(ocr_result: dict[str, Any], output_path: Path) -> Path:
    """Save OCR result JSON for debugging or re-parsing later."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(ocr_result, indent=2))
    logger.debug("OCR JSON saved to: %s", output_path)
    return output_path


def resize_image_bytes(image_bytes: bytes, max_dimension: int = MAX_IMAGE_DIMENSION) -> bytes:
    """
    Downscale image bytes if either side exceeds max_dimension.

    Args:
        image_bytes: Image data as bytes
        max_dimension: Maximum allowed dimension (width or height)

    Returns:
        Image bytes (JPEG format), resized if necessary
    """
    from PIL import Image, ImageOps

    img = Image.open(io.BytesIO(image_bytes))

    # Apply EXIF orientation so OCR sees the receipt upright
    img = ImageOps.exif_transpose(img)

    width, height = img.size
    if width > max_dimension or height > max_dimension:
        if width > height:
            new_width = max_dimension
            new_height = int(height * (max_dimension / width))
        else:
            new_height = max_dimension
            new_width = int(width * (max_dimension / height))
        img = img.resize((new_width, new_height), Image.Resampling.LANCZOS)

    buffer = io.BytesIO()
    img.convert("RGB").save(buffer, format="JPEG", quality=95)
    return buffer.getvalue()


def call_ocr_service(receipt_path: Path, ocr_url: str) -> dict[str, Any]:
    """
    Send a receipt image to the OCR service and return its text-detection response.

    The service is expected to answer POST {ocr_url}/ocr with a Vision-style
    JSON body (textAnnotations, or a {"responses": [...]} batch).
    """
    ocr_url = ocr_url.rstrip("/")
    logger.info("Sending receipt to OCR service at %s...", ocr_url)

    # PIL.UnidentifiedImageError is an OSError
    try:
        image_bytes = resize_image_bytes(receipt_path.read_bytes())
    except OSError as e:
        logger.error("Cannot read receipt image %s: %s", receipt_path, e)
        raise InvalidReceiptImage(f"{receipt_path} is not a readable image: {e}") from e

    try:
        start_time = time.time()
        response = httpx.post(
            f"{ocr_url}/ocr",
            files={"file": (receipt_path.name, image_bytes, "image/jpeg")},
            timeout=OCR_REQUEST_TIMEOUT,
        )
        elapsed_time = time.time() - start_time
        logger.info("OCR service returned in %.2f seconds", elapsed_time)

        if response.status_code != 200:
            logger.error("OCR service error: %s", response.status_code)
            raise OCRServiceUnavailable(f"OCR service error: {response.status_code}")

        try:
            document = response.json()
        except json.JSONDecodeError as e:
            raise InvalidOCRResult(f"OCR service returned invalid JSON: {e}") from e
        return unwrap_ocr_response(document)

    except httpx.RequestError as e:
        logger.error("Failed to connect to OCR service: %s", e)
        raise OCRServiceUnavailable(f"Failed to connect to OCR service: {e}") from e
