from typing import Dict, Any

from fastapi import UploadFile, HTTPException, status
from starlette.concurrency import run_in_threadpool

from scamguard.config import settings
from scamguard.services.ocr_service import OCRError, extract_text_from_image, validate_image_upload
from scamguard.services.risk_service import analyze_text
from scamguard.utils.logging_config import StructuredLogger, track_analysis

logger = StructuredLogger(__name__)

NO_TEXT_FOUND = "No readable text was found in this image. Try a clearer image with visible text."
OCR_FAILED = "Failed to process the image. Please try again with a different image."


def _rejection(content_type: str, error: str) -> HTTPException:
    code = (
        status.HTTP_415_UNSUPPORTED_MEDIA_TYPE
        if content_type not in settings.accepted_image_types_list
        else status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    )
    return HTTPException(status_code=code, detail=error)


@track_analysis("image")
async def scan_image(upload_file: UploadFile) -> Dict[str, Any]:
    """
    Photo scanner pipeline.

    1) Validate type and size.
    2) OCR the image in a worker thread.
    3) Score the extracted text with the rule-based scorer.
    """
    if upload_file is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="An image file is required.")

    content_type = (upload_file.content_type or "").lower()

    # size is None when the client did not declare it; re-checked after reading
    error = validate_image_upload(content_type, upload_file.size or 0)
    if error:
        raise _rejection(content_type, error)

    data = await upload_file.read()
    if not data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Uploaded file is empty.")

    error = validate_image_upload(content_type, len(data))
    if error:
        raise _rejection(content_type, error)

    try:
        text = await run_in_threadpool(extract_text_from_image, data)
    except OCRError as e:
        logger.warning("OCR failed", filename=upload_file.filename, error=str(e))
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=OCR_FAILED) from e

    if len(text) < settings.ocr_min_text_length:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=NO_TEXT_FOUND)

    result = analyze_text(text).to_dict()
    result["extracted_text"] = text

    logger.info(
        "Image scanned",
        filename=upload_file.filename,
        characters=len(text),
        score=result["score"],
        findings=len(result["reasons"]),
    )
    return result
