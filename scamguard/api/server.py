import uuid
from typing import Optional

from fastapi import FastAPI, Depends, Form, File, UploadFile, Request
from fastapi.middleware.cors import CORSMiddleware

from scamguard import __version__
from scamguard.config import settings
from scamguard.schemas.analyze_schemas import (
    ScanResponse,
    ImageScanResponse,
    PitchRequest,
    PitchAnalysisResponse,
)
from scamguard.pipelines.text_pipeline import scan_text
from scamguard.pipelines.image_pipeline import scan_image
from scamguard.pipelines.pitch_pipeline import analyze_pitch_with_llm
from scamguard.services.risk_service import SCORE_CEILING, HIGH_RISK_THRESHOLD, MEDIUM_RISK_THRESHOLD
from scamguard.services.rules import describe_rules
from scamguard.api.security import verify_api_token, check_rate_limit
from scamguard.utils.logging_config import metrics, request_id_var, StructuredLogger, init_logging

# Initialize structured logging
init_logging()

logger = StructuredLogger(__name__)

app = FastAPI(
    title="ScamGuard API",
    version=__version__,
    description="Rule-based scam risk scoring for pasted text and screenshots, plus an LLM pitch analyzer",
    docs_url="/docs" if settings.debug else None,  # Disable docs in production
    redoc_url="/redoc" if settings.debug else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    if settings.is_production:
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
    return response


@app.middleware("http")
async def add_rate_limit_headers(request: Request, call_next):
    response = await call_next(request)
    if hasattr(request.state, "rate_limit_remaining"):
        response.headers["X-RateLimit-Limit"] = str(request.state.rate_limit_limit)
        response.headers["X-RateLimit-Remaining"] = str(request.state.rate_limit_remaining)
    return response


@app.middleware("http")
async def assign_request_id(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    token = request_id_var.set(request_id)
    try:
        response = await call_next(request)
    finally:
        request_id_var.reset(token)
    response.headers["X-Request-ID"] = request_id
    return response


protected = [Depends(verify_api_token), Depends(check_rate_limit)]


@app.get("/health")
def health():
    """Health check endpoint - no auth required."""
    return {"status": "ok"}


@app.get("/status")
def status_info():
    """API status plus the scoring calibration in effect."""
    return {
        "status": "ok",
        "version": __version__,
        "environment": settings.environment,
        "auth_enabled": bool(settings.api_token),
        "llm_configured": bool(settings.gemini_api_key),
        "rate_limit": {
            "requests": settings.rate_limit_requests,
            "window_seconds": settings.rate_limit_window,
        },
        "scoring": {
            "ceiling": SCORE_CEILING,
            "thresholds": {"high": HIGH_RISK_THRESHOLD, "medium": MEDIUM_RISK_THRESHOLD},
            "categories": describe_rules(),
        },
    }


@app.get("/metrics", dependencies=[Depends(verify_api_token)])
def get_metrics():
    return metrics.get_stats()


@app.post("/scan/text", response_model=ScanResponse, dependencies=protected)
def scan_text_endpoint(text: Optional[str] = Form(None)):
    """Score pasted text against the scam pattern rules."""
    return scan_text(text)


@app.post("/scan/image", response_model=ImageScanResponse, dependencies=protected)
async def scan_image_endpoint(file: Optional[UploadFile] = File(None)):
    """OCR an uploaded screenshot or photo, then score the extracted text."""
    return await scan_image(file)


@app.post("/analyze/pitch", response_model=PitchAnalysisResponse, dependencies=protected)
def analyze_pitch_endpoint(payload: PitchRequest):
    """
    Ask the LLM for an investment-pitch risk assessment.

    Independent of /scan/text: this path needs network access and a
    configured GEMINI_API_KEY.
    """
    return analyze_pitch_with_llm(payload.pitch_text, payload.system_prompt)
