from typing import Optional

from fastapi import HTTPException, status
from openai import OpenAIError
from pydantic import ValidationError

from scamguard.config import settings
from scamguard.schemas.analyze_schemas import PitchAnalysisResponse
from scamguard.services.llm_client import LLMClient, LLMResponseError
from scamguard.utils.logging_config import StructuredLogger, track_analysis

logger = StructuredLogger(__name__)


def pitch_risk_label(risk_score: int) -> str:
    """Label for the LLM's 1-10 pitch score."""
    if risk_score >= 8:
        return "High Risk"
    if risk_score >= 5:
        return "Medium Risk"
    return "Low Risk"


@track_analysis("pitch")
def analyze_pitch_with_llm(
    pitch_text: Optional[str],
    system_prompt: Optional[str] = None,
) -> PitchAnalysisResponse:
    """
    LLM pitch analyzer.

    Separate from the rule-based scorer: failures here are reported as
    HTTP errors and never replaced by a heuristic score.
    """
    if not pitch_text or not pitch_text.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing pitch text.")

    if not settings.gemini_api_key:
        logger.error("GEMINI_API_KEY is not set")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server configuration error",
        )

    llm = LLMClient()
    try:
        raw = llm.analyze_pitch(pitch_text, system_prompt)
    except OpenAIError as e:
        logger.error("Gemini request failed", error=str(e), error_type=type(e).__name__)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="AI service unavailable",
        ) from e
    except LLMResponseError as e:
        logger.error("Invalid response from Gemini", error=str(e))
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Invalid AI response") from e

    try:
        result = PitchAnalysisResponse.model_validate(raw)
    except ValidationError as e:
        logger.error("Gemini response failed validation", error=str(e))
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Invalid AI response") from e

    result.risk_label = pitch_risk_label(result.risk_score)
    logger.info("Pitch analyzed", risk_score=result.risk_score, red_flags=len(result.red_flags))
    return result
