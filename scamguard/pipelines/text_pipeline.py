from typing import Dict, Any, Optional

from scamguard.services.risk_service import analyze_text
from scamguard.utils.logging_config import StructuredLogger, track_analysis

logger = StructuredLogger(__name__)


@track_analysis("text")
def scan_text(text: Optional[str]) -> Dict[str, Any]:
    """Pasted-text pipeline: rule-based scoring only, no network calls."""
    result = analyze_text(text).to_dict()
    logger.debug(
        "Text scanned",
        characters=len(text or ""),
        score=result["score"],
        findings=len(result["reasons"]),
    )
    return result
