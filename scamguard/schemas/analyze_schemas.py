from pydantic import AliasChoices, BaseModel, Field, field_validator
from typing import List, Optional


class FindingSchema(BaseModel):
    """One matched scam pattern."""
    category: str
    label: str


class ScanResponse(BaseModel):
    score: int = Field(..., ge=0, le=100)
    status: str  # "Low Risk" | "Medium Risk" | "High Risk"
    status_label: str
    status_color: str  # display only
    reasons: List[FindingSchema]
    recommendation: str


class ImageScanResponse(ScanResponse):
    extracted_text: str


class PitchRequest(BaseModel):
    """Pitch analysis request. Accepts the original camelCase keys as well."""
    pitch_text: Optional[str] = Field(None, validation_alias=AliasChoices("pitch_text", "pitchText"))
    system_prompt: Optional[str] = Field(None, validation_alias=AliasChoices("system_prompt", "systemPrompt"))


class RedFlag(BaseModel):
    title: str
    explanation: str


class PitchAnalysisResponse(BaseModel):
    """LLM verdict on an investment pitch (1-10 scale, independent of the rule score)."""
    risk_score: int = Field(..., ge=1, le=10, validation_alias=AliasChoices("risk_score", "riskScore"))
    risk_label: str = ""
    red_flags: List[RedFlag] = Field(default_factory=list, validation_alias=AliasChoices("red_flags", "redFlags"))
    summary: str

    @field_validator("risk_score", mode="before")
    @classmethod
    def _coerce_score(cls, value):
        # models sometimes answer "8", "8/10" or 7.5
        if isinstance(value, str):
            value = value.split("/", 1)[0].strip()
        try:
            return int(float(value))
        except (TypeError, ValueError, OverflowError):  # "inf", 1e999
            return value
