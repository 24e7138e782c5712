import json
import logging
from typing import Dict, Any, Optional

from openai import OpenAI

from scamguard.config import settings

logger = logging.getLogger(__name__)


DEFAULT_PITCH_PROMPT = """
You are "ScamGuard AI," an expert investment analyst specializing in detecting scams, red flags, and deceptive language in investment pitches. Your task is to analyze the user-provided text with a highly critical eye.

Analyze the following investment pitch and provide the following in a JSON object:
1.  A "riskScore" from 1 (very safe) to 10 (very high risk/likely scam).
2.  An array of "redFlags", where each object has a "title" and a detailed "explanation" in plain English. Identify at least 3 distinct red flags.
3.  A final "summary" that provides a concise, easy-to-understand verdict on the investment's potential risks.

Focus on identifying common scam tactics such as:
- Guarantees of high or unrealistic returns.
- Claims of "no risk" or "secret" methods.
- High-pressure sales tactics and urgency (e.g., "act now," "limited time").
- Vague or overly complex technical explanations (buzzwords without substance).
- Lack of information about the team or anonymous founders.
- Unrealistic market projections.

Your tone should be cautious, educational, and direct. Do not provide financial advice, only risk analysis based on the text.
""".strip()


class LLMResponseError(ValueError):
    """The model answered, but not with a usable JSON object."""


def _strip_code_fence(content: str) -> str:
    content = content.strip()
    if content.startswith("```"):
        content = content.split("\n", 1)[1] if "\n" in content else ""
        if content.rstrip().endswith("```"):
            content = content.rstrip()[:-3]
    return content.strip()


class LLMClient:
    """
    Wrapper around the OpenAI SDK, pointed at Gemini's OpenAI-compatible
    endpoint, for investment pitch analysis.

    Transport errors are raised as ``openai.OpenAIError``; unusable output
    as ``LLMResponseError``. Neither is converted into a risk score here.
    """

    def __init__(self, model: Optional[str] = None, client: Optional[OpenAI] = None):
        self.client = client or OpenAI(
            api_key=settings.gemini_api_key,
            base_url=settings.gemini_base_url,
            timeout=settings.llm_timeout,
            max_retries=1,
        )
        self.model = model or settings.gemini_model

    def analyze_pitch(self, pitch_text: str, system_prompt: Optional[str] = None) -> Dict[str, Any]:
        response = self.client.chat.completions.create(
            model=self.model,
            response_format={"type": "json_object"},
            max_tokens=settings.llm_max_tokens,
            messages=[
                {"role": "system", "content": system_prompt or DEFAULT_PITCH_PROMPT},
                {"role": "user", "content": f'User Pitch: "{pitch_text}"'},
            ],
        )

        if not response.choices or not response.choices[0].message.content:
            raise LLMResponseError("Invalid response structure from the AI model.")

        content = _strip_code_fence(response.choices[0].message.content)
        try:
            parsed = json.loads(content)
        except json.JSONDecodeError as e:
            logger.warning(f"Model returned non-JSON content: {content[:200]!r}")
            raise LLMResponseError("AI model returned malformed JSON.") from e

        if not isinstance(parsed, dict):
            raise LLMResponseError("AI model did not return a JSON object.")
        return parsed
