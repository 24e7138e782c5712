import re

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Collapse every whitespace run (newlines and tabs included) into one space."""
    text = text or ""
    text = _WHITESPACE_RE.sub(" ", text)
    return text.strip()
