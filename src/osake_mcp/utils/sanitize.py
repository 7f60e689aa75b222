"""Text sanitization utilities."""

import re

ELLIPSIS = "…"


def sanitize_text(text: str | None, max_length: int = 100) -> str | None:
    """
    Sanitize untrusted text fields.

    Removes control characters and truncates to max_length, appending an
    ellipsis when something was cut. Apply to: name, description, sector.

    Args:
        text: Text to sanitize (may be None)
        max_length: Maximum length before truncation

    Returns:
        Sanitized text or None if input was None
    """
    if text is None:
        return None

    # Remove control characters (including \r, \x00-\x1f, \x7f-\x9f)
    text = re.sub(r"[\x00-\x1f\x7f-\x9f]", "", text).strip()

    if len(text) > max_length:
        text = text[:max_length] + ELLIPSIS

    return text
