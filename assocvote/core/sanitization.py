"""Input sanitization utilities."""
import re
from typing import Optional

from assocvote.core.constants import (
    MAX_DESCRIPTION_LENGTH,
    MAX_OPTION_LENGTH,
    MAX_PROMPT_LENGTH,
    MAX_TITLE_LENGTH,
)


def sanitize_text(text: str, max_length: Optional[int] = None, strip_html: bool = True) -> str:
    """
    Sanitize text input to prevent XSS attacks.

    Note: This function strips HTML tags and normalizes whitespace, but does NOT
    escape HTML entities because the frontend escapes output when rendering.

    Args:
        text: The input text to sanitize
        max_length: Optional maximum length to enforce
        strip_html: Whether to strip HTML tags (default True)

    Returns:
        Sanitized text with HTML tags removed and whitespace normalized

    Raises:
        ValueError: If text exceeds max_length or contains dangerous patterns
    """
    if not isinstance(text, str):
        raise ValueError("Input must be a string")

    sanitized = text.strip()

    if max_length and len(sanitized) > max_length:
        raise ValueError(f"Input exceeds maximum length of {max_length} characters")

    if strip_html:
        sanitized = re.sub(r'<[^>]*>', '', sanitized)

    # Malformed tags survive the strip above
    if '<' in sanitized or '>' in sanitized:
        raise ValueError("Input contains invalid HTML-like patterns")

    sanitized = re.sub(r'\s+', ' ', sanitized)

    return sanitized


def _sanitize_required(value: str, max_length: int, label: str) -> str:
    sanitized = sanitize_text(value, max_length=max_length)
    if not sanitized:
        raise ValueError(f"{label} cannot be empty")
    return sanitized


def sanitize_title(title: str) -> str:
    """Sanitize a vote or survey title."""
    return _sanitize_required(title, MAX_TITLE_LENGTH, "Title")


def sanitize_description(description: str) -> str:
    """Sanitize a free-text description. Empty descriptions are allowed."""
    return sanitize_text(description, max_length=MAX_DESCRIPTION_LENGTH)


def sanitize_prompt(prompt: str) -> str:
    """Sanitize a poll question prompt."""
    return _sanitize_required(prompt, MAX_PROMPT_LENGTH, "Question prompt")


def sanitize_option_content(content: str) -> str:
    """Sanitize the label of a poll option."""
    return _sanitize_required(content, MAX_OPTION_LENGTH, "Option content")
