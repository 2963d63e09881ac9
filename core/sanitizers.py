# core/sanitizers.py
"""
Input sanitization for project content.

All user-generated text passes through these functions before it is
stored. Fields are plain text: markup is stripped, not escaped.
"""
import html
import re
from typing import Optional

import bleach


def sanitize_text(text: Optional[str], max_length: Optional[int] = None, strip: bool = True) -> str:
    """
    Sanitize plain text input.

    - Strips leading/trailing whitespace
    - Removes control characters
    - Removes HTML tags
    - Enforces maximum length
    - Returns empty string for None input
    """
    if text is None:
        return ""

    text = str(text)
    if strip:
        text = text.strip()

    # Remove control characters except newlines and tabs
    text = re.sub(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]', '', text)
    text = strip_tags(text)

    if max_length and len(text) > max_length:
        text = text[:max_length]

    return text


def strip_tags(text: str) -> str:
    # bleach escapes what it keeps; stored values are plain text, so undo that
    return html.unescape(bleach.clean(text, tags=[], attributes={}, strip=True))


def sanitize_title(title: Optional[str]) -> str:
    """
    Sanitize project titles.

    - Max 255 characters
    - No HTML
    - Single line (no newlines)
    """
    text = sanitize_text(title, max_length=255)
    # Replace newlines with spaces
    text = re.sub(r'[\r\n]+', ' ', text)
    # Collapse multiple spaces
    text = re.sub(r'\s+', ' ', text)
    return text


def sanitize_abstract(abstract: Optional[str]) -> str:
    """Max 10000 characters, plain text."""
    return sanitize_text(abstract, max_length=10000)


def normalize_technologies(value) -> list:
    """
    Accepts a list or a comma-separated string; returns trimmed, non-empty,
    de-duplicated tags.
    """
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        return []

    tags = []
    for item in items:
        tag = sanitize_text(item, max_length=64)
        if tag and tag not in tags:
            tags.append(tag)
    return tags
