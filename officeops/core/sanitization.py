"""Input sanitization and boundary normalization utilities."""
import re
from typing import Any, List, Optional


# Maximum length constraints for security
MAX_TITLE_LENGTH = 255
MAX_REASON_LENGTH = 1000
MAX_URL_LENGTH = 500

_TRUE_STRINGS = {"1", "true", "yes", "y", "on"}


def sanitize_text(text: str, max_length: Optional[int] = None, strip_html: bool = True) -> str:
    """
    Sanitize text input to prevent XSS attacks.

    Strips HTML tags and normalizes whitespace. Entities are not escaped;
    clients are expected to escape on output.

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

    # Enforce maximum length before processing to prevent length-based attacks
    if max_length and len(sanitized) > max_length:
        raise ValueError(f"Input exceeds maximum length of {max_length} characters")

    if strip_html:
        sanitized = re.sub(r'<[^>]*>', '', sanitized)

    # Reject inputs that still contain HTML-like patterns after stripping
    if '<' in sanitized or '>' in sanitized:
        raise ValueError("Input contains invalid HTML-like patterns")

    sanitized = re.sub(r'\s+', ' ', sanitized)

    return sanitized


def sanitize_title(title: str) -> str:
    """
    Sanitize a meeting, room, SOP or ticket title.

    Raises:
        ValueError: If the title is empty after sanitizing or too long
    """
    sanitized = sanitize_text(title, max_length=MAX_TITLE_LENGTH)

    if not sanitized:
        raise ValueError("Title cannot be empty")

    return sanitized


def sanitize_file_url(file_url: str) -> str:
    """
    Validate a file reference (absolute URL or relative upload path).

    Raises:
        ValueError: If the reference is empty, too long or contains whitespace
    """
    if not isinstance(file_url, str):
        raise ValueError("file_url must be a string")

    sanitized = file_url.strip()
    if not sanitized:
        raise ValueError("file_url cannot be empty")

    if len(sanitized) > MAX_URL_LENGTH:
        raise ValueError(f"file_url exceeds maximum length of {MAX_URL_LENGTH} characters")

    if re.search(r'\s', sanitized):
        raise ValueError("file_url cannot contain whitespace")

    return sanitized


def parse_bool(value: Any) -> bool:
    """Interpret 1/0, yes/no, true/false, on/off style flags."""
    if isinstance(value, bool):
        return value
    if value is None or value == "":
        return False
    if isinstance(value, (int, float)):
        return bool(int(value))
    return str(value).strip().lower() in _TRUE_STRINGS


def parse_id_list(value: Any) -> Optional[List[int]]:
    """
    Normalize a user-id list from any accepted input shape.

    Accepts a single id, a comma-separated string, or a list/tuple of ids
    (which may themselves be numeric strings). Non-positive and non-numeric
    entries are dropped, duplicates collapse, first-seen order is kept.

    Returns:
        None when the value is absent ("leave unchanged"), otherwise the
        sanitized list, which may be empty ("clear").
    """
    if value is None:
        return None

    if isinstance(value, bool):
        raw_items: List[Any] = []
    elif isinstance(value, (int, float)):
        raw_items = [value]
    elif isinstance(value, str):
        raw_items = [part.strip() for part in value.split(',')]
    elif isinstance(value, (list, tuple, set)):
        raw_items = list(value)
    else:
        raise ValueError("Expected an id, a comma-separated string or a list of ids")

    seen = set()
    ids: List[int] = []
    for item in raw_items:
        if isinstance(item, bool):
            continue
        if isinstance(item, float):
            # JSON numbers like 3.0; fractional ids are dropped
            if not item.is_integer():
                continue
            number = int(item)
        else:
            try:
                number = int(str(item).strip())
            except (TypeError, ValueError):
                continue
        if number <= 0 or number in seen:
            continue
        seen.add(number)
        ids.append(number)

    return ids
