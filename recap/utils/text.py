"""
Text helpers shared by the summary manager, exporter and email generator.
"""
import re

_HEADING = re.compile(r'#{1,6}\s*')
_BOLD = re.compile(r'\*\*(.*?)\*\*')
_ITALIC = re.compile(r'\*(.*?)\*')
_LINK = re.compile(r'\[([^\]]+)\]\([^)]+\)')
_INLINE_CODE = re.compile(r'`([^`]+)`')
_LIST_BULLET = re.compile(r'^[-*+]\s+', re.MULTILINE)

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')


def count_words(text: str) -> int:
    """Count whitespace-delimited, non-empty tokens."""
    if not text:
        return 0
    return len(text.split())


def strip_markup(text: str) -> str:
    """
    Remove lightweight markdown so the text reads cleanly in a document.

    Handles heading markers, bold/italic, links (text kept), inline code and
    list bullets (converted to "•"). Nested or malformed markup is left as is.
    """
    if not text:
        return ""
    # Bullets first so "* item" is not read as an italic marker
    cleaned = _LIST_BULLET.sub('• ', text)
    cleaned = _HEADING.sub('', cleaned)
    cleaned = _BOLD.sub(r'\1', cleaned)
    cleaned = _ITALIC.sub(r'\1', cleaned)
    cleaned = _LINK.sub(r'\1', cleaned)
    cleaned = _INLINE_CODE.sub(r'\1', cleaned)
    return cleaned


def is_valid_email(address) -> bool:
    """Check an address has the local@domain.tld shape."""
    return isinstance(address, str) and bool(EMAIL_PATTERN.match(address.strip()))
