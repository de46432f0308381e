# src/pagespec/utils/text_utils.py
import re

ZERO_WIDTH_RE = re.compile('[\u200b-\u200d\ufeff]')
WHITESPACE_RE = re.compile(r'\s+')


def normalize_whitespace(text: str) -> str:
    """Removes zero-width characters, collapses whitespace runs and trims."""
    if not text:
        return ""
    return WHITESPACE_RE.sub(' ', ZERO_WIDTH_RE.sub('', text)).strip()


def truncate(text: str, max_length: int, suffix: str = '...') -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length - len(suffix)] + suffix
