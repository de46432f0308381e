# src/pagespec/utils/url_utils.py
import logging
from typing import Optional
from urllib.parse import urljoin, urlparse

logger = logging.getLogger(__name__)

NON_NAVIGABLE_PREFIXES = ('#', 'javascript:', 'mailto:', 'tel:')
DEFAULT_PORTS = {'http': 80, 'https': 443}


class UrlUtils:
    """A collection of static methods for URL resolution and origin checks."""

    @staticmethod
    def is_navigable_href(href: Optional[str]) -> bool:
        """False for empty hrefs, fragments and script/mail/phone pseudo-links."""
        return bool(href) and not href.startswith(NON_NAVIGABLE_PREFIXES)

    @staticmethod
    def resolve(base_url: str, href: str) -> Optional[str]:
        """
        Resolves `href` against `base_url` into an absolute URL.
        Returns None when the result has no scheme/host or cannot be parsed.
        """
        try:
            absolute = urljoin(base_url, href)
            parsed = urlparse(absolute)
            # Accessing .port validates it (raises ValueError on garbage ports)
            parsed.port
        except ValueError:
            logger.debug("Could not resolve href %r against %r", href, base_url)
            return None
        if not parsed.scheme or not parsed.netloc:
            return None
        return absolute

    @staticmethod
    def _origin(url: str):
        parsed = urlparse(url)
        scheme = parsed.scheme.lower()
        port = parsed.port or DEFAULT_PORTS.get(scheme)
        return scheme, (parsed.hostname or '').lower(), port

    @staticmethod
    def is_internal_url(url: str, base_url: str) -> bool:
        """Same-origin check: scheme, hostname and (default-normalized) port must all match."""
        try:
            return UrlUtils._origin(url) == UrlUtils._origin(base_url)
        except ValueError:
            return False
