# src/pagespec/dom/builder.py
import logging

from bs4 import BeautifulSoup

from .models import HTMLDocument

logger = logging.getLogger(__name__)


class DOMBuilder:
    """
    Builder responsible for parsing raw rendered HTML into an HTMLDocument snapshot.
    """

    def parse_doc(self, url: str, html: str) -> HTMLDocument:
        """
        Parses raw HTML content into an HTMLDocument.

        Args:
            url (str): The URL of the page being parsed (used as base URL for links).
            html (str): The raw HTML string.

        Returns:
            HTMLDocument: The parsed document; `soup` is None for empty input.
        """
        if not html or not html.strip():
            logger.debug("Empty HTML for %s, returning empty document.", url or "<no url>")
            return HTMLDocument(raw_url=url or "")

        # Basic cleanup of potentially dirty HTML (e.g., BOM)
        clean_html = html.replace('\ufeff', '').strip()
        soup = BeautifulSoup(clean_html, 'html.parser')

        return HTMLDocument(raw_url=url or "", soup=soup)


def parse_html(html: str, url: str = "") -> HTMLDocument:
    """Shortcut for one-off parsing without holding a builder."""
    return DOMBuilder().parse_doc(url, html)
