# src/pagespec/dom/models.py
from typing import Optional

from bs4 import BeautifulSoup, Tag
from pydantic import BaseModel, ConfigDict


class HTMLDocument(BaseModel):
    """
    Represents a parsed, rendered HTML page.

    The soup is a read-only snapshot: pipeline stages query it through the
    free functions in `pagespec.dom.query` and never modify it, so one
    document can be sectionized any number of times with identical results.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    raw_url: str = ""
    soup: Optional[BeautifulSoup] = None

    @property
    def is_empty(self) -> bool:
        return self.soup is None

    @property
    def root(self) -> Optional[Tag]:
        """The <body> element, or the document itself for body-less fragments."""
        if self.soup is None:
            return None
        return self.soup.body or self.soup
