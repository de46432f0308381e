from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from bs4 import BeautifulSoup

from pagespec.model import OpenGraph, PageMeta

OG_FIELDS = ("title", "description", "image", "url", "type")


class MetaParseService:
    """
    Reads page-level metadata from the document <head>.
    Stateless apart from the parsed soup; callers decide whether to use it
    or the metadata captured alongside the rendered HTML.
    """

    def __init__(self, page_content: str):
        self.soup = BeautifulSoup(page_content or "", "html.parser")

    def extract_page_title(self) -> str:
        el = self.soup.find("title")
        return el.get_text(strip=True) if el else ""

    def extract_meta_description(self) -> Optional[str]:
        meta = self.soup.find("meta", attrs={"name": "description"})
        content = (meta.get("content") or "").strip() if meta else ""
        return content or None

    def extract_canonical_tag(self) -> Optional[str]:
        link = self.soup.find("link", attrs={"rel": "canonical"})
        href = (link.get("href") or "").strip() if link else ""
        return href or None

    def extract_open_graph_tags(self) -> Dict[str, str]:
        """All og:* properties, keyed without the prefix."""
        og = {}
        for tag in self.soup.find_all("meta"):
            prop = tag.get("property") or ""
            if prop.startswith("og:"):
                og[prop[3:]] = tag.get("content") or ""
        return og

    def extract_page_meta(self) -> PageMeta:
        og = {k: v for k, v in self.extract_open_graph_tags().items() if k in OG_FIELDS}
        return PageMeta(
            title=self.extract_page_title(),
            description=self.extract_meta_description(),
            canonical=self.extract_canonical_tag(),
            og=OpenGraph(**og) if og else None,
        )


def page_meta_from_record(record: Mapping[str, Any]) -> PageMeta:
    """
    Converts a captured meta.json record into PageMeta.
    Accepts both `description` and the capture format's `metaDescription`.
    """
    og = record.get("og")
    return PageMeta(
        title=record.get("title") or "",
        description=record.get("description") or record.get("metaDescription"),
        canonical=record.get("canonical"),
        og=OpenGraph.model_validate(og) if og else None,
    )
