import pytest

from pagespec.model import Cta, DomAnchor, Form, Media, Section


@pytest.fixture
def make_section():
    def _make(section_id="sec_001", type="unknown", heading=None, texts=0, media=0, ctas=0, forms=0):
        return Section(
            id=section_id,
            type=type,
            heading=heading,
            text_blocks=[f"Text block number {i}" for i in range(texts)],
            ctas=[Cta(text=f"Action {i}", href=f"/a{i}") for i in range(ctas)],
            media=[Media(type="image", src=f"/img{i}.png") for i in range(media)],
            dom_anchor=DomAnchor(strategy="path", value="section-0"),
            forms=[Form(fields=[]) for _ in range(forms)],
        )
    return _make
